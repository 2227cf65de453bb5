"""
Health API for the Upraze momentum service.

Lightweight endpoints for operational monitoring without exposing secrets.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from upraze.core.config import config_problems, settings

logger = logging.getLogger("upraze")

root_router = APIRouter(tags=["health"])


@root_router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@root_router.get("/readyz")
def readyz(request: Request):
    """Readiness check: pipeline configuration is usable."""
    problems = config_problems(settings)
    started = getattr(request.app.state, "startup_time", None)
    return {
        "ok": not problems,
        "env": settings.ENV,
        "problems": problems,
        "uptime_s": round(time.time() - started, 1) if started else None,
        "computed_at": datetime.now(timezone.utc).isoformat(),
    }

import logging
import os
import time
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# .env next to the package; tests configure through monkeypatch instead
package_dir = os.path.dirname(os.path.abspath(__file__))
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv(dotenv_path=os.path.join(package_dir, ".env"))

from upraze.core.config import settings, validate_config
from upraze.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from upraze.core.logging import LOGGER_NAME, configure_logging
from upraze.core.middleware.request_id import RequestIdMiddleware
from upraze.api import health, insights, momentum

configure_logging(settings.ENV, settings.LOG_LEVEL)
validate_config(strict=settings.CONFIG_STRICT)

logger = logging.getLogger(LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.startup_time = time.time()
    logger.info(
        "Momentum core ready (alpha=%s, z-window=%s, workers=%s)",
        settings.EMA_ALPHA,
        settings.ZSCORE_WINDOW,
        settings.AGGREGATOR_MAX_WORKERS,
    )
    try:
        yield
    finally:
        logger.info("Momentum core stopped")


app = FastAPI(title="Upraze - Momentum Core", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.root_router)
app.include_router(momentum.router)
app.include_router(insights.router)

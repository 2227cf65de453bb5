# upraze/tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from upraze.core.config import Settings
from upraze.features.momentum.service import MomentumService
from upraze.models.momentum import MomentumScore, Phase, TaskType


@pytest.fixture
def client():
    from upraze.main import app
    return TestClient(app)


@pytest.fixture
def service():
    """Service with default settings, sequential aggregation."""
    return MomentumService(settings_obj=Settings(), max_workers=1)


@pytest.fixture
def rising_values():
    return [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


@pytest.fixture
def daily_timestamps():
    def _make(n: int, start: datetime = datetime(2025, 1, 1, tzinfo=timezone.utc)):
        return [start + timedelta(days=i) for i in range(n)]
    return _make


@pytest.fixture
def make_record():
    """Build a MomentumScore with only the fields a test cares about."""
    def _make(domain: str, velocity: float, streak: int = 0, **overrides) -> MomentumScore:
        fields = dict(
            domain=domain,
            ema=5.0,
            velocity=velocity,
            acceleration=0.0,
            streak=streak,
            momentum_score=50.0,
            phase=Phase.EXPLORE,
            confidence=0.6,
            z=0.0,
            task_type=TaskType.COMPOUNDING,
        )
        fields.update(overrides)
        return MomentumScore(**fields)
    return _make

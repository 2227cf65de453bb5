import dataclasses
import math
from datetime import datetime, timezone

import pytest

from upraze.core.errors import ValidationError
from upraze.features.momentum.features import compute_features


def test_one_record_per_reading():
    records = compute_features([5.0] * 10, [True] * 10)
    assert len(records) == 10
    assert [r.ema for r in records] == [5.0] * 10
    assert all(r.velocity == 0.0 and r.acceleration == 0.0 and r.z == 0.0 for r in records)
    assert [r.streak for r in records] == list(range(1, 11))


def test_empty_history_yields_no_records():
    assert compute_features([], []) == []


def test_streak_follows_event_flags():
    records = compute_features([1, 2, 3, 4, 5, 6], [True, True, False, True, True, True])
    assert [r.streak for r in records] == [1, 2, 0, 1, 2, 3]


def test_velocity_and_acceleration_chain_from_ema():
    records = compute_features([1.0, 4.0, 2.0, 8.0], [True] * 4)
    for i in range(1, len(records)):
        assert records[i].velocity == records[i].ema - records[i - 1].ema
        assert records[i].acceleration == records[i].velocity - records[i - 1].velocity


def test_ema_runs_on_winsorized_readings():
    values = list(range(200))
    records = compute_features(values, [True] * 200)
    # Reading 0 sits below the 1st percentile (2) and is clamped before smoothing
    assert records[0].ema == 2.0


def test_mismatched_lengths_rejected():
    with pytest.raises(ValidationError):
        compute_features([1.0, 2.0, 3.0], [True, False])


def test_non_finite_value_rejected():
    with pytest.raises(ValidationError):
        compute_features([1.0, float("nan")], [True, True])


def test_timestamps_carried_through(daily_timestamps):
    stamps = daily_timestamps(3)
    records = compute_features([1.0, 2.0, 3.0], [True, True, True], timestamps=stamps)
    assert [r.timestamp for r in records] == stamps
    assert records[0].to_dict()["timestamp"] == "2025-01-01T00:00:00+00:00"


def test_unordered_timestamps_rejected():
    t1 = datetime(2025, 1, 2, tzinfo=timezone.utc)
    t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        compute_features([1.0, 2.0], [True, True], timestamps=[t1, t0])


def test_records_are_immutable():
    record = compute_features([1.0], [True])[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.ema = 2.0


def test_recomputation_is_identical():
    values = [3.0, 7.0, 1.0, 9.0, 4.0, 4.0, 6.0]
    flags = [True, False, True, True, False, True, True]
    assert compute_features(values, flags) == compute_features(values, flags)


def test_huge_readings_stay_finite():
    records = compute_features([-1e308, 1e308], [True, True])
    for r in records:
        assert all(math.isfinite(v) for v in (r.ema, r.velocity, r.acceleration, r.z))


def test_overflowing_velocity_rejected():
    # alpha = 1 makes the EMA track raw readings, so velocity = 2e308
    with pytest.raises(ValidationError):
        compute_features([-1e308, 1e308], [True, True], alpha=1.0)

"""
Phase classifier guardrails

Rules are ordered and strict; boundary values fall through to the next rule.
"""

import pytest

from upraze.core.errors import ValidationError
from upraze.features.momentum.phase import classify_features, classify_phase
from upraze.models.momentum import FeatureRecord, Phase


class TestPhaseRules:
    def test_stalled_without_streak_is_archive(self):
        result = classify_phase(ema=5.0, velocity=0.01, acceleration=0.01, streak=0)
        assert result.phase == Phase.ARCHIVE
        assert result.confidence == 0.8

    def test_stalled_with_streak_is_drift(self):
        result = classify_phase(ema=5.0, velocity=-0.01, acceleration=0.0, streak=3)
        assert result.phase == Phase.DRIFT
        assert result.confidence == 0.7

    def test_climbing_and_accelerating_is_ramp(self):
        result = classify_phase(ema=5.0, velocity=0.15, acceleration=0.03, streak=0)
        assert result.phase == Phase.RAMP
        assert result.confidence == 0.8

    @pytest.mark.parametrize("velocity", [0.08, 0.2])
    def test_steady_climb_is_cruise(self, velocity):
        result = classify_phase(ema=5.0, velocity=velocity, acceleration=0.0, streak=2)
        assert result.phase == Phase.CRUISE
        assert result.confidence == 0.7

    @pytest.mark.parametrize("velocity,acceleration", [(-0.08, 0.0), (0.04, 0.03)])
    def test_small_moves_are_explore(self, velocity, acceleration):
        result = classify_phase(ema=5.0, velocity=velocity, acceleration=acceleration, streak=1)
        assert result.phase == Phase.EXPLORE
        assert result.confidence == 0.6

    def test_out_of_band_is_low_confidence_explore(self):
        result = classify_phase(ema=5.0, velocity=-0.5, acceleration=0.3, streak=4)
        assert result.phase == Phase.EXPLORE
        assert result.confidence == 0.5


class TestPhaseBoundaries:
    def test_velocity_exactly_ramp_threshold_is_cruise(self):
        result = classify_phase(ema=5.0, velocity=0.1, acceleration=0.03, streak=0)
        assert result.phase == Phase.CRUISE

    def test_velocity_exactly_stall_threshold_is_explore(self):
        result = classify_phase(ema=5.0, velocity=0.05, acceleration=0.0, streak=0)
        assert result.phase == Phase.EXPLORE
        assert result.confidence == 0.6

    def test_ema_does_not_change_phase(self):
        low = classify_phase(ema=0.0, velocity=0.15, acceleration=0.03, streak=0)
        high = classify_phase(ema=100.0, velocity=0.15, acceleration=0.03, streak=0)
        assert low == high


def test_classify_feature_record():
    record = FeatureRecord(ema=3.0, velocity=0.0, acceleration=0.0, z=0.0, streak=0)
    result = classify_features(record)
    assert result.phase == Phase.ARCHIVE
    assert result.to_dict() == {"phase": "Archive", "confidence": 0.8}


class TestPhaseInputs:
    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    @pytest.mark.parametrize("field", ["ema", "velocity", "acceleration"])
    def test_non_finite_indicator_rejected(self, field, bad):
        inputs = dict(ema=5.0, velocity=0.0, acceleration=0.0, streak=0)
        inputs[field] = bad
        with pytest.raises(ValidationError):
            classify_phase(**inputs)

    @pytest.mark.parametrize("streak", [-1, 2.5, True])
    def test_invalid_streak_rejected(self, streak):
        with pytest.raises(ValidationError):
            classify_phase(ema=5.0, velocity=0.0, acceleration=0.0, streak=streak)

    def test_negative_streak_record_rejected(self):
        record = FeatureRecord(ema=3.0, velocity=0.2, acceleration=0.0, z=0.0, streak=-2)
        with pytest.raises(ValidationError):
            classify_features(record)

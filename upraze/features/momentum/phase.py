"""
Phase Classifier

Rule-based mapping from the latest derived indicators to a momentum phase.
Stateless: a "transition" is just a different answer on the next call.
Rules are evaluated in order and the first match wins; all comparisons are
strict. Non-finite indicators and negative or fractional streaks are rejected
before any rule runs.
"""

from upraze.features.momentum.validators import require_finite, require_streak
from upraze.models.momentum import FeatureRecord, Phase, PhaseRecord


class PhaseClassifier:
    """Deterministic threshold classifier."""

    # Stall band: barely moving and not speeding up
    STALL_VELOCITY = 0.05
    STALL_ACCELERATION = 0.02

    # Ramp: climbing and speeding up
    RAMP_VELOCITY = 0.1
    RAMP_ACCELERATION = 0.02

    # Cruise: climbing at a steady rate
    CRUISE_VELOCITY = 0.05
    CRUISE_ACCELERATION = 0.05

    # Explore: small moves in either direction
    EXPLORE_VELOCITY = 0.1
    EXPLORE_ACCELERATION = 0.1

    @staticmethod
    def classify(ema: float, velocity: float, acceleration: float, streak: int) -> PhaseRecord:
        """
        Classify the current phase.

        `ema` is accepted for interface symmetry; the current rules only look
        at velocity, acceleration and streak.
        """
        ema, velocity, acceleration = require_finite([ema, velocity, acceleration], "phase inputs")
        streak = require_streak(streak)

        abs_velocity = abs(velocity)
        abs_accel = abs(acceleration)

        if abs_velocity < PhaseClassifier.STALL_VELOCITY and abs_accel < PhaseClassifier.STALL_ACCELERATION:
            if streak == 0:
                return PhaseRecord(phase=Phase.ARCHIVE, confidence=0.8)
            return PhaseRecord(phase=Phase.DRIFT, confidence=0.7)

        if velocity > PhaseClassifier.RAMP_VELOCITY and acceleration > PhaseClassifier.RAMP_ACCELERATION:
            return PhaseRecord(phase=Phase.RAMP, confidence=0.8)

        if velocity > PhaseClassifier.CRUISE_VELOCITY and abs_accel < PhaseClassifier.CRUISE_ACCELERATION:
            return PhaseRecord(phase=Phase.CRUISE, confidence=0.7)

        if abs_velocity < PhaseClassifier.EXPLORE_VELOCITY and abs_accel < PhaseClassifier.EXPLORE_ACCELERATION:
            return PhaseRecord(phase=Phase.EXPLORE, confidence=0.6)

        # Anything outside the bands above, e.g. falling fast while accelerating
        return PhaseRecord(phase=Phase.EXPLORE, confidence=0.5)


def classify_phase(ema: float, velocity: float, acceleration: float, streak: int) -> PhaseRecord:
    return PhaseClassifier.classify(ema, velocity, acceleration, streak)


def classify_features(record: FeatureRecord) -> PhaseRecord:
    return PhaseClassifier.classify(record.ema, record.velocity, record.acceleration, record.streak)

"""
Momentum Scoring Engine

Pure, deterministic computation of a 0..100 momentum score.
No external calls, no randomness, no side effects.

Scoring policy:
- Milestone goals are binary: 100 while velocity is positive, else 0
- Every other task type uses a weighted sum
      0.5 * velocity + 0.2 * acceleration + 0.2 * z + 0.1 * streak_score
  mapped to the display range with (sum + 1) * 50
- Sums outside roughly [-1, 1] saturate at 0 or 100 rather than failing
"""

from typing import Optional, Union

from upraze.models.momentum import (
    FeatureRecord,
    MomentumWeights,
    TaskType,
    parse_task_type,
)
from upraze.features.momentum.streaks import STREAK_DECAY_DAYS, streak_score_for
from upraze.features.momentum.validators import require_finite


class MomentumScoringEngine:
    """Pure deterministic momentum scoring."""

    MIN_SCORE = 0.0
    MAX_SCORE = 100.0
    DEFAULT_WEIGHTS = MomentumWeights()

    @staticmethod
    def score(
        velocity: float,
        acceleration: float,
        z: float,
        streak_score: float,
        task_type: Union[TaskType, str, None] = TaskType.COMPOUNDING,
        weights: Optional[MomentumWeights] = None,
    ) -> float:
        """
        Compute the composite score.

        Args:
            velocity: Latest EMA delta
            acceleration: Latest velocity delta
            z: Latest rolling z-score
            streak_score: Bounded streak contribution, 0..1
            task_type: Goal shape (Milestone is binary)
            weights: Override for the default 0.5/0.2/0.2/0.1 weights

        Returns:
            Score clamped to 0..100
        """
        velocity, acceleration, z, streak_score = require_finite(
            [velocity, acceleration, z, streak_score], "score inputs"
        )
        task = parse_task_type(task_type)

        if task == TaskType.MILESTONE:
            return MomentumScoringEngine.MAX_SCORE if velocity > 0 else MomentumScoringEngine.MIN_SCORE

        w = weights or MomentumScoringEngine.DEFAULT_WEIGHTS
        weighted = (
            w.velocity * velocity
            + w.acceleration * acceleration
            + w.z * z
            + w.streak * streak_score
        )
        return MomentumScoringEngine._to_display_range(weighted)

    @staticmethod
    def _to_display_range(weighted: float) -> float:
        return max(
            MomentumScoringEngine.MIN_SCORE,
            min(MomentumScoringEngine.MAX_SCORE, (weighted + 1) * 50),
        )

    @staticmethod
    def score_features(
        record: FeatureRecord,
        task_type: Union[TaskType, str, None] = TaskType.COMPOUNDING,
        weights: Optional[MomentumWeights] = None,
        decay_days: float = STREAK_DECAY_DAYS,
    ) -> float:
        """Score a feature record; the streak score is derived from its streak."""
        return MomentumScoringEngine.score(
            velocity=record.velocity,
            acceleration=record.acceleration,
            z=record.z,
            streak_score=streak_score_for(record.streak, decay_days),
            task_type=task_type,
            weights=weights,
        )


def compute_momentum_score(
    record: FeatureRecord,
    task_type: Union[TaskType, str, None] = TaskType.COMPOUNDING,
    weights: Optional[MomentumWeights] = None,
) -> float:
    return MomentumScoringEngine.score_features(record, task_type, weights)

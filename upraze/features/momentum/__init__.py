"""
Momentum pipeline

Preprocess (winsorize + rolling z) -> smooth (EMA, velocity, acceleration)
-> streaks -> phase + score, per domain.
"""

from upraze.features.momentum.features import compute_features
from upraze.features.momentum.phase import classify_features, classify_phase
from upraze.features.momentum.preprocess import preprocess
from upraze.features.momentum.scoring_engine import compute_momentum_score

__all__ = [
    "classify_features",
    "classify_phase",
    "compute_features",
    "compute_momentum_score",
    "preprocess",
]

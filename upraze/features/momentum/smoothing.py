"""
Recursive smoothing: EMA -> velocity -> acceleration.

EMA_t = alpha * x_t + (1 - alpha) * EMA_{t-1}, seeded with x_0.
velocity_t = EMA_t - EMA_{t-1}; acceleration_t = velocity_t - velocity_{t-1}.
Index 0 of velocity and acceleration is defined as 0.
"""

from typing import List, Sequence

from upraze.features.momentum.validators import require_alpha, require_finite, require_finite_output

EMA_ALPHA = 0.3


def ema(values: Sequence[float], alpha: float = EMA_ALPHA) -> List[float]:
    alpha = require_alpha(alpha)
    clean = require_finite(values)
    if not clean:
        return []

    result = [clean[0]]
    for i in range(1, len(clean)):
        result.append(alpha * clean[i] + (1 - alpha) * result[i - 1])
    return result


def _first_difference(values: Sequence[float], name: str) -> List[float]:
    clean = require_finite(values)
    if not clean:
        return []
    diffs = [0.0] + [clean[i] - clean[i - 1] for i in range(1, len(clean))]
    return require_finite_output(diffs, name)


def velocity(ema_values: Sequence[float]) -> List[float]:
    return _first_difference(ema_values, "velocity")


def acceleration(velocity_values: Sequence[float]) -> List[float]:
    return _first_difference(velocity_values, "acceleration")

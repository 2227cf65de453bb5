"""
Preprocessing for daily domain readings.

winsorize 1% tails -> rolling z-score over the last 60 readings.
Pure functions: same input => identical output, input never mutated.
"""

import math
from typing import List, Sequence

from upraze.core.errors import ValidationError
from upraze.features.momentum.validators import require_finite, require_finite_output

ZSCORE_WINDOW = 60
WINSOR_LOWER_PCT = 0.01
WINSOR_UPPER_PCT = 0.99


def _percentile_index(n: int, pct: float) -> int:
    # floor(n * pct), clamped so tiny histories still index a real sample
    return min(max(int(math.floor(n * pct)), 0), n - 1)


def winsorize(
    values: Sequence[float],
    lower_pct: float = WINSOR_LOWER_PCT,
    upper_pct: float = WINSOR_UPPER_PCT,
) -> List[float]:
    """
    Clamp every value into [p_lower, p_upper] of the series itself.

    Order and length are preserved; no sample is dropped.
    """
    if not (0.0 <= lower_pct < upper_pct <= 1.0):
        raise ValidationError(
            f"winsor bounds must satisfy 0 <= lower < upper <= 1, got {lower_pct}..{upper_pct}"
        )
    clean = require_finite(values)
    if not clean:
        return []

    ordered = sorted(clean)
    n = len(ordered)
    low = ordered[_percentile_index(n, lower_pct)]
    high = ordered[_percentile_index(n, upper_pct)]

    return [min(max(v, low), high) for v in clean]


def rolling_zscore(values: Sequence[float], window: int = ZSCORE_WINDOW) -> List[float]:
    """
    z_i = (x_i - mean) / pstdev over the last min(window, i+1) values.

    A flat window (pstdev == 0) scores 0. Each window is divided by its
    largest magnitude first; z is scale-free and the squares cannot overflow.
    """
    if window < 1:
        raise ValidationError(f"window must be >= 1, got {window}")
    clean = require_finite(values)

    result: List[float] = []
    for i in range(len(clean)):
        start = max(0, i - window + 1)
        window_data = clean[start:i + 1]
        scale = max(abs(v) for v in window_data)
        if scale == 0:
            result.append(0.0)
            continue
        scaled = [v / scale for v in window_data]
        mean = sum(scaled) / len(scaled)
        variance = sum((v - mean) ** 2 for v in scaled) / len(scaled)
        std = math.sqrt(variance)
        result.append(0.0 if std == 0 else (scaled[-1] - mean) / std)
    return require_finite_output(result, "z")


def preprocess(
    values: Sequence[float],
    window: int = ZSCORE_WINDOW,
    lower_pct: float = WINSOR_LOWER_PCT,
    upper_pct: float = WINSOR_UPPER_PCT,
) -> List[float]:
    """Winsorize then rolling z-score. Same length as the input."""
    return rolling_zscore(winsorize(values, lower_pct, upper_pct), window)

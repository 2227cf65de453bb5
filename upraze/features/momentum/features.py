"""
Feature composition: readings + event flags -> FeatureRecord sequence.

EMA runs on the winsorized readings (same units as the raw input), z on the
rolling window of those readings, streak on the parallel event flags.
The whole history is validated before anything is computed.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from upraze.models.momentum import FeatureRecord
from upraze.features.momentum.preprocess import (
    WINSOR_LOWER_PCT,
    WINSOR_UPPER_PCT,
    ZSCORE_WINDOW,
    rolling_zscore,
    winsorize,
)
from upraze.features.momentum.smoothing import EMA_ALPHA, acceleration, ema, velocity
from upraze.features.momentum.streaks import streak
from upraze.features.momentum.validators import (
    require_alpha,
    require_finite,
    require_flags,
    require_ordered,
    require_same_length,
)


def compute_features(
    values: Sequence[float],
    event_flags: Sequence[bool],
    timestamps: Optional[Sequence[datetime]] = None,
    alpha: float = EMA_ALPHA,
    window: int = ZSCORE_WINDOW,
    lower_pct: float = WINSOR_LOWER_PCT,
    upper_pct: float = WINSOR_UPPER_PCT,
) -> List[FeatureRecord]:
    """
    Compute one FeatureRecord per reading.

    Raises:
        ValidationError: mismatched lengths, non-finite values, non-boolean
            flags, unordered timestamps or out-of-range parameters.
    """
    clean = require_finite(values)
    flags = require_flags(event_flags)
    require_same_length("values", clean, "event_flags", flags)
    if timestamps is not None:
        require_same_length("values", clean, "timestamps", timestamps)
        require_ordered(timestamps)
    require_alpha(alpha)

    clamped = winsorize(clean, lower_pct, upper_pct)
    z = rolling_zscore(clamped, window)
    smoothed = ema(clamped, alpha)
    vel = velocity(smoothed)
    acc = acceleration(vel)
    streaks = streak(flags)

    return [
        FeatureRecord(
            ema=smoothed[i],
            velocity=vel[i],
            acceleration=acc[i],
            z=z[i],
            streak=streaks[i],
            timestamp=timestamps[i] if timestamps is not None else None,
        )
        for i in range(len(clean))
    ]

"""
Streak bookkeeping over a daily "did it happen" signal.

streak_t = streak_{t-1} + 1 on an event day, 0 otherwise.
streak_score = 1 - exp(-streak / 7): bounded in [0, 1), 7 days ~ 0.632.
"""

import math
from typing import List, Sequence

from upraze.core.errors import ValidationError
from upraze.features.momentum.validators import require_flags, require_streak

STREAK_DECAY_DAYS = 7.0
MAX_STREAK_SCORE = math.nextafter(1.0, 0.0)


def streak(events: Sequence[bool]) -> List[int]:
    result: List[int] = []
    current = 0
    for happened in require_flags(events, "events"):
        current = current + 1 if happened else 0
        result.append(current)
    return result


def streak_score_for(length: int, decay_days: float = STREAK_DECAY_DAYS) -> float:
    """Score a single streak length.

    Long streaks (about 260+ days at the default decay) would round to
    exactly 1.0; the score is capped just below 1 to stay in [0, 1).
    """
    length = require_streak(length, "streak length")
    if decay_days <= 0:
        raise ValidationError(f"decay_days must be positive, got {decay_days}")
    return min(1 - math.exp(-length / decay_days), MAX_STREAK_SCORE)


def streak_score(streaks: Sequence[int], decay_days: float = STREAK_DECAY_DAYS) -> List[float]:
    return [streak_score_for(s, decay_days) for s in streaks]

"""Input guards for the momentum pipeline.

Every check runs before any output is produced so a bad history never
yields a partial feature sequence.
"""

import math
import numbers
from datetime import datetime
from typing import Optional, Sequence

from upraze.core.errors import ValidationError


def require_finite(values: Sequence[float], name: str = "values") -> list[float]:
    """Return values as floats, rejecting NaN/inf and non-numeric entries."""
    result = []
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, numbers.Real):
            raise ValidationError(f"{name}[{i}] is not a number: {v!r}")
        if not math.isfinite(v):
            raise ValidationError(f"{name}[{i}] is not finite: {v!r}")
        result.append(float(v))
    return result


def require_flags(flags: Sequence[bool], name: str = "event_flags") -> list[bool]:
    result = []
    for i, flag in enumerate(flags):
        if not isinstance(flag, bool):
            raise ValidationError(f"{name}[{i}] is not a boolean: {flag!r}")
        result.append(flag)
    return result


def require_same_length(name_a: str, a: Sequence, name_b: str, b: Sequence) -> None:
    if len(a) != len(b):
        raise ValidationError(
            f"{name_a} and {name_b} must have the same length ({len(a)} != {len(b)})"
        )


def require_alpha(alpha: float) -> float:
    if isinstance(alpha, bool) or not (isinstance(alpha, numbers.Real) and math.isfinite(alpha) and 0.0 < alpha <= 1.0):
        raise ValidationError(f"alpha must be in (0, 1], got {alpha!r}")
    return float(alpha)


def require_ordered(timestamps: Optional[Sequence[datetime]]) -> None:
    """Timestamps must be strictly increasing."""
    if not timestamps:
        return
    for i in range(1, len(timestamps)):
        if timestamps[i] <= timestamps[i - 1]:
            raise ValidationError(
                f"timestamps must be strictly increasing (index {i}: "
                f"{timestamps[i].isoformat()} <= {timestamps[i - 1].isoformat()})"
            )


def require_streak(length: int, name: str = "streak") -> int:
    """Streak lengths are non-negative integers."""
    if isinstance(length, bool) or not isinstance(length, numbers.Integral):
        raise ValidationError(f"{name} must be an integer, got {length!r}")
    if length < 0:
        raise ValidationError(f"{name} must be non-negative, got {length}")
    return int(length)


def require_finite_output(values: Sequence[float], name: str) -> list[float]:
    """Derived series must stay finite; huge readings can overflow a difference."""
    for i, v in enumerate(values):
        if not math.isfinite(v):
            raise ValidationError(f"{name}[{i}] overflowed; readings are too large")
    return list(values)

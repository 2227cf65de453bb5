"""
Momentum domain model.

A momentum record answers: "Is this part of my life gaining or losing speed?"
Every value here is derived deterministically from an ordered history of
daily readings; records are immutable and rebuilt on each scoring cycle.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from upraze.core.errors import ValidationError


class Domain(str, Enum):
    """Built-in life domains. Users may track additional free-form domains."""
    HEALTH = "Health"
    FOCUS = "Focus"
    OUTPUT = "Output"
    LEARNING = "Learning"
    MOOD = "Mood"


DomainId = Union[Domain, str]


class TaskType(str, Enum):
    """Goal shape; selects the scoring policy."""
    COMPOUNDING = "Compounding"
    MILESTONE = "Milestone"
    MAINTENANCE = "Maintenance"
    CYCLICAL = "Cyclical"
    EXPLORATION = "Exploration"


class Phase(str, Enum):
    """Discrete momentum regime."""
    EXPLORE = "Explore"
    RAMP = "Ramp"
    CRUISE = "Cruise"
    DRIFT = "Drift"
    ARCHIVE = "Archive"


def normalize_domain(domain: DomainId) -> str:
    """
    Canonical domain tag.

    Built-in names match case-insensitively; anything else is kept as a
    trimmed custom tag.
    """
    if isinstance(domain, Domain):
        return domain.value
    tag = (domain or "").strip()
    if not tag:
        raise ValidationError("domain tag must be a non-empty string")
    for builtin in Domain:
        if builtin.value.lower() == tag.lower():
            return builtin.value
    return tag


def parse_task_type(task_type: Union[TaskType, str, None]) -> TaskType:
    """Resolve a task type tag; None defaults to Compounding."""
    if task_type is None:
        return TaskType.COMPOUNDING
    if isinstance(task_type, TaskType):
        return task_type
    for candidate in TaskType:
        if candidate.value.lower() == str(task_type).strip().lower():
            return candidate
    raise ValidationError(f"unknown task type: {task_type!r}")


@dataclass(frozen=True)
class RawSample:
    """One observed metric reading for a domain. Immutable once recorded."""

    domain_id: str
    timestamp: datetime
    value: float


@dataclass(frozen=True)
class FeatureRecord:
    """Derived indicators for one domain at one point in its history."""

    ema: float
    velocity: float
    acceleration: float
    z: float
    streak: int
    timestamp: Optional[datetime] = None

    def validate(self) -> None:
        assert self.streak >= 0, f"streak must be non-negative: {self.streak}"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat() if self.timestamp else None
        return data


@dataclass(frozen=True)
class PhaseRecord:
    phase: Phase
    confidence: float  # 0..1

    def validate(self) -> None:
        assert 0.0 <= self.confidence <= 1.0, f"confidence out of range: {self.confidence}"

    def to_dict(self) -> dict:
        return {"phase": self.phase.value, "confidence": self.confidence}


@dataclass(frozen=True)
class MomentumWeights:
    """Weights of the composite momentum score."""

    velocity: float = 0.5
    acceleration: float = 0.2
    z: float = 0.2
    streak: float = 0.1

    @classmethod
    def from_settings(cls, cfg) -> "MomentumWeights":
        return cls(
            velocity=cfg.MOMENTUM_WEIGHT_VELOCITY,
            acceleration=cfg.MOMENTUM_WEIGHT_ACCELERATION,
            z=cfg.MOMENTUM_WEIGHT_Z,
            streak=cfg.MOMENTUM_WEIGHT_STREAK,
        )


@dataclass(frozen=True)
class MomentumScore:
    """
    Per-domain momentum record consumed by dashboards, reviews and alerts.

    Attributes:
        domain: Domain tag (built-in name or custom tag)
        ema: Latest exponential moving average of the domain's readings
        velocity: Latest EMA delta
        acceleration: Latest velocity delta
        streak: Consecutive event days up to the latest reading
        momentum_score: Composite score, 0..100 (clamped)
        phase: Momentum regime at the latest reading
        confidence: Phase confidence, 0..1
        z: Latest rolling z-score of the (winsorized) readings
        task_type: Scoring policy used
    """

    domain: str
    ema: float
    velocity: float
    acceleration: float
    streak: int
    momentum_score: float
    phase: Phase
    confidence: float = 0.0
    z: float = 0.0
    task_type: TaskType = TaskType.COMPOUNDING

    def validate(self) -> None:
        """Ensure record is valid."""
        assert self.domain, "domain required"
        assert self.streak >= 0, f"streak must be non-negative: {self.streak}"
        assert 0.0 <= self.momentum_score <= 100.0, f"momentum_score out of range: {self.momentum_score}"
        assert 0.0 <= self.confidence <= 1.0, f"confidence out of range: {self.confidence}"
        if self.task_type == TaskType.MILESTONE:
            assert self.momentum_score in (0.0, 100.0), f"milestone score must be binary: {self.momentum_score}"

    def to_dict(self) -> dict:
        """Serialize to dict for JSON response."""
        return {
            "domain": self.domain,
            "ema": self.ema,
            "velocity": self.velocity,
            "acceleration": self.acceleration,
            "streak": self.streak,
            "momentumScore": self.momentum_score,
            "phase": self.phase.value,
            "confidence": self.confidence,
            "z": self.z,
            "taskType": self.task_type.value,
        }

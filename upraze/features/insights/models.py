"""
Momentum Insight Engine - Data Models

Pydantic models for momentum insights, alerts and weekly reviews.
All models frozen (immutable).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InsightType(str, Enum):
    """Direction of an insight."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InsightPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MomentumInsight(BaseModel):
    """
    A derived observation about one or more domains.

    Always carries a description referencing the metric that triggered it.
    """
    model_config = ConfigDict(frozen=True)

    type: InsightType
    title: str = Field(..., description="Short human-readable title")
    description: str = Field(..., description="Explanation referencing metrics")
    action: Optional[str] = Field(None, description="Suggested next step")
    priority: InsightPriority
    domain: Optional[str] = Field(None, description="Domain the insight is about, if any")


class AlertType(str, Enum):
    MOMENTUM_ALERT = "momentum_alert"
    STREAK_CELEBRATION = "streak_celebration"


class MomentumAlert(BaseModel):
    """
    A threshold-based alert computed from current momentum records.

    Not stored or delivered here; computed on demand.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    type: AlertType
    title: str
    message: str
    priority: InsightPriority
    domain: str
    action: Optional[str] = None


class MomentumInsightsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    insights: list[MomentumInsight]
    alerts: list[MomentumAlert]


class WeeklyReview(BaseModel):
    """Weekly summary assembled from the week's momentum insights."""
    model_config = ConfigDict(frozen=True)

    week: int
    summary: str
    highlights: list[str]
    challenges: list[str]
    recommendations: list[str]
    next_week_goals: list[str]

"""
Insights API

Read-only endpoints that turn momentum records into insights, alerts and
weekly reviews. Same records always produce the same response.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

from upraze.features.insights.models import MomentumInsightsResponse, WeeklyReview
from upraze.features.insights.service import InsightEngine
from upraze.models.momentum import MomentumScore, Phase, TaskType, normalize_domain

router = APIRouter(prefix="/v1/insights", tags=["insights"])


def get_insight_engine() -> InsightEngine:
    """Get insight engine instance."""
    return InsightEngine()


class MomentumRecordIn(BaseModel):
    """A momentum record as served by /v1/momentum/domains."""
    model_config = ConfigDict(populate_by_name=True)

    domain: str = Field(..., min_length=1)
    ema: FiniteFloat = 0.0
    velocity: FiniteFloat
    acceleration: FiniteFloat = 0.0
    streak: int = Field(0, ge=0)
    momentum_score: FiniteFloat = Field(50.0, alias="momentumScore", ge=0.0, le=100.0)
    phase: Phase = Phase.EXPLORE
    confidence: FiniteFloat = Field(0.0, ge=0.0, le=1.0)
    z: FiniteFloat = 0.0
    task_type: TaskType = Field(TaskType.COMPOUNDING, alias="taskType")

    def to_record(self) -> MomentumScore:
        return MomentumScore(
            domain=normalize_domain(self.domain),
            ema=self.ema,
            velocity=self.velocity,
            acceleration=self.acceleration,
            streak=self.streak,
            momentum_score=self.momentum_score,
            phase=self.phase,
            confidence=self.confidence,
            z=self.z,
            task_type=self.task_type,
        )


class InsightsRequest(BaseModel):
    records: list[MomentumRecordIn]


class WeeklyReviewRequest(BaseModel):
    week: int = Field(..., ge=1, le=53)
    records: list[MomentumRecordIn]


@router.post("/momentum", response_model=MomentumInsightsResponse)
async def post_momentum_insights(
    body: InsightsRequest,
    engine: Annotated[InsightEngine, Depends(get_insight_engine)],
) -> MomentumInsightsResponse:
    """
    Get insights and alerts for the given momentum records.

    **Deterministic:** same records always produce the same insights.
    """
    return engine.compute([r.to_record() for r in body.records])


@router.post("/weekly-review", response_model=WeeklyReview)
async def post_weekly_review(
    body: WeeklyReviewRequest,
    engine: Annotated[InsightEngine, Depends(get_insight_engine)],
) -> WeeklyReview:
    return engine.weekly_review([r.to_record() for r in body.records], body.week)

"""
Momentum API Endpoints

POST /v1/momentum/preprocess : rolling z-scores of winsorized readings
POST /v1/momentum/features   : feature records for a reading history
POST /v1/momentum/phase      : phase for one feature record
POST /v1/momentum/score      : momentum score for one feature record
POST /v1/momentum/domains    : momentum records for many domains
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, FiniteFloat

from upraze.features.momentum.phase import classify_features
from upraze.features.momentum.preprocess import preprocess
from upraze.features.momentum.service import DomainHistory, MomentumService
from upraze.models.momentum import FeatureRecord, TaskType

router = APIRouter(prefix="/v1/momentum", tags=["momentum"])


def get_momentum_service() -> MomentumService:
    """Get momentum service instance."""
    return MomentumService()


class SeriesRequest(BaseModel):
    values: list[FiniteFloat]


class FeaturesRequest(BaseModel):
    values: list[FiniteFloat]
    event_flags: list[bool]


class FeatureRecordIn(BaseModel):
    ema: FiniteFloat
    velocity: FiniteFloat
    acceleration: FiniteFloat
    z: FiniteFloat = 0.0
    streak: int = Field(0, ge=0)
    timestamp: Optional[datetime] = None

    def to_record(self) -> FeatureRecord:
        return FeatureRecord(
            ema=self.ema,
            velocity=self.velocity,
            acceleration=self.acceleration,
            z=self.z,
            streak=self.streak,
            timestamp=self.timestamp,
        )


class ScoreRequest(BaseModel):
    feature: FeatureRecordIn
    task_type: TaskType = TaskType.COMPOUNDING


class DomainHistoryIn(BaseModel):
    domain: str = Field(..., min_length=1)
    values: list[FiniteFloat]
    event_flags: list[bool]
    task_type: Optional[TaskType] = None
    goal_text: Optional[str] = None


class DomainsRequest(BaseModel):
    domains: list[DomainHistoryIn]


@router.post("/preprocess")
async def post_preprocess(body: SeriesRequest) -> dict:
    """
    Winsorize and z-score a reading history.

    Returns:
        {"data": [z_0, z_1, ...]}  (same length as values)
    """
    return {"data": preprocess(body.values)}


@router.post("/features")
async def post_features(
    body: FeaturesRequest,
    service: Annotated[MomentumService, Depends(get_momentum_service)],
) -> dict:
    """
    Compute one feature record per reading.

    values and event_flags must have the same length.
    """
    records = service.features(body.values, body.event_flags)
    return {"data": [r.to_dict() for r in records]}


@router.post("/phase")
async def post_phase(body: FeatureRecordIn) -> dict:
    return {"data": classify_features(body.to_record()).to_dict()}


@router.post("/score")
async def post_score(
    body: ScoreRequest,
    service: Annotated[MomentumService, Depends(get_momentum_service)],
) -> dict:
    score = service.score(body.feature.to_record(), body.task_type)
    return {"data": {"momentumScore": score, "taskType": body.task_type.value}}


@router.post("/domains")
async def post_domains(
    body: DomainsRequest,
    service: Annotated[MomentumService, Depends(get_momentum_service)],
) -> dict:
    """
    Compute current momentum for each domain.

    Returns:
        {
            "data": [
                {
                    "domain": "Health",
                    "ema": 6.4,
                    "velocity": 0.12,
                    "acceleration": 0.03,
                    "streak": 5,
                    "momentumScore": 61.2,
                    "phase": "Ramp",
                    "confidence": 0.8,
                    "z": 0.9,
                    "taskType": "Compounding"
                }
            ]
        }
    """
    histories = [
        DomainHistory(
            domain=d.domain,
            values=d.values,
            event_flags=d.event_flags,
            task_type=d.task_type,
            goal_text=d.goal_text,
        )
        for d in body.domains
    ]
    snapshots = service.compute_all(histories)
    return {"data": [s.to_dict() for s in snapshots]}

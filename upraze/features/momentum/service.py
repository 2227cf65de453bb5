"""
Momentum Service

Domain aggregator: runs preprocessing, smoothing, streaks, phase
classification and scoring for each tracked domain and assembles the
MomentumScore records consumed by dashboards.

Domains never share state, so a batch can run sequentially or on a thread
pool with identical results.
"""

from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Union

from upraze.core.config import Settings, settings as default_settings
from upraze.core.errors import EmptyHistoryError, ValidationError
from upraze.core.logging import log_event
from upraze.features.momentum.features import compute_features
from upraze.features.momentum.phase import classify_features
from upraze.features.momentum.scoring_engine import MomentumScoringEngine
from upraze.models.classification import TaskClassifier
from upraze.models.momentum import (
    DomainId,
    FeatureRecord,
    MomentumScore,
    MomentumWeights,
    RawSample,
    TaskType,
    normalize_domain,
    parse_task_type,
)


@dataclass(frozen=True)
class DomainHistory:
    """Ordered readings and parallel event flags for one domain."""

    domain: DomainId
    values: Sequence[float]
    event_flags: Sequence[bool]
    task_type: Union[TaskType, str, None] = None
    goal_text: Optional[str] = None
    timestamps: Optional[Sequence[datetime]] = None


class MomentumService:
    """Deterministic per-domain momentum computation."""

    def __init__(
        self,
        settings_obj: Optional[Settings] = None,
        classifier: Optional[TaskClassifier] = None,
        max_workers: Optional[int] = None,
    ):
        cfg = settings_obj or default_settings
        self._alpha = cfg.EMA_ALPHA
        self._window = cfg.ZSCORE_WINDOW
        self._lower_pct = cfg.WINSOR_LOWER_PCT
        self._upper_pct = cfg.WINSOR_UPPER_PCT
        self._decay_days = cfg.STREAK_DECAY_DAYS
        self._weights = MomentumWeights.from_settings(cfg)
        self._classifier = classifier
        self._max_workers = max_workers if max_workers is not None else cfg.AGGREGATOR_MAX_WORKERS

    def features(
        self,
        values: Sequence[float],
        event_flags: Sequence[bool],
        timestamps: Optional[Sequence[datetime]] = None,
    ) -> List[FeatureRecord]:
        return compute_features(
            values,
            event_flags,
            timestamps=timestamps,
            alpha=self._alpha,
            window=self._window,
            lower_pct=self._lower_pct,
            upper_pct=self._upper_pct,
        )

    def score(self, record: FeatureRecord, task_type: Union[TaskType, str, None] = None) -> float:
        return MomentumScoringEngine.score_features(
            record, task_type, weights=self._weights, decay_days=self._decay_days
        )

    def compute_domain(
        self,
        domain: DomainId,
        values: Sequence[float],
        event_flags: Sequence[bool],
        task_type: Union[TaskType, str, None] = None,
        timestamps: Optional[Sequence[datetime]] = None,
    ) -> MomentumScore:
        """
        Compute the current momentum record for one domain.

        Raises:
            ValidationError: malformed history
            EmptyHistoryError: no readings to score
        """
        tag = normalize_domain(domain)
        task = parse_task_type(task_type)
        records = self.features(values, event_flags, timestamps)
        if not records:
            raise EmptyHistoryError(f"no readings recorded for domain {tag}")

        latest = records[-1]
        latest.validate()
        phase = classify_features(latest)
        phase.validate()
        snapshot = MomentumScore(
            domain=tag,
            ema=latest.ema,
            velocity=latest.velocity,
            acceleration=latest.acceleration,
            streak=latest.streak,
            momentum_score=self.score(latest, task),
            phase=phase.phase,
            confidence=phase.confidence,
            z=latest.z,
            task_type=task,
        )
        snapshot.validate()

        log_event(
            "info",
            "momentum.domain_computed",
            domain=tag,
            event_type="momentum.computed",
            extra={
                "phase": snapshot.phase.value,
                "score": round(snapshot.momentum_score, 1),
                "samples": len(records),
            },
        )
        return snapshot

    def compute_domain_from_samples(
        self,
        samples: Sequence[RawSample],
        event_flags: Sequence[bool],
        task_type: Union[TaskType, str, None] = None,
    ) -> MomentumScore:
        """Compute from RawSample history; all samples must share one domain."""
        if not samples:
            raise EmptyHistoryError("no readings recorded")
        domains = {normalize_domain(s.domain_id) for s in samples}
        if len(domains) != 1:
            raise ValidationError(f"samples span several domains: {sorted(domains)}")
        return self.compute_domain(
            domain=domains.pop(),
            values=[s.value for s in samples],
            event_flags=event_flags,
            task_type=task_type,
            timestamps=[s.timestamp for s in samples],
        )

    def resolve_task_type(self, history: DomainHistory) -> TaskType:
        """Explicit task type wins; otherwise ask the classifier about the goal text."""
        if history.task_type is not None:
            return parse_task_type(history.task_type)
        if history.goal_text and self._classifier is not None:
            return self._classifier.classify(history.goal_text).task_type
        return TaskType.COMPOUNDING

    def compute_all(self, histories: Sequence[DomainHistory]) -> List[MomentumScore]:
        """
        Compute records for many domains, preserving input order.

        Empty histories are skipped; any other invalid history fails the
        whole batch before a result is returned.
        """
        seen = set()
        runnable: List[DomainHistory] = []
        for history in histories:
            tag = normalize_domain(history.domain)
            if tag in seen:
                raise ValidationError(f"duplicate domain in batch: {tag}")
            seen.add(tag)
            if len(history.values) == 0 and len(history.event_flags) == 0:
                log_event("warning", "momentum.domain_skipped", domain=tag, event_type="momentum.skipped")
                continue
            runnable.append(history)

        if self._max_workers > 1 and len(runnable) > 1:
            # Each task runs in a copy of the caller context so request_id reaches worker logs
            contexts = [copy_context() for _ in runnable]
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                return list(executor.map(lambda ctx, h: ctx.run(self._compute_history, h), contexts, runnable))
        return [self._compute_history(h) for h in runnable]

    def _compute_history(self, history: DomainHistory) -> MomentumScore:
        return self.compute_domain(
            domain=history.domain,
            values=history.values,
            event_flags=history.event_flags,
            task_type=self.resolve_task_type(history),
            timestamps=history.timestamps,
        )

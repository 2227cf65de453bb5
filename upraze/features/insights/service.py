"""
Momentum Insight Engine - Computation Service

Derives insights, alerts and weekly reviews from per-domain momentum records.
All logic is deterministic and explainable.
"""

from typing import Sequence

from upraze.features.insights.models import (
    AlertType,
    InsightPriority,
    InsightType,
    MomentumAlert,
    MomentumInsight,
    MomentumInsightsResponse,
    WeeklyReview,
)
from upraze.models.momentum import MomentumScore


class InsightEngine:
    """
    Computes actionable insights from momentum records.

    All methods are pure functions (deterministic, no side effects).
    """

    STRONG_VELOCITY = 0.1
    DECLINING_VELOCITY = -0.05
    ALERT_VELOCITY = -0.1
    STREAK_MILESTONE_DAYS = 7
    MAX_WEEKLY_GOALS = 3

    def compute(self, records: Sequence[MomentumScore]) -> MomentumInsightsResponse:
        return MomentumInsightsResponse(
            insights=self.analyze_momentum(records),
            alerts=self.generate_alerts(records),
        )

    def analyze_momentum(self, records: Sequence[MomentumScore]) -> list[MomentumInsight]:
        """
        Derive insights.

        Order:
        1. Strongest domain (if clearly climbing)
        2. Weakest domain (if declining)
        3. Long streaks
        """
        if not records:
            return []

        insights = []
        by_velocity = sorted(records, key=lambda r: r.velocity, reverse=True)
        top = by_velocity[0]
        bottom = by_velocity[-1]

        if top.velocity > self.STRONG_VELOCITY:
            insights.append(MomentumInsight(
                type=InsightType.POSITIVE,
                title=f"{top.domain} is on fire!",
                description=(
                    f"Your {top.domain.lower()} momentum is strong with a "
                    f"{top.velocity:.2f} velocity. Keep this energy going!"
                ),
                action="Consider increasing focus on this domain",
                priority=InsightPriority.MEDIUM,
                domain=top.domain,
            ))

        if bottom.velocity < self.DECLINING_VELOCITY:
            insights.append(MomentumInsight(
                type=InsightType.NEGATIVE,
                title=f"{bottom.domain} needs attention",
                description=(
                    f"Your {bottom.domain.lower()} momentum is declining "
                    f"({bottom.velocity:.2f} velocity)."
                ),
                action="Review what might be causing this decline",
                priority=InsightPriority.HIGH,
                domain=bottom.domain,
            ))

        long_streaks = [r for r in records if r.streak >= self.STREAK_MILESTONE_DAYS]
        if long_streaks:
            count = len(long_streaks)
            plural = "s" if count > 1 else ""
            insights.append(MomentumInsight(
                type=InsightType.POSITIVE,
                title="Impressive streaks!",
                description=(
                    f"{count} domain{plural} with {self.STREAK_MILESTONE_DAYS}+ day streaks. "
                    "Consistency is key!"
                ),
                priority=InsightPriority.LOW,
            ))

        return insights

    def generate_alerts(self, records: Sequence[MomentumScore]) -> list[MomentumAlert]:
        """Momentum alerts first, then streak celebrations, each in input order."""
        alerts = []

        for r in records:
            if r.velocity < self.ALERT_VELOCITY:
                alerts.append(MomentumAlert(
                    id=f"momentum-{r.domain}",
                    type=AlertType.MOMENTUM_ALERT,
                    title=f"{r.domain} Momentum Alert",
                    message=f"Your {r.domain.lower()} momentum is declining. Consider reviewing your approach.",
                    priority=InsightPriority.HIGH,
                    domain=r.domain,
                    action="Review domain",
                ))

        for r in records:
            if r.streak >= self.STREAK_MILESTONE_DAYS and r.streak % self.STREAK_MILESTONE_DAYS == 0:
                alerts.append(MomentumAlert(
                    id=f"streak-{r.domain}",
                    type=AlertType.STREAK_CELEBRATION,
                    title=f"{r.streak} Day Streak!",
                    message=f"Amazing! You've maintained {r.domain} for {r.streak} days straight.",
                    priority=InsightPriority.MEDIUM,
                    domain=r.domain,
                ))

        return alerts

    def weekly_review(self, records: Sequence[MomentumScore], week: int) -> WeeklyReview:
        insights = self.analyze_momentum(records)
        positive = [i for i in insights if i.type == InsightType.POSITIVE]
        negative = [i for i in insights if i.type == InsightType.NEGATIVE]

        next_week_goals = [
            f"Improve {r.domain.lower()} momentum"
            for r in records
            if r.velocity < 0
        ][:self.MAX_WEEKLY_GOALS]

        return WeeklyReview(
            week=week,
            summary=(
                f"Week {week} showed {len(positive)} positive trends and "
                f"{len(negative)} areas needing attention."
            ),
            highlights=[i.title for i in positive],
            challenges=[i.title for i in negative],
            recommendations=[i.action for i in insights if i.action],
            next_week_goals=next_week_goals,
        )

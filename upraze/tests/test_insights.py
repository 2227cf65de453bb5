"""
Momentum insight engine tests.

All outputs are deterministic: same records => same insights, alerts, review.
"""

from upraze.features.insights.models import AlertType, InsightPriority, InsightType
from upraze.features.insights.service import InsightEngine


class TestAnalyzeMomentum:
    def test_no_records_no_insights(self):
        assert InsightEngine().analyze_momentum([]) == []

    def test_top_and_bottom_performers(self, make_record):
        records = [
            make_record("Health", 0.25),
            make_record("Focus", -0.2),
            make_record("Mood", 0.0),
        ]
        insights = InsightEngine().analyze_momentum(records)
        assert [i.type for i in insights] == [InsightType.POSITIVE, InsightType.NEGATIVE]
        assert insights[0].title == "Health is on fire!"
        assert insights[0].domain == "Health"
        assert "0.25 velocity" in insights[0].description
        assert insights[1].title == "Focus needs attention"
        assert insights[1].priority == InsightPriority.HIGH
        assert "(-0.20 velocity)" in insights[1].description

    def test_thresholds_are_strict(self, make_record):
        records = [make_record("Health", 0.1), make_record("Focus", -0.05)]
        assert InsightEngine().analyze_momentum(records) == []

    def test_single_climbing_domain_only_positive(self, make_record):
        insights = InsightEngine().analyze_momentum([make_record("Output", 0.3)])
        assert len(insights) == 1
        assert insights[0].type == InsightType.POSITIVE

    def test_long_streaks_counted(self, make_record):
        records = [
            make_record("Health", 0.0, streak=7),
            make_record("Focus", 0.0, streak=12),
            make_record("Mood", 0.0, streak=6),
        ]
        insights = InsightEngine().analyze_momentum(records)
        assert len(insights) == 1
        assert insights[0].title == "Impressive streaks!"
        assert insights[0].description == "2 domains with 7+ day streaks. Consistency is key!"
        assert insights[0].priority == InsightPriority.LOW
        assert insights[0].action is None


class TestAlerts:
    def test_declining_domain_alert(self, make_record):
        alerts = InsightEngine().generate_alerts([make_record("Focus", -0.2), make_record("Health", -0.1)])
        assert len(alerts) == 1
        assert alerts[0].id == "momentum-Focus"
        assert alerts[0].type == AlertType.MOMENTUM_ALERT
        assert alerts[0].priority == InsightPriority.HIGH

    def test_streak_celebrations_on_weekly_multiples(self, make_record):
        records = [
            make_record("Health", 0.0, streak=14),
            make_record("Mood", 0.0, streak=10),
            make_record("Focus", 0.0, streak=7),
        ]
        alerts = InsightEngine().generate_alerts(records)
        assert [a.id for a in alerts] == ["streak-Health", "streak-Focus"]
        assert alerts[0].title == "14 Day Streak!"
        assert all(a.type == AlertType.STREAK_CELEBRATION for a in alerts)

    def test_alerts_before_celebrations(self, make_record):
        records = [make_record("Health", 0.0, streak=7), make_record("Focus", -0.3)]
        alerts = InsightEngine().generate_alerts(records)
        assert [a.type for a in alerts] == [AlertType.MOMENTUM_ALERT, AlertType.STREAK_CELEBRATION]


class TestWeeklyReview:
    def test_review_assembled_from_insights(self, make_record):
        records = [
            make_record("Health", 0.2, streak=7),
            make_record("Focus", -0.1),
            make_record("Mood", -0.01),
            make_record("Output", -0.3),
            make_record("Learning", -0.02),
        ]
        review = InsightEngine().weekly_review(records, week=3)
        assert review.week == 3
        assert review.summary == "Week 3 showed 2 positive trends and 1 areas needing attention."
        assert review.highlights == ["Health is on fire!", "Impressive streaks!"]
        assert review.challenges == ["Output needs attention"]
        assert review.recommendations == [
            "Consider increasing focus on this domain",
            "Review what might be causing this decline",
        ]
        assert review.next_week_goals == [
            "Improve focus momentum",
            "Improve mood momentum",
            "Improve output momentum",
        ]

    def test_empty_week(self):
        review = InsightEngine().weekly_review([], week=1)
        assert review.summary == "Week 1 showed 0 positive trends and 0 areas needing attention."
        assert review.highlights == [] and review.next_week_goals == []


def test_compute_bundles_insights_and_alerts(make_record):
    response = InsightEngine().compute([make_record("Focus", -0.2)])
    assert len(response.insights) == 1
    assert len(response.alerts) == 1

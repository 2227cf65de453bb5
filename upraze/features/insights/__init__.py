"""
Momentum Insight Engine

Derives explainable guidance from per-domain momentum records:
- Insights (strongest domain, declining domain, long streaks)
- Alerts (declining momentum, streak milestones)
- Weekly reviews

All logic is deterministic and explainable.
"""

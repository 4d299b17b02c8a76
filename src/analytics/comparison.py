from __future__ import annotations

from src.schemas.analytics import UNBOUNDED_INCREASE, ComparisonDeltas, OverviewKpis, PercentChange


def percent_change(current: float, previous: float) -> PercentChange:
    if previous == 0:
        return 0.0 if current == 0 else UNBOUNDED_INCREASE
    return round((current - previous) / previous * 100, 1)


def calculate_comparison(current: OverviewKpis, previous: OverviewKpis) -> ComparisonDeltas:
    return ComparisonDeltas(
        trips_change=percent_change(current.total_trips, previous.total_trips),
        travelers_change=percent_change(current.total_travelers, previous.total_travelers),
        budget_change=percent_change(current.total_budget, previous.total_budget),
    )

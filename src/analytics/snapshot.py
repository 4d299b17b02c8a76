from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from src.analytics.activity import recent_activity
from src.analytics.breakdowns import (
    DEFAULT_BUDGET_RANGES,
    BudgetRange,
    budget_distribution,
    hidden_gem_share,
    trips_by_district,
    trips_by_interest,
    trips_by_segment,
    trips_by_status,
)
from src.analytics.comparison import calculate_comparison
from src.analytics.overview import calculate_overview, filter_trips_in_window
from src.analytics.rankings import count_place_visits, rank_top_places
from src.analytics.trends import build_trip_trend
from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord, TripStatus
from src.schemas.analytics import AnalyticsSnapshot, DashboardStats, DateRange
from src.shared.time import resolve_periods


def build_analytics_snapshot(
    trips: Sequence[TripRecord],
    places: Sequence[PlaceRecord],
    districts: Sequence[DistrictRecord],
    requested: Optional[DateRange] = None,
    *,
    now: Optional[datetime] = None,
    top_limit: int = 5,
    recent_limit: int = 5,
    default_window_months: int = 6,
    daily_trend_max_days: int = 60,
    budget_ranges: Sequence[BudgetRange] = DEFAULT_BUDGET_RANGES,
    currency_symbol: str = "RM",
) -> AnalyticsSnapshot:
    """Aggregate already-loaded collections into one dashboard snapshot.

    Window-scoped figures (overview, trend, breakdowns, histogram) use the
    resolved current window; popularity, hidden gems and the activity feed run
    over everything supplied.
    """
    periods = resolve_periods(requested, now=now, default_months=default_window_months)
    current_trips = filter_trips_in_window(trips, periods.current)
    previous_trips = filter_trips_in_window(trips, periods.previous)

    overview = calculate_overview(current_trips)
    previous_overview = calculate_overview(previous_trips)
    granularity, trend = build_trip_trend(current_trips, periods.current, daily_trend_max_days)
    place_visits = count_place_visits(trips, places)

    return AnalyticsSnapshot(
        period=periods.current,
        previous_period=periods.previous,
        overview=overview,
        comparison=calculate_comparison(overview, previous_overview),
        trend_granularity=granularity,
        trips_trend=trend,
        trips_by_district=trips_by_district(current_trips, districts),
        trips_by_segment=trips_by_segment(current_trips),
        trips_by_status=trips_by_status(current_trips),
        trips_by_interest=trips_by_interest(current_trips),
        budget_distribution=budget_distribution(current_trips, budget_ranges, currency_symbol),
        top_places=rank_top_places(trips, places, districts, limit=top_limit),
        hidden_gems=hidden_gem_share(place_visits, places),
        recent_activity=recent_activity(trips, limit=recent_limit),
    )


def build_dashboard_stats(
    trips: Sequence[TripRecord],
    places: Sequence[PlaceRecord],
    districts: Sequence[DistrictRecord],
) -> DashboardStats:
    completed = [trip for trip in trips if trip.status == TripStatus.COMPLETED]
    ratings = [trip.rating for trip in trips if trip.rating is not None]
    return DashboardStats(
        total_tourists=sum(trip.no_traveler for trip in trips),
        total_trips=len(trips),
        completed_trips=len(completed),
        active_trips=sum(1 for trip in trips if trip.status == TripStatus.ACTIVE),
        total_places=len(places),
        total_districts=len(districts),
        total_revenue=round(sum(trip.budget for trip in completed), 2),
        avg_rating=round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
    )

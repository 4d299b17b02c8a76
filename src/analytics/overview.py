from __future__ import annotations

from typing import Iterable, List

from src.models.tourism import TripRecord, TripStatus
from src.schemas.analytics import DateRange, OverviewKpis


def filter_trips_in_window(trips: Iterable[TripRecord], window: DateRange) -> List[TripRecord]:
    """Trips whose activity date falls inside the window, both ends inclusive."""
    first_day = window.start.date()
    last_day = window.end.date()
    selected: List[TripRecord] = []
    for trip in trips:
        activity_date = trip.activity_date
        if activity_date is not None and first_day <= activity_date <= last_day:
            selected.append(trip)
    return selected


def calculate_overview(trips: Iterable[TripRecord]) -> OverviewKpis:
    trip_list = list(trips)
    total_trips = len(trip_list)
    if not total_trips:
        return OverviewKpis()

    total_travelers = sum(trip.no_traveler for trip in trip_list)
    total_budget = sum(trip.budget for trip in trip_list)
    completed = sum(1 for trip in trip_list if trip.status == TripStatus.COMPLETED)
    durations = [trip.duration_days for trip in trip_list if trip.duration_days is not None]
    avg_duration = (sum(durations) / len(durations)) if durations else 0.0

    return OverviewKpis(
        total_trips=total_trips,
        total_travelers=total_travelers,
        total_budget=round(total_budget, 2),
        avg_budget=round(total_budget / total_trips, 2),
        completion_rate=round(completed / total_trips * 100, 1),
        avg_trip_duration=round(avg_duration, 1),
    )

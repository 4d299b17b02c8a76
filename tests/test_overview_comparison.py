from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from src.analytics.comparison import calculate_comparison, percent_change
from src.analytics.overview import calculate_overview, filter_trips_in_window
from src.schemas.analytics import UNBOUNDED_INCREASE, DateRange, OverviewKpis


def _window(start: str, end: str) -> DateRange:
    return DateRange(
        start=datetime.fromisoformat(start).replace(tzinfo=timezone.utc),
        end=datetime.fromisoformat(end).replace(tzinfo=timezone.utc),
    )


def test_overview_over_two_trips(make_trip) -> None:
    trips = [
        make_trip(id="t1", budget=100, status="completed", start_date="2024-01-05", end_date="2024-01-08"),
        make_trip(id="t2", budget=300, status="active", start_date="2024-02-10", end_date="2024-02-15"),
    ]
    window = _window("2024-01-01", "2024-02-29")

    overview = calculate_overview(filter_trips_in_window(trips, window))

    assert overview.total_trips == 2
    assert overview.total_budget == 400
    assert overview.avg_budget == 200
    assert overview.completion_rate == 50
    assert overview.avg_trip_duration == 4
    assert overview.total_travelers == 4


def test_overview_of_empty_set_is_all_zero() -> None:
    assert calculate_overview([]) == OverviewKpis()


def test_duration_ignores_trips_without_end_date(make_trip) -> None:
    trips = [
        make_trip(id="t1", start_date="2024-01-01", end_date="2024-01-03"),
        make_trip(id="t2", start_date="2024-01-01", end_date=None),
    ]
    assert calculate_overview(trips).avg_trip_duration == 2


def test_window_filter_is_inclusive_on_both_ends(make_trip) -> None:
    trips = [
        make_trip(id="before", start_date="2023-12-31"),
        make_trip(id="first", start_date="2024-01-01"),
        make_trip(id="last", start_date="2024-01-31"),
        make_trip(id="after", start_date="2024-02-01"),
        make_trip(id="created-only", start_date=None, created_at="2024-01-15T10:00:00+00:00"),
        make_trip(id="undated", start_date=None, created_at=None),
    ]
    selected = filter_trips_in_window(trips, _window("2024-01-01", "2024-01-31T23:00:00"))
    assert [trip.id for trip in selected] == ["first", "last", "created-only"]


def test_percent_change_edge_cases() -> None:
    assert percent_change(0, 0) == 0
    assert percent_change(5, 0) == UNBOUNDED_INCREASE
    assert percent_change(150, 100) == 50.0
    assert percent_change(50, 100) == -50.0
    assert percent_change(0, 100) == -100.0


@pytest.mark.parametrize("current,previous", [(0, 0), (3, 0), (0.0, 0.0), (7, 2)])
def test_percent_change_is_never_nan_or_infinite(current, previous) -> None:
    result = percent_change(current, previous)
    assert result == UNBOUNDED_INCREASE or math.isfinite(result)


def test_comparison_uses_matching_metrics() -> None:
    current = OverviewKpis(total_trips=6, total_travelers=12, total_budget=3000)
    previous = OverviewKpis(total_trips=4, total_travelers=0, total_budget=4000)

    deltas = calculate_comparison(current, previous)

    assert deltas.trips_change == 50.0
    assert deltas.travelers_change == UNBOUNDED_INCREASE
    assert deltas.budget_change == -25.0
    assert deltas.model_dump(by_alias=True)["travelersChange"] == "unbounded"

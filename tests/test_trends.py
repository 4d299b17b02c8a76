from __future__ import annotations

from datetime import date, datetime, timezone

from src.analytics.trends import bucket_starts, build_trip_trend, choose_granularity
from src.schemas.analytics import DateRange


def _window(start: date, end: date) -> DateRange:
    return DateRange(
        start=datetime(start.year, start.month, start.day, tzinfo=timezone.utc),
        end=datetime(end.year, end.month, end.day, tzinfo=timezone.utc),
    )


def test_daily_buckets_cover_window_and_keep_empty_days(make_trip) -> None:
    trips = [
        make_trip(id="t1", start_date="2024-03-02", no_traveler=2),
        make_trip(id="t2", start_date="2024-03-02", no_traveler=3),
        make_trip(id="t3", start_date="2024-03-09", no_traveler=1),
        make_trip(id="outside", start_date="2024-03-11"),
    ]
    granularity, points = build_trip_trend(trips, _window(date(2024, 3, 1), date(2024, 3, 10)))

    assert granularity == "day"
    assert len(points) == 10
    assert [point.trips for point in points] == [0, 2, 0, 0, 0, 0, 0, 0, 1, 0]
    assert points[1].travelers == 5
    assert points[1].label == "Mar 2"
    starts = [point.period_start for point in points]
    assert all(earlier < later for earlier, later in zip(starts, starts[1:]))


def test_monthly_buckets_for_long_windows(make_trip) -> None:
    trips = [
        make_trip(id="t1", start_date="2024-01-20"),
        make_trip(id="t2", start_date="2024-04-01", no_traveler=5),
        make_trip(id="t3", start_date="2024-04-30", no_traveler=1),
    ]
    granularity, points = build_trip_trend(trips, _window(date(2024, 1, 15), date(2024, 6, 15)))

    assert granularity == "month"
    assert [point.label for point in points] == [
        "Jan 2024",
        "Feb 2024",
        "Mar 2024",
        "Apr 2024",
        "May 2024",
        "Jun 2024",
    ]
    assert [point.trips for point in points] == [1, 0, 0, 2, 0, 0]
    assert points[3].travelers == 6
    assert points[0].period_start == date(2024, 1, 1)


def test_month_buckets_cross_year_boundary() -> None:
    starts = bucket_starts(_window(date(2023, 11, 30), date(2024, 2, 1)), "month")
    assert starts == [date(2023, 11, 1), date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]


def test_granularity_threshold() -> None:
    assert choose_granularity(_window(date(2024, 1, 1), date(2024, 3, 1))) == "day"
    assert choose_granularity(_window(date(2024, 1, 1), date(2024, 3, 2))) == "month"
    assert choose_granularity(_window(date(2024, 1, 1), date(2024, 1, 20)), daily_max_days=10) == "month"


def test_sixty_day_window_yields_one_bucket_per_day() -> None:
    _, points = build_trip_trend([], _window(date(2024, 1, 1), date(2024, 3, 1)))
    assert len(points) == 61
    assert all(point.trips == 0 for point in points)


def test_zero_length_window_has_single_bucket(make_trip) -> None:
    day = date(2024, 5, 5)
    granularity, points = build_trip_trend([make_trip(start_date="2024-05-05")], _window(day, day))
    assert granularity == "day"
    assert len(points) == 1
    assert points[0].trips == 1


def test_monthly_revenue_sums_completed_budgets_and_keeps_empty_months(make_trip) -> None:
    trips = [
        make_trip(id="t1", status="completed", budget="450.50", start_date="2024-01-20"),
        make_trip(id="t2", status="completed", budget=1200, start_date="2024-04-01"),
        make_trip(id="t3", status="completed", budget="300", start_date="2024-04-28"),
        make_trip(id="t4", status="active", budget=9000, start_date="2024-04-10"),
        make_trip(id="t5", status="cancelled", budget=700, start_date="2024-03-03"),
    ]
    _, points = build_trip_trend(trips, _window(date(2024, 1, 1), date(2024, 6, 30)))

    assert [point.revenue for point in points] == [450.5, 0.0, 0.0, 1500.0, 0.0, 0.0]
    assert points[2].trips == 1
    assert points[3].trips == 3


def test_daily_revenue_is_zero_without_completed_trips(make_trip) -> None:
    _, points = build_trip_trend(
        [make_trip(status="active", budget=800, start_date="2024-03-02")],
        _window(date(2024, 3, 1), date(2024, 3, 3)),
    )
    assert [point.revenue for point in points] == [0.0, 0.0, 0.0]
    assert points[1].trips == 1

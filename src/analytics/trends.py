from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Literal, Tuple

from src.models.tourism import TripRecord, TripStatus
from src.schemas.analytics import DateRange, TrendPoint
from src.shared.time import month_start, next_month_start


Granularity = Literal["day", "month"]

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def choose_granularity(window: DateRange, daily_max_days: int = 60) -> Granularity:
    return "month" if window.span_days > daily_max_days else "day"


def bucket_starts(window: DateRange, granularity: Granularity) -> List[date]:
    """Every calendar unit touching [start, end], ascending."""
    first_day = window.start.date()
    last_day = window.end.date()
    starts: List[date] = []
    if granularity == "month":
        cursor = month_start(first_day)
        while cursor <= last_day:
            starts.append(cursor)
            cursor = next_month_start(cursor)
        return starts
    cursor = first_day
    while cursor <= last_day:
        starts.append(cursor)
        cursor += timedelta(days=1)
    return starts


def build_trip_trend(
    trips: Iterable[TripRecord],
    window: DateRange,
    daily_max_days: int = 60,
) -> Tuple[Granularity, List[TrendPoint]]:
    granularity = choose_granularity(window, daily_max_days)
    starts = bucket_starts(window, granularity)
    first_day = window.start.date()
    last_day = window.end.date()

    counts: Dict[date, List[int]] = defaultdict(lambda: [0, 0])
    revenue: Dict[date, float] = defaultdict(float)
    for trip in trips:
        activity_date = trip.activity_date
        if activity_date is None or not first_day <= activity_date <= last_day:
            continue
        key = month_start(activity_date) if granularity == "month" else activity_date
        bucket = counts[key]
        bucket[0] += 1
        bucket[1] += trip.no_traveler
        if trip.status == TripStatus.COMPLETED:
            revenue[key] += trip.budget

    points: List[TrendPoint] = []
    for period_start in starts:
        trip_count, traveler_count = counts.get(period_start, (0, 0))
        points.append(
            TrendPoint(
                period_start=period_start,
                label=_bucket_label(period_start, granularity),
                trips=trip_count,
                travelers=traveler_count,
                revenue=round(revenue.get(period_start, 0.0), 2),
            )
        )
    return granularity, points


def _bucket_label(period_start: date, granularity: Granularity) -> str:
    month_label = MONTH_LABELS[period_start.month - 1]
    if granularity == "month":
        return f"{month_label} {period_start.year}"
    return f"{month_label} {period_start.day}"

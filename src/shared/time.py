from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from src.core.errors import BadRequestError
from src.schemas.analytics import DateRange, ResolvedPeriods


def parse_time_window(window: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    end = _as_utc(now or datetime.now(timezone.utc))
    try:
        if window.endswith("d"):
            days = int(window[:-1])
            return end - timedelta(days=days), end
        if window.endswith("m"):
            months = int(window[:-1])
            return subtract_months(end, months), end
    except ValueError as exc:
        raise BadRequestError("Unsupported time window format") from exc
    raise BadRequestError("Unsupported time window format")


def parse_date_bounds(date_from: Optional[date], date_to: Optional[date]) -> Optional[DateRange]:
    if date_from is None and date_to is None:
        return None
    if date_from is None or date_to is None:
        raise BadRequestError("Both 'from' and 'to' are required for a custom range")
    return DateRange(
        start=datetime.combine(date_from, time.min, tzinfo=timezone.utc),
        end=datetime.combine(date_to, time.min, tzinfo=timezone.utc),
    )


def resolve_periods(
    requested: Optional[DateRange],
    now: Optional[datetime] = None,
    default_months: int = 6,
) -> ResolvedPeriods:
    """Canonical current window plus the equal-length window ending where it starts.

    A missing request defaults to the trailing ``default_months`` ending now and
    a reversed request is swapped rather than rejected.
    """
    if requested is None:
        end = _as_utc(now or datetime.now(timezone.utc))
        start = subtract_months(end, default_months)
    else:
        start = _as_utc(requested.start)
        end = _as_utc(requested.end)
        if start > end:
            start, end = end, start

    span = end - start
    current = DateRange(start=start, end=end)
    previous = DateRange(start=start - span, end=start)
    return ResolvedPeriods(current=current, previous=previous)


def subtract_months(value: datetime, months: int) -> datetime:
    return add_months(value, -months)


def add_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_start(value: date) -> date:
    return date(value.year, value.month, 1)


def next_month_start(value: date) -> date:
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken as UTC so window arithmetic never mixes kinds.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

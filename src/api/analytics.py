from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_analytics_service
from src.core.config import get_settings
from src.schemas.analytics import AnalyticsSnapshot, DashboardStats, DateRange
from src.services.analytics_service import AnalyticsService
from src.shared.response import ResponseEnvelope, build_meta
from src.shared.time import parse_date_bounds, parse_time_window


router = APIRouter(prefix="/analytics", tags=["analytics"])

SOURCE = "supabase"


@router.get("")
def analytics_snapshot(
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    time_window: Optional[str] = Query(default=None),
    top_limit: Optional[int] = Query(default=None, ge=1, le=50),
    recent_limit: Optional[int] = Query(default=None, ge=1, le=50),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[AnalyticsSnapshot]:
    requested = _requested_range(date_from, date_to, time_window)
    data = service.get_snapshot(
        requested=requested,
        top_limit=top_limit,
        recent_limit=recent_limit,
    )
    resolved_window = f"{data.period.start.date().isoformat()}..{data.period.end.date().isoformat()}"
    meta = build_meta(SOURCE, resolved_window, currency=get_settings().currency_code)
    return ResponseEnvelope(data=data, meta=meta)


@router.get("/dashboard-stats")
def dashboard_stats(
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[DashboardStats]:
    data = service.get_dashboard_stats()
    meta = build_meta(SOURCE, "all", currency=get_settings().currency_code)
    return ResponseEnvelope(data=data, meta=meta)


def _requested_range(
    date_from: Optional[date], date_to: Optional[date], time_window: Optional[str]
) -> Optional[DateRange]:
    explicit = parse_date_bounds(date_from, date_to)
    if explicit is not None:
        return explicit
    if time_window:
        start, end = parse_time_window(time_window)
        return DateRange(start=start, end=end)
    return None

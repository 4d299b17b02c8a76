from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import Field

from src.shared.base import BaseSchema


UNBOUNDED_INCREASE = "unbounded"

# Percent change against the previous window, or the marker for growth from zero.
PercentChange = Union[float, Literal["unbounded"]]


class DateRange(BaseSchema):
    start: datetime = Field(alias="from")
    end: datetime = Field(alias="to")

    @property
    def span_days(self) -> float:
        return (self.end - self.start).total_seconds() / 86400


class ResolvedPeriods(BaseSchema):
    current: DateRange
    previous: DateRange


class OverviewKpis(BaseSchema):
    total_trips: int = 0
    total_travelers: int = 0
    total_budget: float = 0.0
    avg_budget: float = 0.0
    completion_rate: float = 0.0
    avg_trip_duration: float = 0.0


class ComparisonDeltas(BaseSchema):
    trips_change: PercentChange = 0.0
    travelers_change: PercentChange = 0.0
    budget_change: PercentChange = 0.0


class TrendPoint(BaseSchema):
    period_start: date
    label: str
    trips: int = 0
    travelers: int = 0
    revenue: float = 0.0


class CategoryBreakdownItem(BaseSchema):
    key: str
    count: int = 0
    percentage: float = 0.0


class DistrictBreakdownItem(CategoryBreakdownItem):
    district_id: Optional[str] = None
    travelers: int = 0


class BudgetBucket(BaseSchema):
    range: str
    min_amount: float
    max_amount: Optional[float] = None
    count: int = 0
    percentage: float = 0.0


class TopPlace(BaseSchema):
    id: str
    name: str
    district: str
    visits: int
    rating: Optional[float] = None
    is_hidden_gem: bool = False


class RecentActivityItem(BaseSchema):
    id: str
    type: str
    title: str
    activity_date: date = Field(alias="date")


class HiddenGemStat(BaseSchema):
    total: int = 0
    hidden: int = 0
    percentage: float = 0.0


class AnalyticsSnapshot(BaseSchema):
    period: DateRange
    previous_period: DateRange
    overview: OverviewKpis
    comparison: ComparisonDeltas
    trend_granularity: Literal["day", "month"]
    trips_trend: List[TrendPoint]
    trips_by_district: List[DistrictBreakdownItem]
    trips_by_segment: List[CategoryBreakdownItem]
    trips_by_status: List[CategoryBreakdownItem]
    trips_by_interest: List[CategoryBreakdownItem]
    budget_distribution: List[BudgetBucket]
    top_places: List[TopPlace]
    hidden_gems: HiddenGemStat
    recent_activity: List[RecentActivityItem]


class DashboardStats(BaseSchema):
    total_tourists: int = 0
    total_trips: int = 0
    completed_trips: int = 0
    active_trips: int = 0
    total_places: int = 0
    total_districts: int = 0
    total_revenue: float = 0.0
    avg_rating: float = 0.0


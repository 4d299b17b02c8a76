from __future__ import annotations

from typing import List

from src.core.supabase import SupabaseClient
from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord


TRIP_COLUMNS = (
    "id,user_id,title,status,no_traveler,budget,actual_budget,start_date,end_date,"
    "created_at,districts,attractions,visitor_segment,ai_suggestions,rating"
)


class TourismRepository:
    def __init__(self, row_limit: int = 5000) -> None:
        self.client = SupabaseClient()
        self.row_limit = row_limit

    def list_trips(self) -> List[TripRecord]:
        rows, _ = self.client.select(
            table="travel_plans",
            select=TRIP_COLUMNS,
            limit=self.row_limit,
            order="created_at.desc",
        )
        return [TripRecord.model_validate(row) for row in rows]

    def list_places(self) -> List[PlaceRecord]:
        rows, _ = self.client.select(
            table="places",
            select="id,name,district_id,category,is_hidden_gem,is_active,rating,popularity_score",
            filters=[("is_active", "eq.true")],
            limit=self.row_limit,
        )
        return [PlaceRecord.model_validate(row) for row in rows]

    def list_districts(self) -> List[DistrictRecord]:
        rows, _ = self.client.select(
            table="districts",
            select="id,name,name_ms",
            order="name.asc",
        )
        return [DistrictRecord.model_validate(row) for row in rows]

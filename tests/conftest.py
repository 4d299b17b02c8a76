from __future__ import annotations

import os

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from src.analytics.snapshot import build_analytics_snapshot, build_dashboard_stats
from src.api.dependencies import get_analytics_service
from src.main import create_app
from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord
from src.schemas.analytics import AnalyticsSnapshot, DashboardStats, DateRange


FIXED_NOW = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)


def build_trip(**overrides: Any) -> TripRecord:
    row: Dict[str, Any] = {
        "id": "trip-1",
        "title": "Weekend in Langkawi",
        "status": "active",
        "no_traveler": 2,
        "budget": "800.00",
        "start_date": "2024-03-01",
        "end_date": "2024-03-04",
        "created_at": "2024-02-20T08:00:00+00:00",
        "districts": '["d-langkawi"]',
        "attractions": "[]",
        "visitor_segment": "Couple",
        "ai_suggestions": None,
    }
    row.update(overrides)
    return TripRecord.model_validate(row)


@pytest.fixture()
def make_trip() -> Callable[..., TripRecord]:
    return build_trip


@pytest.fixture()
def districts() -> List[DistrictRecord]:
    return [
        DistrictRecord(id="d-langkawi", name="Langkawi"),
        DistrictRecord(id="d-kota-setar", name="Kota Setar"),
    ]


@pytest.fixture()
def places() -> List[PlaceRecord]:
    return [
        PlaceRecord(id="p1", name="Langkawi Sky Bridge", district_id="d-langkawi", rating=4.6),
        PlaceRecord(id="p2", name="Alor Setar Tower", district_id="d-kota-setar", rating=4.2),
        PlaceRecord(
            id="p3",
            name="Lata Bayu Waterfall",
            district_id="d-missing",
            is_hidden_gem=True,
        ),
    ]


@pytest.fixture()
def sample_trips() -> List[TripRecord]:
    return [
        build_trip(
            id="trip-1",
            status="completed",
            budget="450",
            start_date="2024-03-02",
            end_date="2024-03-05",
            attractions='["p1", "p2"]',
        ),
        build_trip(
            id="trip-2",
            status="active",
            no_traveler=4,
            budget="1800",
            start_date="2024-03-20",
            end_date="2024-03-22",
            districts='["d-kota-setar", "d-langkawi"]',
            attractions='["p1", "p3", "p-removed"]',
            visitor_segment="Family",
        ),
        build_trip(
            id="trip-3",
            status="cancelled",
            no_traveler=1,
            budget="300",
            start_date="2024-02-10",
            end_date="2024-02-11",
            districts="not-json",
            visitor_segment=None,
        ),
    ]


class FakeAnalyticsService:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def get_snapshot(
        self,
        requested: Optional[DateRange] = None,
        top_limit: Optional[int] = None,
        recent_limit: Optional[int] = None,
    ) -> AnalyticsSnapshot:
        self.calls.append(
            {"requested": requested, "top_limit": top_limit, "recent_limit": recent_limit}
        )
        trips = [
            build_trip(id="trip-1", status="completed", attractions='["p1", "p1"]'),
            build_trip(id="trip-2", start_date="2024-03-10", attractions='["p2"]'),
        ]
        places = [
            PlaceRecord(id="p1", name="Langkawi Sky Bridge", district_id="d-langkawi"),
            PlaceRecord(id="p2", name="Alor Setar Tower", district_id="d-kota-setar"),
        ]
        districts = [DistrictRecord(id="d-langkawi", name="Langkawi")]
        return build_analytics_snapshot(
            trips,
            places,
            districts,
            requested,
            now=FIXED_NOW,
            top_limit=top_limit or 5,
            recent_limit=recent_limit or 5,
        )

    def get_dashboard_stats(self) -> DashboardStats:
        trips = [
            build_trip(id="trip-1", status="completed", budget="1000", rating=4.5),
            build_trip(id="trip-2", status="active", budget="250", no_traveler=3),
        ]
        return build_dashboard_stats(trips, [], [DistrictRecord(id="d-langkawi", name="Langkawi")])


@pytest.fixture()
def fake_service() -> FakeAnalyticsService:
    return FakeAnalyticsService()


@pytest.fixture()
def client(fake_service: FakeAnalyticsService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_analytics_service] = lambda: fake_service
    return TestClient(app)

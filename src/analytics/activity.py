from __future__ import annotations

from typing import Iterable, List

from src.models.tourism import TripRecord
from src.schemas.analytics import RecentActivityItem


def recent_activity(trips: Iterable[TripRecord], limit: int = 5) -> List[RecentActivityItem]:
    if limit <= 0:
        return []
    dated = [trip for trip in trips if trip.activity_date is not None]
    dated.sort(
        key=lambda trip: (trip.activity_date, _created_sort_key(trip), trip.id),
        reverse=True,
    )
    return [
        RecentActivityItem(
            id=trip.id,
            type=f"trip_{trip.status.value}",
            title=activity_title(trip),
            activity_date=trip.activity_date,
        )
        for trip in dated[:limit]
    ]


def activity_title(trip: TripRecord) -> str:
    title = (trip.title or "").strip()
    if title:
        return title
    segment = trip.segment
    if segment:
        return f"{segment} trip ({trip.no_traveler} travelers)"
    return f"Trip for {trip.no_traveler} travelers"


def _created_sort_key(trip: TripRecord) -> float:
    return trip.created_at.timestamp() if trip.created_at is not None else float("-inf")

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional

from src.analytics.breakdowns import UNKNOWN_DISTRICT
from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord
from src.schemas.analytics import TopPlace


def count_place_visits(trips: Iterable[TripRecord], places: Iterable[PlaceRecord]) -> Dict[str, int]:
    """Visit references per known place id; references to unknown places are dropped."""
    known_ids = {place.id for place in places}
    visits: Counter[str] = Counter()
    for trip in trips:
        for place_id in trip.place_ids:
            if place_id in known_ids:
                visits[place_id] += 1
    return dict(visits)


def rank_top_places(
    trips: Iterable[TripRecord],
    places: Iterable[PlaceRecord],
    districts: Iterable[DistrictRecord],
    limit: int = 5,
) -> List[TopPlace]:
    if limit <= 0:
        return []
    trip_list = list(trips)
    place_index = {place.id: place for place in places}
    district_names = {district.id: district.name for district in districts}
    visits = count_place_visits(trip_list, place_index.values())
    if not visits:
        return []

    trip_ratings = _trip_ratings_by_place(trip_list, visits)
    ranked = sorted(
        visits.items(),
        key=lambda item: (-item[1], place_index[item[0]].name, item[0]),
    )[:limit]

    top_places: List[TopPlace] = []
    for place_id, visit_count in ranked:
        place = place_index[place_id]
        top_places.append(
            TopPlace(
                id=place.id,
                name=place.name,
                district=district_names.get(place.district_id or "", UNKNOWN_DISTRICT),
                visits=visit_count,
                rating=_place_rating(place, trip_ratings.get(place_id)),
                is_hidden_gem=place.is_hidden_gem,
            )
        )
    return top_places


def _trip_ratings_by_place(trips: List[TripRecord], visits: Dict[str, int]) -> Dict[str, List[float]]:
    ratings: Dict[str, List[float]] = defaultdict(list)
    for trip in trips:
        if trip.rating is None:
            continue
        for place_id in set(trip.place_ids):
            if place_id in visits:
                ratings[place_id].append(trip.rating)
    return ratings


def _place_rating(place: PlaceRecord, trip_ratings: Optional[List[float]]) -> Optional[float]:
    if place.rating is not None:
        return round(place.rating, 1)
    if trip_ratings:
        return round(sum(trip_ratings) / len(trip_ratings), 1)
    return None

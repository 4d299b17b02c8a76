from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from src.models.tourism import DistrictRecord, PlaceRecord, TripRecord, TripStatus
from src.schemas.analytics import (
    BudgetBucket,
    CategoryBreakdownItem,
    DistrictBreakdownItem,
    HiddenGemStat,
)


UNKNOWN_DISTRICT = "Unknown"
UNSPECIFIED_SEGMENT = "Unspecified"


@dataclass(frozen=True)
class BudgetRange:
    min_amount: float
    max_amount: Optional[float] = None

    def contains(self, amount: float) -> bool:
        if amount < self.min_amount:
            return False
        return self.max_amount is None or amount < self.max_amount


DEFAULT_BUDGET_RANGES: Sequence[BudgetRange] = (
    BudgetRange(0, 500),
    BudgetRange(500, 1000),
    BudgetRange(1000, 2000),
    BudgetRange(2000, 5000),
    BudgetRange(5000, None),
)


def distribute_percentages(counts: Sequence[int]) -> List[float]:
    """Share of each count in tenths of a percent, summing to exactly 100.

    Each value is its exact share truncated to one decimal; the leftover tenths
    go to the largest remainders (earlier entries win ties).
    """
    total = sum(counts)
    if total <= 0:
        return [0.0 for _ in counts]
    exact = [count * 1000 / total for count in counts]
    tenths = [int(value) for value in exact]
    leftover = 1000 - sum(tenths)
    order = sorted(range(len(counts)), key=lambda index: (-(exact[index] - tenths[index]), index))
    for index in order[:leftover]:
        tenths[index] += 1
    return [value / 10 for value in tenths]


def aggregate_categories(
    records: Iterable[TripRecord],
    key_for: Callable[[TripRecord], Iterable[str]],
    fixed_keys: Sequence[str] = (),
    keep_order: bool = False,
) -> List[CategoryBreakdownItem]:
    """Group trips under the keys ``key_for`` yields and derive shares of the total.

    ``fixed_keys`` always appear, with zero counts if nothing matched. Unless
    ``keep_order`` is set, groups are ordered by count desc then key.
    """
    counts: Counter[str] = Counter({key: 0 for key in fixed_keys})
    for record in records:
        for key in key_for(record):
            counts[key] += 1

    if keep_order:
        keys = list(fixed_keys) + sorted(key for key in counts if key not in fixed_keys)
    else:
        keys = sorted(counts, key=lambda key: (-counts[key], key))
    percentages = distribute_percentages([counts[key] for key in keys])
    return [
        CategoryBreakdownItem(key=key, count=counts[key], percentage=percentage)
        for key, percentage in zip(keys, percentages)
    ]


def trips_by_segment(trips: Iterable[TripRecord]) -> List[CategoryBreakdownItem]:
    return aggregate_categories(trips, lambda trip: [trip.segment or UNSPECIFIED_SEGMENT])


def trips_by_status(trips: Iterable[TripRecord]) -> List[CategoryBreakdownItem]:
    return aggregate_categories(
        trips,
        lambda trip: [trip.status.value],
        fixed_keys=[status.value for status in TripStatus],
        keep_order=True,
    )


def trips_by_interest(trips: Iterable[TripRecord]) -> List[CategoryBreakdownItem]:
    def interests(trip: TripRecord) -> List[str]:
        # A tag repeated inside one trip still counts that trip once.
        seen: Dict[str, None] = {}
        for tag in trip.suggestions.interests:
            label = str(tag).strip()
            if label:
                seen.setdefault(label, None)
        return list(seen)

    return aggregate_categories(trips, interests)


def trips_by_district(
    trips: Iterable[TripRecord], districts: Iterable[DistrictRecord]
) -> List[DistrictBreakdownItem]:
    district_names: Dict[str, str] = {district.id: district.name for district in districts}
    counts: Dict[Optional[str], int] = {district_id: 0 for district_id in district_names}
    travelers: Dict[Optional[str], int] = {district_id: 0 for district_id in district_names}

    for trip in trips:
        references = set(trip.districts)
        keys: List[Optional[str]] = [ref for ref in references if ref in district_names]
        # Trips with no district, or with a dangling reference, land in Unknown once.
        if not references or len(keys) < len(references):
            keys.append(None)
        for district_id in keys:
            counts[district_id] = counts.get(district_id, 0) + 1
            travelers[district_id] = travelers.get(district_id, 0) + trip.no_traveler

    if counts.get(None) == 0:
        counts.pop(None)

    def label(district_id: Optional[str]) -> str:
        return district_names[district_id] if district_id is not None else UNKNOWN_DISTRICT

    ordered = sorted(counts, key=lambda district_id: (-counts[district_id], label(district_id)))
    percentages = distribute_percentages([counts[district_id] for district_id in ordered])
    return [
        DistrictBreakdownItem(
            key=label(district_id),
            district_id=district_id,
            count=counts[district_id],
            travelers=travelers.get(district_id, 0),
            percentage=percentage,
        )
        for district_id, percentage in zip(ordered, percentages)
    ]


def budget_distribution(
    trips: Iterable[TripRecord],
    ranges: Sequence[BudgetRange] = DEFAULT_BUDGET_RANGES,
    currency_symbol: str = "RM",
) -> List[BudgetBucket]:
    counts = [0 for _ in ranges]
    for trip in trips:
        for index, budget_range in enumerate(ranges):
            if budget_range.contains(trip.budget):
                counts[index] += 1
                break

    percentages = distribute_percentages(counts)
    return [
        BudgetBucket(
            range=budget_range_label(budget_range, currency_symbol),
            min_amount=budget_range.min_amount,
            max_amount=budget_range.max_amount,
            count=count,
            percentage=percentage,
        )
        for budget_range, count, percentage in zip(ranges, counts, percentages)
    ]


def budget_range_label(budget_range: BudgetRange, currency_symbol: str = "RM") -> str:
    if budget_range.max_amount is None:
        return f"> {currency_symbol} {_compact_amount(budget_range.min_amount)}"
    if budget_range.min_amount <= 0:
        return f"< {currency_symbol} {_compact_amount(budget_range.max_amount)}"
    return (
        f"{currency_symbol} {_compact_amount(budget_range.min_amount)}"
        f"-{_compact_amount(budget_range.max_amount)}"
    )


def _compact_amount(amount: float) -> str:
    if amount >= 1000 and amount % 1000 == 0:
        return f"{int(amount // 1000)}K"
    if amount >= 1000 and amount % 100 == 0:
        return f"{amount / 1000:g}K"
    return f"{amount:g}"


def hidden_gem_share(
    place_visits: Mapping[str, int], places: Iterable[PlaceRecord]
) -> HiddenGemStat:
    place_index = {place.id: place for place in places}
    total = 0
    hidden = 0
    for place_id, visits in place_visits.items():
        place = place_index.get(place_id)
        if place is None:
            continue
        total += visits
        if place.is_hidden_gem:
            hidden += visits
    percentage = round(hidden / total * 100, 1) if total else 0.0
    return HiddenGemStat(total=total, hidden=hidden, percentage=percentage)

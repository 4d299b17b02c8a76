from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from src.shared.base import BaseSchema, RecordModel
from src.shared.parsing import (
    safe_bool,
    safe_float,
    safe_int,
    safe_optional_date,
    safe_optional_datetime,
    safe_optional_float,
    safe_parse,
    safe_parse_model,
)


class TripStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SlotPlace(BaseSchema):
    id: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None


class TripSlot(BaseSchema):
    type: str = "attraction"
    place: Optional[SlotPlace] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class TripDay(BaseSchema):
    day: int = 0
    date: Optional[str] = None
    slots: List[TripSlot] = Field(default_factory=list)


class TripItinerary(BaseSchema):
    days: List[TripDay] = Field(default_factory=list)

    def place_ids(self) -> List[str]:
        ids: List[str] = []
        for day in self.days:
            for slot in day.slots:
                if slot.type in ("travel", "break"):
                    continue
                if slot.place is not None and slot.place.id:
                    ids.append(str(slot.place.id))
        return ids


class TripAiSuggestions(BaseSchema):
    budget: float = 0.0
    interests: List[str] = Field(default_factory=list)
    traveler_type: str = ""
    traveler_count: int = 0
    removed_places: List[str] = Field(default_factory=list)


class TripRecord(RecordModel):
    id: str
    user_id: Optional[str] = None
    title: Optional[str] = None
    status: TripStatus = TripStatus.DRAFT
    no_traveler: int = 0
    budget: float = 0.0
    actual_budget: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    districts: List[str] = Field(default_factory=list)
    place_ids: List[str] = Field(default_factory=list)
    itinerary: TripItinerary = Field(default_factory=TripItinerary)
    visitor_segment: Optional[str] = None
    suggestions: TripAiSuggestions = Field(default_factory=TripAiSuggestions)
    rating: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _decode_embedded_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        row = dict(data)
        row["districts"] = [str(item) for item in safe_parse(row.get("districts"), []) if item]

        if "attractions" in row:
            attractions = safe_parse(row.pop("attractions"), None)
            if isinstance(attractions, list):
                # Legacy rows store a flat list of attraction ids.
                row.setdefault("place_ids", [str(item) for item in attractions if isinstance(item, (str, int))])
            elif isinstance(attractions, dict):
                itinerary = safe_parse_model(attractions, TripItinerary)
                row.setdefault("itinerary", itinerary)
                row.setdefault("place_ids", itinerary.place_ids())

        if "ai_suggestions" in row:
            row.setdefault("suggestions", safe_parse_model(row.pop("ai_suggestions"), TripAiSuggestions))
        return row

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Any:
        if isinstance(value, TripStatus):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return TripStatus(normalized)
        except ValueError:
            return TripStatus.DRAFT

    @field_validator("no_traveler", mode="before")
    @classmethod
    def _coerce_travelers(cls, value: Any) -> int:
        return max(safe_int(value), 0)

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, value: Any) -> float:
        return max(safe_float(value), 0.0)

    @field_validator("actual_budget", "rating", mode="before")
    @classmethod
    def _coerce_optional_number(cls, value: Any) -> Optional[float]:
        return safe_optional_float(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[date]:
        return safe_optional_date(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Optional[datetime]:
        return safe_optional_datetime(value)

    @property
    def segment(self) -> Optional[str]:
        for label in (self.visitor_segment, self.suggestions.traveler_type):
            if label and label.strip():
                return label.strip()
        return None

    @property
    def activity_date(self) -> Optional[date]:
        if self.start_date is not None:
            return self.start_date
        if self.created_at is not None:
            return self.created_at.date()
        return None

    @property
    def duration_days(self) -> Optional[int]:
        if self.start_date is None or self.end_date is None:
            return None
        return max((self.end_date - self.start_date).days, 0)


class PlaceRecord(RecordModel):
    id: str
    name: str = ""
    district_id: Optional[str] = None
    category: Optional[str] = None
    is_hidden_gem: bool = False
    is_active: bool = True
    rating: Optional[float] = None
    popularity_score: Optional[float] = None

    @field_validator("is_hidden_gem", "is_active", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any, info: Any) -> bool:
        return safe_bool(value, default=info.field_name == "is_active")

    @field_validator("rating", "popularity_score", mode="before")
    @classmethod
    def _coerce_optional_number(cls, value: Any) -> Optional[float]:
        return safe_optional_float(value)


class DistrictRecord(RecordModel):
    id: str
    name: str = ""
    name_ms: Optional[str] = None

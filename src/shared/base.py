from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic.config import ConfigDict


def to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class BaseSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(BaseModel):
    """Raw row as loaded from storage; immutable for the length of an aggregation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", "district_id", check_fields=False, mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        # Integer keys from older tables must match their string references.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

from __future__ import annotations

import copy
import json
import logging
from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError


logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

_DATE_ADAPTER = TypeAdapter(date)
_DATETIME_ADAPTER = TypeAdapter(datetime)
_BOOL_ADAPTER = TypeAdapter(bool)


def safe_parse(raw: Any, default: T) -> T:
    """Decode an embedded JSON field, falling back to ``default`` on anything unusable.

    Already-decoded values (lists/dicts coming back from PostgREST json columns)
    pass through. When ``default`` is not None the result must share its type.
    """
    if raw is None:
        return copy.deepcopy(default)
    decoded: Any = raw
    if isinstance(raw, (str, bytes, bytearray)):
        if not raw.strip():
            return copy.deepcopy(default)
        try:
            decoded = json.loads(raw)
        except (ValueError, TypeError) as exc:
            logger.debug("Discarding malformed embedded field: %s", exc)
            return copy.deepcopy(default)
    if default is not None and not isinstance(decoded, type(default)):
        logger.debug(
            "Embedded field decoded to %s, expected %s",
            type(decoded).__name__,
            type(default).__name__,
        )
        return copy.deepcopy(default)
    return decoded


def safe_parse_model(raw: Any, model: Type[ModelT]) -> ModelT:
    payload = safe_parse(raw, {})
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Embedded %s failed validation: %s", model.__name__, exc.error_count())
        return model()


def safe_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return number


def safe_int(value: Any, default: int = 0) -> int:
    number = safe_float(value, float(default))
    return int(number)


def safe_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    number = safe_float(value, float("nan"))
    return None if number != number else number


def safe_optional_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        # Timestamps stored in date columns keep only their calendar day.
        value = value.split("T", 1)[0]
    try:
        return _DATE_ADAPTER.validate_python(value)
    except ValidationError:
        logger.debug("Discarding unparseable date %r", value)
        return None


def safe_optional_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    try:
        return _DATETIME_ADAPTER.validate_python(value)
    except ValidationError:
        logger.debug("Discarding unparseable timestamp %r", value)
        return None


def safe_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    try:
        return _BOOL_ADAPTER.validate_python(value)
    except ValidationError:
        logger.debug("Discarding unparseable flag %r", value)
        return default

"""Coerce untrusted decoded JSON into well-typed Variety records.

Everything read from storage or from an imported backup passes through here
before it reaches the store. Records written by older versions must keep
loading, so fallbacks are only ever added, never removed.

Coercion never raises: a wrong or missing field is replaced by its default
and the rest of the record is kept.
"""

import math
from enum import StrEnum
from typing import Any

from rosarium.core.dates import now_iso
from rosarium.models.variety import (
    Event,
    EventType,
    Note,
    Photo,
    PhotoType,
    Variety,
    new_id,
)

UNKNOWN_BREEDER = "Unknown"
UNKNOWN_NAME = "Unknown Rose"


def _str_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _list_or_empty(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _is_member(value: Any, enum: type[StrEnum]) -> bool:
    return isinstance(value, str) and value in enum.__members__


def _rose_type(value: Any) -> int | float | None:
    # bool is an int subclass, but never a valid classification.
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # Whole numbers come back as int; anything else is kept as written.
        return int(value) if value.is_integer() else value
    return value


def sanitize_event(raw: dict[str, Any]) -> Event:
    kind = raw.get("type")
    return Event(
        id=_str_or(raw.get("id"), "") or new_id(),
        type=EventType(kind) if _is_member(kind, EventType) else EventType.OTHER,
        date=_str_or(raw.get("date"), "") or now_iso(),
        details=_str_or(raw.get("details"), ""),
        sub_type=_optional_str(raw.get("subType")),
    )


def sanitize_photo(raw: dict[str, Any]) -> Photo:
    kind = raw.get("type")
    return Photo(
        id=_str_or(raw.get("id"), "") or new_id(),
        url=_str_or(raw.get("url"), ""),
        date=_str_or(raw.get("date"), "") or now_iso(),
        type=PhotoType(kind) if _is_member(kind, PhotoType) else PhotoType.GENERAL,
        note=_optional_str(raw.get("note")),
    )


def sanitize_note(raw: dict[str, Any]) -> Note:
    return Note(
        id=_str_or(raw.get("id"), "") or new_id(),
        date=_str_or(raw.get("date"), "") or now_iso(),
        content=_str_or(raw.get("content"), ""),
    )


def sanitize_variety(raw: Any) -> Variety:
    """Build a Variety from one decoded record, defaulting each bad field."""
    if not isinstance(raw, dict):
        raw = {}
    variety_id = raw.get("id")
    registered = raw.get("registrationDate")
    return Variety(
        id=variety_id if isinstance(variety_id, str) else new_id(),
        breeder=_str_or(raw.get("breeder"), UNKNOWN_BREEDER),
        name=_str_or(raw.get("name"), UNKNOWN_NAME),
        registration_date=registered if isinstance(registered, str) else now_iso(),
        memo=_str_or(raw.get("memo"), ""),
        planting_date=_optional_str(raw.get("plantingDate")),
        transplant_date=_optional_str(raw.get("transplantDate")),
        rose_type=_rose_type(raw.get("roseType")),
        feature=_optional_str(raw.get("feature")),
        events=tuple(
            sanitize_event(e) for e in _list_or_empty(raw.get("events")) if isinstance(e, dict)
        ),
        photos=tuple(
            sanitize_photo(p) for p in _list_or_empty(raw.get("photos")) if isinstance(p, dict)
        ),
        notes=tuple(
            sanitize_note(n) for n in _list_or_empty(raw.get("notes")) if isinstance(n, dict)
        ),
    )


def sanitize_varieties(data: Any) -> list[Variety]:
    """Convert a decoded document into varieties.

    Args:
        data: Any decoded JSON value.

    Returns:
        One Variety per array element, or an empty list if ``data`` is not
        an array.
    """
    if not isinstance(data, list):
        return []
    return [sanitize_variety(item) for item in data]


def prepare_import(items: list[Any]) -> list[dict[str, Any]]:
    """Lighter pass for bulk import.

    Keeps every field as given but guarantees an ``id`` and that
    ``events``/``photos``/``notes`` are arrays. A non-object item is
    treated as an empty record.
    """
    prepared: list[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            item = {}
        prepared.append(
            {
                **item,
                "id": item.get("id") or new_id(),
                "events": _list_or_empty(item.get("events")),
                "photos": _list_or_empty(item.get("photos")),
                "notes": _list_or_empty(item.get("notes")),
            }
        )
    return prepared

"""Domain models for the rose journal."""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from rosarium.catalog import lookup_rose
from rosarium.core.dates import now_iso


def new_id() -> str:
    """Random unique id for varieties and their child records."""
    return str(uuid.uuid4())


class EventType(StrEnum):
    FERTILIZER = "FERTILIZER"
    TRANSPLANT = "TRANSPLANT"
    PRUNING = "PRUNING"
    PLANTING = "PLANTING"
    PEST_CONTROL = "PEST_CONTROL"
    BLOOM = "BLOOM"
    OTHER = "OTHER"


class PhotoType(StrEnum):
    PRUNING_BEFORE = "PRUNING_BEFORE"
    PRUNING_AFTER = "PRUNING_AFTER"
    GENERAL = "GENERAL"
    BLOOM = "BLOOM"


@dataclass(frozen=True)
class Event:
    """A dated care action."""

    id: str
    type: EventType
    date: str
    details: str
    sub_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": str(self.type),
            "date": self.date,
            "details": self.details,
        }
        if self.sub_type is not None:
            data["subType"] = self.sub_type
        return data


@dataclass(frozen=True)
class Photo:
    """A dated image stored inline as a data URI."""

    id: str
    url: str
    date: str
    type: PhotoType
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "url": self.url,
            "date": self.date,
            "type": str(self.type),
        }
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class Note:
    """A free-text journal entry."""

    id: str
    date: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "date": self.date, "content": self.content}


@dataclass(frozen=True)
class Variety:
    """One tracked rose cultivar and everything recorded against it.

    Child sequences are kept newest-first in insertion order. Every edit
    produces a new Variety with the same ``id``.
    """

    id: str
    breeder: str
    name: str
    registration_date: str
    memo: str = ""
    planting_date: str | None = None
    transplant_date: str | None = None
    rose_type: int | float | None = None
    feature: str | None = None
    events: tuple[Event, ...] = field(default=())
    photos: tuple[Photo, ...] = field(default=())
    notes: tuple[Note, ...] = field(default=())

    @classmethod
    def create(cls, *, breeder: str, name: str) -> "Variety":
        """Register a new variety, filling type and feature from the rose library."""
        info = lookup_rose(name)
        return cls(
            id=new_id(),
            breeder=breeder,
            name=name,
            registration_date=now_iso(),
            rose_type=info.type if info else None,
            feature=info.feature if info else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape. Absent optionals are omitted."""
        data: dict[str, Any] = {
            "id": self.id,
            "breeder": self.breeder,
            "name": self.name,
            "registrationDate": self.registration_date,
        }
        if self.planting_date is not None:
            data["plantingDate"] = self.planting_date
        if self.transplant_date is not None:
            data["transplantDate"] = self.transplant_date
        data["events"] = [e.to_dict() for e in self.events]
        data["photos"] = [p.to_dict() for p in self.photos]
        data["notes"] = [n.to_dict() for n in self.notes]
        data["memo"] = self.memo
        if self.rose_type is not None:
            data["roseType"] = self.rose_type
        if self.feature is not None:
            data["feature"] = self.feature
        return data


def serialize_varieties(varieties: Sequence[Variety]) -> list[dict[str, Any]]:
    return [v.to_dict() for v in varieties]

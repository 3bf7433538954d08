"""Pure transitions on a single Variety.

Each function takes the current Variety and returns a new one with the same
``id``; nothing here touches the store. Child records are prepended, so every
child sequence stays newest-first in insertion order.
"""

import dataclasses
from collections.abc import Iterable
from datetime import date, datetime
from typing import TypeVar

from rosarium.catalog import FERTILIZERS, TRANSPLANT_TYPES, RoseInfo, label_for, lookup_rose
from rosarium.core.dates import local_day, now_iso, parse_iso, replace_day, stamp_for_day
from rosarium.core.soil import SoilMix, transplant_details
from rosarium.exceptions import ChildNotFoundError
from rosarium.models.variety import (
    Event,
    EventType,
    Note,
    Photo,
    PhotoType,
    Variety,
    new_id,
)

PRUNING_DEFAULT_DETAILS = "Pruning Session"

_Child = TypeVar("_Child", Event, Photo, Note)


def _swap(children: tuple[_Child, ...], child: _Child, kind: str) -> tuple[_Child, ...]:
    if not any(c.id == child.id for c in children):
        raise ChildNotFoundError(kind, child.id)
    return tuple(child if c.id == child.id else c for c in children)


def _drop(children: tuple[_Child, ...], child_id: str, kind: str) -> tuple[_Child, ...]:
    if not any(c.id == child_id for c in children):
        raise ChildNotFoundError(kind, child_id)
    return tuple(c for c in children if c.id != child_id)


def _find(children: Iterable[_Child], child_id: str, kind: str) -> _Child:
    for child in children:
        if child.id == child_id:
            return child
    raise ChildNotFoundError(kind, child_id)


# --- Primitives ---


def add_event(variety: Variety, event: Event) -> Variety:
    return dataclasses.replace(variety, events=(event, *variety.events))


def replace_event(variety: Variety, event: Event) -> Variety:
    return dataclasses.replace(variety, events=_swap(variety.events, event, "event"))


def remove_event(variety: Variety, event_id: str) -> Variety:
    return dataclasses.replace(variety, events=_drop(variety.events, event_id, "event"))


def add_photo(variety: Variety, photo: Photo) -> Variety:
    return dataclasses.replace(variety, photos=(photo, *variety.photos))


def replace_photo(variety: Variety, photo: Photo) -> Variety:
    return dataclasses.replace(variety, photos=_swap(variety.photos, photo, "photo"))


def remove_photo(variety: Variety, photo_id: str) -> Variety:
    return dataclasses.replace(variety, photos=_drop(variety.photos, photo_id, "photo"))


def add_note(variety: Variety, note: Note) -> Variety:
    return dataclasses.replace(variety, notes=(note, *variety.notes))


def replace_note(variety: Variety, note: Note) -> Variety:
    return dataclasses.replace(variety, notes=_swap(variety.notes, note, "note"))


def remove_note(variety: Variety, note_id: str) -> Variety:
    return dataclasses.replace(variety, notes=_drop(variety.notes, note_id, "note"))


# --- Variety fields ---


def set_planting_date(variety: Variety, when: str | None) -> Variety:
    return dataclasses.replace(variety, planting_date=when)


def set_transplant_date(variety: Variety, when: str | None) -> Variety:
    return dataclasses.replace(variety, transplant_date=when)


def set_memo(variety: Variety, memo: str) -> Variety:
    return dataclasses.replace(variety, memo=memo)


def library_update_for(variety: Variety, name: str) -> RoseInfo | None:
    """Library defaults offered when a variety is renamed to a known rose."""
    if name == variety.name:
        return None
    return lookup_rose(name)


def rename_variety(
    variety: Variety, *, name: str, breeder: str, apply_library: bool = False
) -> Variety:
    """Change name and breeder.

    When ``apply_library`` is set and the new name is in the rose library,
    the type and feature are overwritten with the library values.
    """
    if not name.strip() or not breeder:
        msg = "Name and breeder are required"
        raise ValueError(msg)
    updated = dataclasses.replace(variety, name=name, breeder=breeder)
    info = library_update_for(variety, name)
    if apply_library and info is not None:
        updated = dataclasses.replace(updated, rose_type=info.type, feature=info.feature)
    return updated


# --- Care log ---


def record_fertilizer(
    variety: Variety, fertilizer: str, day: date, *, now: datetime | None = None
) -> Variety:
    label = label_for(FERTILIZERS, fertilizer)
    if label is None:
        msg = f"Unknown fertilizer {fertilizer!r}"
        raise ValueError(msg)
    event = Event(
        id=new_id(),
        type=EventType.FERTILIZER,
        date=stamp_for_day(day, now),
        details=label,
        sub_type=fertilizer,
    )
    return add_event(variety, event)


def record_transplant(
    variety: Variety,
    kind: str,
    day: date,
    mix: SoilMix,
    *,
    pot_size: str = "",
    now: datetime | None = None,
) -> Variety:
    """Log a transplant and move the variety's transplant date in one step."""
    if label_for(TRANSPLANT_TYPES, kind) is None:
        msg = f"Unknown transplant type {kind!r}"
        raise ValueError(msg)
    if not mix.is_complete:
        msg = f"Soil mix must total 100%, got {mix.total}%"
        raise ValueError(msg)
    stamp = stamp_for_day(day, now)
    event = Event(
        id=new_id(),
        type=EventType.TRANSPLANT,
        date=stamp,
        details=transplant_details(kind, mix, pot_size.strip()),
        sub_type=kind,
    )
    return dataclasses.replace(
        variety, events=(event, *variety.events), transplant_date=stamp
    )


def record_pest_control(
    variety: Variety, issue: str, day: date, *, now: datetime | None = None
) -> Variety:
    if not issue.strip():
        msg = "Issue label is required"
        raise ValueError(msg)
    event = Event(
        id=new_id(),
        type=EventType.PEST_CONTROL,
        date=stamp_for_day(day, now),
        details=issue,
    )
    return add_event(variety, event)


def edit_event(
    variety: Variety,
    event_id: str,
    *,
    when: str | None = None,
    details: str | None = None,
) -> Variety:
    event = _find(variety.events, event_id, "event")
    updated = dataclasses.replace(
        event,
        date=when if when is not None else event.date,
        details=details if details is not None else event.details,
    )
    return replace_event(variety, updated)


# --- Pruning and photos ---


def record_pruning(
    variety: Variety,
    day: date,
    *,
    details: str = "",
    before_url: str | None = None,
    after_url: str | None = None,
    now: datetime | None = None,
) -> Variety:
    """Log a pruning session with optional before/after photos.

    The event and photos share one timestamp but carry no reference to each
    other; see photos_for_event() for how they are matched up again.
    """
    if not before_url and not after_url and not details.strip():
        msg = "Nothing to record: add details or at least one photo"
        raise ValueError(msg)
    stamp = stamp_for_day(day, now)
    text = details.strip() or PRUNING_DEFAULT_DETAILS
    updated = add_event(
        variety, Event(id=new_id(), type=EventType.PRUNING, date=stamp, details=text)
    )
    for url, kind in ((before_url, PhotoType.PRUNING_BEFORE), (after_url, PhotoType.PRUNING_AFTER)):
        if url:
            updated = add_photo(
                updated, Photo(id=new_id(), url=url, date=stamp, type=kind, note=text)
            )
    return updated


def add_bloom_photo(variety: Variety, url: str, *, when: str | None = None) -> Variety:
    photo = Photo(id=new_id(), url=url, date=when or now_iso(), type=PhotoType.BLOOM)
    return add_photo(variety, photo)


def edit_photo(
    variety: Variety,
    photo_id: str,
    *,
    day: date | None = None,
    note: str | None = None,
) -> Variety:
    """Move a photo to another day (keeping its time of day) and/or change its note."""
    photo = _find(variety.photos, photo_id, "photo")
    updated = dataclasses.replace(
        photo,
        date=replace_day(photo.date, day) if day is not None else photo.date,
        note=note if note is not None else photo.note,
    )
    return replace_photo(variety, updated)


# --- Journal ---


def record_note(
    variety: Variety, content: str, day: date, *, now: datetime | None = None
) -> Variety:
    if not content.strip():
        msg = "Journal entry is empty"
        raise ValueError(msg)
    return add_note(variety, Note(id=new_id(), date=stamp_for_day(day, now), content=content))


def edit_note(
    variety: Variety,
    note_id: str,
    *,
    day: date | None = None,
    content: str | None = None,
) -> Variety:
    note = _find(variety.notes, note_id, "note")
    updated = dataclasses.replace(
        note,
        date=replace_day(note.date, day) if day is not None else note.date,
        content=content if content is not None else note.content,
    )
    return replace_note(variety, updated)


# --- Display helpers (local re-sorts, stored order is untouched) ---


def _newest_first_key(item: Event | Photo | Note) -> float:
    moment = parse_iso(item.date)
    return moment.timestamp() if moment else float("-inf")


def pruning_photos(variety: Variety) -> list[Photo]:
    photos = [
        p for p in variety.photos if p.type in (PhotoType.PRUNING_BEFORE, PhotoType.PRUNING_AFTER)
    ]
    return sorted(photos, key=_newest_first_key, reverse=True)


def bloom_photos(variety: Variety) -> list[Photo]:
    photos = [p for p in variety.photos if p.type == PhotoType.BLOOM]
    return sorted(photos, key=_newest_first_key, reverse=True)


def sorted_notes(variety: Variety) -> list[Note]:
    return sorted(variety.notes, key=_newest_first_key, reverse=True)


def photos_for_event(variety: Variety, event: Event) -> list[Photo]:
    """Pruning photos taken on the same calendar day as ``event``.

    Best effort: photos carry no event reference, so two sessions on the
    same day share their photos.
    """
    day = local_day(event.date)
    if day is None:
        return []
    return [p for p in pruning_photos(variety) if local_day(p.date) == day]


def cover_photo(variety: Variety) -> Photo | None:
    """First bloom photo in stored order, used as the list thumbnail."""
    return next((p for p in variety.photos if p.type == PhotoType.BLOOM), None)

"""Tests for coercing untrusted JSON into Variety records."""

import json
from typing import Any

import pytest

from rosarium.core.sanitizer import (
    UNKNOWN_BREEDER,
    UNKNOWN_NAME,
    prepare_import,
    sanitize_variety,
    sanitize_varieties,
)
from rosarium.models.variety import EventType, PhotoType, serialize_varieties
from tests.unit.samples import FULL_RECORD


def test_well_formed_record_round_trips() -> None:
    """A complete record comes back out unchanged."""
    varieties = sanitize_varieties([FULL_RECORD])

    assert serialize_varieties(varieties) == [FULL_RECORD]


def test_sanitize_is_idempotent() -> None:
    """Sanitizing already-sanitized output changes nothing."""
    messy = [{"breeder": 5, "events": [{"type": "NOPE"}], "photos": "x", "roseType": "2"}]
    once = serialize_varieties(sanitize_varieties(messy))

    twice = serialize_varieties(sanitize_varieties(json.loads(json.dumps(once))))

    assert twice == once


def test_breeder_only_record_gets_defaults() -> None:
    """A bare record is filled out with defaults and a fresh id."""
    [variety] = sanitize_varieties(prepare_import([{"breeder": "X"}]))

    assert variety.breeder == "X"
    assert variety.name == UNKNOWN_NAME
    assert variety.id
    assert variety.registration_date
    assert variety.events == ()
    assert variety.photos == ()
    assert variety.notes == ()
    assert variety.memo == ""


def test_missing_rose_type_stays_absent() -> None:
    """Records written before roseType existed load without one."""
    record = {k: v for k, v in FULL_RECORD.items() if k not in ("roseType", "feature")}

    [variety] = sanitize_varieties([record])

    assert variety.rose_type is None
    assert "roseType" not in variety.to_dict()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, 0),
        (3, 3),
        (2.0, 2),
        (2.5, 2.5),
        (float("nan"), None),
        ("2", None),
        (True, None),
        (None, None),
    ],
)
def test_rose_type_coercion(value: Any, expected: int | float | None) -> None:
    """Finite numbers survive as a resistance type; whole floats become int."""
    variety = sanitize_variety({"roseType": value})

    assert variety.rose_type == expected


def test_wrong_field_types_fall_back() -> None:
    """Each wrongly typed field is replaced by its default, the rest is kept."""
    variety = sanitize_variety(
        {
            "id": "keep-me",
            "breeder": ["nope"],
            "name": 42,
            "memo": None,
            "plantingDate": 17,
            "events": {"not": "a list"},
            "notes": [{"content": "kept"}],
        }
    )

    assert variety.id == "keep-me"
    assert variety.breeder == UNKNOWN_BREEDER
    assert variety.name == UNKNOWN_NAME
    assert variety.memo == ""
    assert variety.planting_date is None
    assert variety.events == ()
    assert [n.content for n in variety.notes] == ["kept"]


def test_non_object_elements_become_default_records() -> None:
    """Garbage array elements do not abort loading the rest."""
    varieties = sanitize_varieties([None, "junk", FULL_RECORD])

    assert len(varieties) == 3
    assert varieties[0].name == UNKNOWN_NAME
    assert varieties[2].id == "rose-1"


def test_non_list_document_yields_empty() -> None:
    """Anything other than an array is an empty collection."""
    assert sanitize_varieties({"id": "x"}) == []
    assert sanitize_varieties(None) == []


def test_unknown_child_types_are_mapped() -> None:
    """Unknown event and photo types fall back to OTHER and GENERAL."""
    variety = sanitize_variety(
        {
            "events": [{"id": "e", "type": "WATERING", "date": "2024-01-01", "details": ""}],
            "photos": [{"id": "p", "type": ["x"], "url": "u", "date": "2024-01-01"}],
        }
    )

    assert variety.events[0].type == EventType.OTHER
    assert variety.photos[0].type == PhotoType.GENERAL


def test_children_without_ids_get_fresh_ids() -> None:
    """Child ids are regenerated when missing so they can be edited later."""
    variety = sanitize_variety({"notes": [{"content": "a"}, {"content": "b"}], "events": [1, None]})

    assert len(variety.notes) == 2
    assert variety.notes[0].id != variety.notes[1].id
    assert variety.events == ()


def test_prepare_import_keeps_fields_and_forces_lists() -> None:
    """The import pass only guarantees id and child arrays."""
    [item] = prepare_import([{"id": "", "name": "Rose", "events": "bad", "extra": 1}])

    assert item["id"]
    assert item["name"] == "Rose"
    assert item["extra"] == 1
    assert item["events"] == []
    assert item["photos"] == []
    assert item["notes"] == []

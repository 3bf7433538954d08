"""Tests for the Variety model and its JSON shape."""

import uuid

from rosarium.catalog import BREEDERS, lookup_rose, resistance_label, short_label
from rosarium.models.variety import Event, EventType, Photo, PhotoType, Variety, new_id


def test_new_id_is_unique_uuid() -> None:
    """Ids are random UUID strings."""
    first, second = new_id(), new_id()

    assert first != second
    assert str(uuid.UUID(first)) == first


def test_create_fills_type_and_feature_from_library() -> None:
    """A known variety name gets its resistance type and description."""
    variety = Variety.create(breeder="デビットオースチン (David Austin)", name="ボスコベル")

    assert variety.rose_type == 2
    assert variety.feature is not None
    assert variety.feature.startswith("Rich salmon-pink")
    assert variety.events == ()
    assert variety.memo == ""
    assert variety.registration_date.endswith("Z")


def test_create_unknown_name_leaves_type_empty() -> None:
    """Free-text names are accepted without library data."""
    variety = Variety.create(breeder="My garden", name="Seedling #3")

    assert variety.rose_type is None
    assert variety.feature is None


def test_to_dict_uses_camel_case_and_omits_absent_optionals() -> None:
    """Absent optionals are left out rather than written as null."""
    variety = Variety(id="v1", breeder="B", name="N", registration_date="2024-01-01T00:00:00.000Z")

    data = variety.to_dict()

    assert data == {
        "id": "v1",
        "breeder": "B",
        "name": "N",
        "registrationDate": "2024-01-01T00:00:00.000Z",
        "events": [],
        "photos": [],
        "notes": [],
        "memo": "",
    }


def test_to_dict_includes_children_and_subtype() -> None:
    """Child records serialize with their own camelCase keys."""
    variety = Variety(
        id="v1",
        breeder="B",
        name="N",
        registration_date="2024-01-01T00:00:00.000Z",
        rose_type=0,
        events=(Event("e1", EventType.FERTILIZER, "2024-01-02T00:00:00.000Z", "x", "SOLID"),),
        photos=(Photo("p1", "data:,", "2024-01-03T00:00:00.000Z", PhotoType.BLOOM),),
    )

    data = variety.to_dict()

    assert data["roseType"] == 0
    assert data["events"][0] == {
        "id": "e1",
        "type": "FERTILIZER",
        "date": "2024-01-02T00:00:00.000Z",
        "details": "x",
        "subType": "SOLID",
    }
    assert "note" not in data["photos"][0]


def test_catalog_library_covers_breeder_lists() -> None:
    """Library entries are looked up by the names the breeder lists offer."""
    austin = BREEDERS["デビットオースチン (David Austin)"]

    assert lookup_rose(austin[0]) is not None
    assert lookup_rose("Not a rose") is None


def test_short_label_strips_gloss() -> None:
    """Parenthesised translations are dropped for compact display."""
    assert short_label("赤玉土 (Akadama)") == "赤玉土"
    assert short_label("Plain") == "Plain"


def test_resistance_label_tiers() -> None:
    """Type 0 is highlighted, type 3 and above is flagged."""
    assert "highly resistant" in resistance_label(0)
    assert resistance_label(1) == "Type 1"
    assert "needs care" in resistance_label(3)
    assert resistance_label(None) == "Type ?"

"""Tests for the pure Variety transitions."""

from datetime import UTC, date, datetime

import pytest

from rosarium.core import mutators
from rosarium.core.soil import SoilComponent, SoilMix
from rosarium.exceptions import ChildNotFoundError
from rosarium.models.variety import EventType, Note, PhotoType, Variety

NOW = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)
TODAY = date(2024, 5, 1)


@pytest.fixture
def variety() -> Variety:
    return Variety(id="v1", breeder="B", name="N", registration_date="2024-01-01T00:00:00.000Z")


def test_record_fertilizer_sets_label_and_subtype(variety: Variety) -> None:
    """The event shows the label but remembers the option value."""
    updated = mutators.record_fertilizer(variety, "LIQUID", TODAY, now=NOW)

    [event] = updated.events
    assert event.type == EventType.FERTILIZER
    assert event.details == "液体肥料 (Liquid)"
    assert event.sub_type == "LIQUID"
    assert event.date == "2024-05-01T09:00:00.000Z"
    assert updated.id == variety.id


def test_record_fertilizer_rejects_unknown_option(variety: Variety) -> None:
    """Only catalog fertilizers can be logged."""
    with pytest.raises(ValueError, match="Unknown fertilizer"):
        mutators.record_fertilizer(variety, "MAGIC", TODAY, now=NOW)


def test_children_are_prepended(variety: Variety) -> None:
    """Newest records come first."""
    updated = mutators.record_pest_control(variety, "アブラムシ (Aphids)", TODAY, now=NOW)
    updated = mutators.record_fertilizer(updated, "SOLID", TODAY, now=NOW)

    assert [e.type for e in updated.events] == [EventType.FERTILIZER, EventType.PEST_CONTROL]


def test_record_transplant_updates_event_and_date_together(variety: Variety) -> None:
    """One transition adds the event and moves the transplant date."""
    mix = SoilMix([SoilComponent("AKADAMA", 60), SoilComponent("COMPOST", 40)])

    updated = mutators.record_transplant(
        variety, "POT_UP", date(2024, 4, 10), mix, pot_size="8 -> 10", now=NOW
    )

    [event] = updated.events
    assert event.type == EventType.TRANSPLANT
    assert event.sub_type == "POT_UP"
    assert event.details == "鉢増し (Pot Up) [8 -> 10] | Soil: 赤玉土 (60%) + 堆肥 (40%)"
    assert updated.transplant_date == event.date == "2024-04-10T00:00:00.000Z"


def test_record_transplant_rejects_incomplete_mix(variety: Variety) -> None:
    """A soil mix must add up to 100%."""
    mix = SoilMix([SoilComponent("AKADAMA", 60)])

    with pytest.raises(ValueError, match="100%"):
        mutators.record_transplant(variety, "TRANSPLANT", TODAY, mix, now=NOW)


def test_record_pruning_links_photos_by_timestamp(variety: Variety) -> None:
    """Before/after photos share the event's date and carry its details as note."""
    updated = mutators.record_pruning(
        variety, TODAY, details="Winter cut", before_url="data:b", after_url="data:a", now=NOW
    )

    [event] = updated.events
    assert event.type == EventType.PRUNING
    assert {p.type for p in updated.photos} == {PhotoType.PRUNING_BEFORE, PhotoType.PRUNING_AFTER}
    assert all(p.date == event.date and p.note == "Winter cut" for p in updated.photos)
    assert len(mutators.photos_for_event(updated, event)) == 2


def test_record_pruning_defaults_details(variety: Variety) -> None:
    """A photo-only session gets a default description."""
    updated = mutators.record_pruning(variety, TODAY, after_url="data:a", now=NOW)

    assert updated.events[0].details == mutators.PRUNING_DEFAULT_DETAILS
    assert [p.type for p in updated.photos] == [PhotoType.PRUNING_AFTER]


def test_record_pruning_needs_something(variety: Variety) -> None:
    """An empty session is refused."""
    with pytest.raises(ValueError, match="Nothing to record"):
        mutators.record_pruning(variety, TODAY, details="  ", now=NOW)


def test_edit_and_remove_event(variety: Variety) -> None:
    """Children are edited and removed by id."""
    updated = mutators.record_pest_control(variety, "Spray", TODAY, now=NOW)
    event_id = updated.events[0].id

    edited = mutators.edit_event(updated, event_id, details="Spray again")
    removed = mutators.remove_event(edited, event_id)

    assert edited.events[0].details == "Spray again"
    assert edited.events[0].date == updated.events[0].date
    assert removed.events == ()


def test_unknown_child_id_raises(variety: Variety) -> None:
    """Editing or removing an id the variety does not have is an error."""
    with pytest.raises(ChildNotFoundError):
        mutators.remove_photo(variety, "nope")
    with pytest.raises(ChildNotFoundError):
        mutators.edit_note(variety, "nope", content="x")


def test_edit_photo_moves_day_and_keeps_note(variety: Variety) -> None:
    """Changing a photo's day does not touch its note."""
    updated = mutators.add_bloom_photo(variety, "data:x", when="2024-05-01T09:00:00.000Z")
    photo = updated.photos[0]

    edited = mutators.edit_photo(updated, photo.id, day=date(2024, 5, 3))

    assert edited.photos[0].date != photo.date
    assert edited.photos[0].note is None
    assert edited.photos[0].type == PhotoType.BLOOM


def test_record_note_rejects_blank(variety: Variety) -> None:
    """Whitespace-only journal entries are not saved."""
    with pytest.raises(ValueError):
        mutators.record_note(variety, "   ", TODAY, now=NOW)


def test_sorted_notes_newest_first(variety: Variety) -> None:
    """Notes display newest first regardless of insertion order."""
    older = Note("n1", "2024-01-01T00:00:00.000Z", "old")
    newer = Note("n2", "2024-03-01T00:00:00.000Z", "new")
    updated = mutators.add_note(mutators.add_note(variety, newer), older)

    assert [n.id for n in mutators.sorted_notes(updated)] == ["n2", "n1"]
    assert [n.id for n in updated.notes] == ["n1", "n2"]


def test_rename_applies_library_only_when_asked(variety: Variety) -> None:
    """Library type/feature overwrite is opt-in."""
    plain = mutators.rename_variety(variety, name="ボスコベル", breeder="B")
    filled = mutators.rename_variety(variety, name="ボスコベル", breeder="B", apply_library=True)

    assert plain.rose_type is None
    assert filled.rose_type == 2
    assert mutators.library_update_for(filled, "ボスコベル") is None


def test_cover_photo_is_first_bloom(variety: Variety) -> None:
    """The list thumbnail is the first bloom photo in stored order."""
    updated = mutators.add_bloom_photo(variety, "data:1")
    updated = mutators.record_pruning(updated, TODAY, before_url="data:p", now=NOW)
    updated = mutators.add_bloom_photo(updated, "data:2")

    cover = mutators.cover_photo(updated)

    assert cover is not None
    assert cover.url == "data:2"

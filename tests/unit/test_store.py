"""Tests for the in-memory RecordStore."""

import pytest

from rosarium.core.store import RecordStore
from rosarium.exceptions import VarietyNotFoundError
from rosarium.models.variety import Variety


def _variety(variety_id: str, name: str = "Rose") -> Variety:
    return Variety(
        id=variety_id, breeder="B", name=name, registration_date="2024-01-01T00:00:00.000Z"
    )


def test_add_prepends() -> None:
    """New varieties appear first."""
    store = RecordStore()

    store.add(_variety("a"))
    store.add(_variety("b"))

    assert [v.id for v in store] == ["b", "a"]
    assert len(store) == 2


def test_update_replaces_in_place() -> None:
    """Update keeps the position of the variety."""
    store = RecordStore([_variety("a"), _variety("b"), _variety("c")])

    store.update(_variety("b", name="Renamed"))

    assert [v.name for v in store] == ["Rose", "Renamed", "Rose"]


def test_update_missing_id_raises() -> None:
    """Updating an unknown id is an error and leaves the store alone."""
    store = RecordStore([_variety("a")])

    with pytest.raises(VarietyNotFoundError):
        store.update(_variety("zzz"))

    assert [v.id for v in store] == ["a"]


def test_remove_deletes_and_raises_for_unknown() -> None:
    """Remove drops exactly the requested id."""
    store = RecordStore([_variety("a"), _variety("b")])

    store.remove("a")

    assert [v.id for v in store] == ["b"]
    with pytest.raises(VarietyNotFoundError):
        store.remove("a")


def test_get_and_find() -> None:
    """find returns None, get raises, for unknown ids."""
    store = RecordStore([_variety("a")])

    assert store.find("a") is store.get("a")
    assert store.find("x") is None
    with pytest.raises(LookupError):
        store.get("x")


def test_listeners_receive_each_new_snapshot() -> None:
    """Every transition notifies with the full new collection."""
    store = RecordStore()
    seen: list[tuple[str, ...]] = []
    unsubscribe = store.subscribe(lambda vs: seen.append(tuple(v.id for v in vs)))

    store.add(_variety("a"))
    store.replace_all([_variety("x"), _variety("y")])
    unsubscribe()
    store.add(_variety("z"))

    assert seen == [("a",), ("x", "y")]


def test_snapshots_are_not_mutated_by_later_changes() -> None:
    """A snapshot handed out earlier never changes."""
    store = RecordStore([_variety("a")])
    before = store.varieties

    store.add(_variety("b"))

    assert [v.id for v in before] == ["a"]


def test_remove_leaves_other_varieties_untouched() -> None:
    """The remaining varieties are the very same objects, children included."""
    a, b, c = _variety("a"), _variety("b"), _variety("c")
    store = RecordStore([a, b, c])
    before = [v.to_dict() for v in (a, c)]

    store.remove("b")

    assert store.varieties[0] is a
    assert store.varieties[1] is c
    assert [v.to_dict() for v in store] == before

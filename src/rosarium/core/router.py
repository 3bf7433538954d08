"""Which screen is showing, and which variety (if any) is being edited.

Pure state; no I/O.
"""

from dataclasses import dataclass

from rosarium.core.store import RecordStore


@dataclass(frozen=True)
class ListView:
    pass


@dataclass(frozen=True)
class NewView:
    pass


@dataclass(frozen=True)
class DetailView:
    variety_id: str


@dataclass(frozen=True)
class SettingsView:
    pass


View = ListView | NewView | DetailView | SettingsView


class ViewRouter:
    def __init__(self) -> None:
        self.current: View = ListView()
        self.editing_id: str | None = None

    def show_list(self) -> None:
        self.current = ListView()

    def show_new(self) -> None:
        self.current = NewView()

    def show_detail(self, variety_id: str) -> None:
        self.current = DetailView(variety_id)

    def show_settings(self) -> None:
        self.current = SettingsView()

    def start_editing(self, variety_id: str) -> None:
        self.editing_id = variety_id

    def stop_editing(self) -> None:
        self.editing_id = None

    def forget(self, variety_id: str) -> None:
        """Drop every reference to a deleted variety and fall back to the list."""
        if self.editing_id == variety_id:
            self.editing_id = None
        if isinstance(self.current, DetailView) and self.current.variety_id == variety_id:
            self.current = ListView()

    def resolve(self, store: RecordStore) -> View:
        """Return the view to render, redirecting stale detail links to the list."""
        if isinstance(self.current, DetailView) and store.find(self.current.variety_id) is None:
            self.current = ListView()
        if self.editing_id is not None and store.find(self.editing_id) is None:
            self.editing_id = None
        return self.current

"""Application controller: wires the store, router and autosave together.

A front end (the CLI, or anything else) owns one GardenApp for the lifetime of
a session: ``open()`` loads the saved document and starts autosaving,
``close()`` flushes whatever is still pending.
"""

from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from loguru import logger

from rosarium.core import mutators
from rosarium.core.backup import export_json, export_to_directory, load_backup
from rosarium.core.confirm import (
    DELETE_EVENT_PROMPT,
    DELETE_NOTE_PROMPT,
    DELETE_PHOTO_PROMPT,
    DELETE_VARIETY_PROMPT,
    IMPORT_PROMPT,
    RESET_PROMPT,
    Confirm,
    PendingAction,
)
from rosarium.core.persistence import PersistenceAdapter, SaveStatus
from rosarium.core.router import ListView, ViewRouter
from rosarium.core.sanitizer import prepare_import, sanitize_varieties
from rosarium.core.scheduler import ThreadingScheduler
from rosarium.core.store import RecordStore
from rosarium.models.variety import Variety
from rosarium.photos import encode_photo
from rosarium.protocols import PhotoEncoderProtocol, SchedulerProtocol, StorageProtocol


class GardenApp:
    """One user's rose garden, backed by a key/value storage."""

    def __init__(
        self,
        storage: StorageProtocol,
        scheduler: SchedulerProtocol | None = None,
        *,
        encoder: PhotoEncoderProtocol = encode_photo,
    ) -> None:
        self.store = RecordStore()
        self.router = ViewRouter()
        self.persistence = PersistenceAdapter(storage, scheduler or ThreadingScheduler())
        self.encoder = encoder
        self._unsubscribe: Callable[[], None] | None = None

    def open(self) -> "GardenApp":
        """Load saved data and start autosaving every change."""
        self.store.replace_all(self.persistence.load())
        self._unsubscribe = self.store.subscribe(self.persistence.notify)
        return self

    def close(self) -> None:
        self.persistence.flush()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> "GardenApp":
        return self.open()

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def status(self) -> SaveStatus:
        return self.persistence.status

    # --- Varieties ---

    def get_variety(self, variety_id: str) -> Variety:
        return self.store.get(variety_id)

    def open_detail(self, variety_id: str) -> Variety | None:
        """Show a variety. A stale id lands back on the list and returns None."""
        self.router.show_detail(variety_id)
        if isinstance(self.router.resolve(self.store), ListView):
            logger.debug("Variety {} is gone, showing the list", variety_id)
            return None
        return self.store.find(variety_id)

    def register_variety(self, *, breeder: str, name: str) -> Variety:
        if not breeder.strip() or not name.strip():
            msg = "Breeder and name are required"
            raise ValueError(msg)
        variety = Variety.create(breeder=breeder, name=name)
        self.store.add(variety)
        self.router.show_list()
        logger.info("Registered {} ({})", variety.name, variety.id)
        return variety

    def update_variety(self, variety: Variety) -> None:
        self.store.update(variety)

    def apply(
        self,
        variety_id: str,
        mutator: Callable[..., Variety],
        *args: Any,
        **kwargs: Any,
    ) -> Variety:
        """Run a pure mutator against a stored variety and store the result."""
        updated = mutator(self.store.get(variety_id), *args, **kwargs)
        self.update_variety(updated)
        return updated

    def edit_variety_info(
        self, variety_id: str, *, name: str, breeder: str, confirm: Confirm
    ) -> Variety:
        """Rename a variety, offering the library type/feature if the new name is known."""
        variety = self.store.get(variety_id)
        info = mutators.library_update_for(variety, name)
        apply_library = info is not None and confirm(
            f'Update variety details (Type {info.type}, Feature) based on "{name}"?'
        )
        updated = mutators.rename_variety(
            variety, name=name, breeder=breeder, apply_library=apply_library
        )
        self.store.update(updated)
        self.router.stop_editing()
        return updated

    def request_delete_variety(self, variety_id: str) -> PendingAction:
        variety = self.store.get(variety_id)

        def effect() -> None:
            self.store.remove(variety_id)
            self.router.forget(variety_id)
            self.router.show_list()
            logger.info("Deleted {} ({})", variety.name, variety_id)

        return PendingAction(DELETE_VARIETY_PROMPT, effect)

    # --- Child records ---

    def _request_child_delete(
        self,
        variety_id: str,
        child_id: str,
        remover: Callable[[Variety, str], Variety],
        prompt: str,
    ) -> PendingAction:
        # Fail now, not after the user has already said yes.
        remover(self.store.get(variety_id), child_id)

        def effect() -> None:
            self.apply(variety_id, remover, child_id)

        return PendingAction(prompt, effect)

    def request_delete_event(self, variety_id: str, event_id: str) -> PendingAction:
        return self._request_child_delete(
            variety_id, event_id, mutators.remove_event, DELETE_EVENT_PROMPT
        )

    def request_delete_photo(self, variety_id: str, photo_id: str) -> PendingAction:
        return self._request_child_delete(
            variety_id, photo_id, mutators.remove_photo, DELETE_PHOTO_PROMPT
        )

    def request_delete_note(self, variety_id: str, note_id: str) -> PendingAction:
        return self._request_child_delete(
            variety_id, note_id, mutators.remove_note, DELETE_NOTE_PROMPT
        )

    def add_bloom_photo(self, variety_id: str, data: bytes) -> Variety:
        return self.apply(variety_id, mutators.add_bloom_photo, self.encoder(data))

    def record_pruning(
        self,
        variety_id: str,
        day: date,
        *,
        details: str = "",
        before: bytes | None = None,
        after: bytes | None = None,
    ) -> Variety:
        return self.apply(
            variety_id,
            mutators.record_pruning,
            day,
            details=details,
            before_url=self.encoder(before) if before else None,
            after_url=self.encoder(after) if after else None,
        )

    # --- Settings: export, import, reset ---

    def export_text(self) -> str:
        return export_json(self.store.varieties)

    def export_backup(self, directory: Path, *, day: date | None = None) -> Path:
        return export_to_directory(self.store.varieties, directory, day=day)

    def request_import(self, items: list[Any]) -> PendingAction:
        """Replace every variety with an already-validated backup, once confirmed."""

        def effect() -> None:
            varieties = sanitize_varieties(prepare_import(items))
            self.store.replace_all(varieties)
            self.router.stop_editing()
            self.router.show_list()
            logger.info("Imported {} varieties", len(varieties))

        return PendingAction(IMPORT_PROMPT, effect)

    def request_import_file(self, path: Path) -> PendingAction:
        """Validate a backup file now; the returned action replaces the data.

        Raises:
            ImportValidationError: The file is unreadable or not a JSON array.
        """
        return self.request_import(load_backup(path))

    def request_reset(self) -> PendingAction:
        """Erase the saved document: the escape hatch for unrecoverable data."""

        def effect() -> None:
            self.persistence.clear()
            self.store.replace_all(())
            self.router.stop_editing()
            self.router.show_list()

        return PendingAction(RESET_PROMPT, effect)

"""Debounced write-back of the record store to key/value storage."""

import json
import threading
from collections.abc import Callable, Sequence
from enum import StrEnum

from loguru import logger

from rosarium.config import SAVE_DEBOUNCE_SECONDS, SAVED_DISPLAY_SECONDS, STORAGE_KEY
from rosarium.core.sanitizer import sanitize_varieties
from rosarium.models.variety import Variety, serialize_varieties
from rosarium.protocols import SchedulerProtocol, StorageProtocol, TimerHandle


class SaveStatus(StrEnum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


StatusListener = Callable[[SaveStatus], None]


class PersistenceAdapter:
    """Keep the stored document eventually consistent with the store.

    Every change restarts a trailing-edge debounce timer, so a burst of edits
    produces a single write of the last state. A failed write leaves the
    status at ERROR until a later write succeeds; nothing is raised.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        scheduler: SchedulerProtocol,
        *,
        key: str = STORAGE_KEY,
        delay: float = SAVE_DEBOUNCE_SECONDS,
        saved_display: float = SAVED_DISPLAY_SECONDS,
    ) -> None:
        self._storage = storage
        self._scheduler = scheduler
        self.key = key
        self.delay = delay
        self.saved_display = saved_display

        # Timer callbacks run on other threads; the generation counter lets a
        # superseded timer that already fired recognise itself and do nothing.
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: TimerHandle | None = None
        self._pending_state: tuple[Variety, ...] | None = None
        self._revert: TimerHandle | None = None
        self._has_saved: bool | None = None

        self.status = SaveStatus.IDLE
        self._status_listeners: list[StatusListener] = []

    # --- Reading ---

    def has_saved_data(self) -> bool:
        """Whether the key exists. Storage is only asked once, then tracked locally."""
        if self._has_saved is None:
            try:
                self._has_saved = self._storage.get(self.key) is not None
            except (OSError, UnicodeDecodeError):
                return False
        return self._has_saved

    def load(self) -> list[Variety]:
        """Read the stored document once.

        Anything unusable (missing key, unreadable storage, bad JSON, wrong
        top-level shape) yields an empty collection instead of an error.
        """
        try:
            raw = self._storage.get(self.key)
        except (OSError, UnicodeDecodeError):
            logger.exception("Cannot read saved data, starting empty")
            return []
        self._has_saved = raw is not None
        if raw is None:
            logger.debug("No saved data under {!r}", self.key)
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Saved data is not valid JSON, starting empty")
            return []
        if not isinstance(data, list):
            logger.warning("Saved data is a {}, not a list, starting empty", type(data).__name__)
            return []
        varieties = sanitize_varieties(data)
        logger.debug("Loaded {} varieties", len(varieties))
        return varieties

    # --- Status ---

    def subscribe_status(self, listener: StatusListener) -> Callable[[], None]:
        self._status_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._status_listeners:
                self._status_listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: SaveStatus) -> None:
        if status == self.status:
            return
        self.status = status
        for listener in list(self._status_listeners):
            listener(status)

    # --- Writing ---

    @property
    def has_pending(self) -> bool:
        return self._pending_state is not None

    def notify(self, varieties: Sequence[Variety]) -> None:
        """Schedule a write of ``varieties``, superseding any pending one."""
        # An empty first session must not be written: it would look exactly
        # like "no data yet". A write still pending from that session goes too.
        if not varieties and not self.has_saved_data():
            with self._lock:
                self._take_pending()
            self._set_status(SaveStatus.IDLE)
            return

        with self._lock:
            self._cancel_timers()
            self._generation += 1
            generation = self._generation
            self._pending_state = tuple(varieties)
            self._pending = self._scheduler.call_later(self.delay, lambda: self._fire(generation))
        self._set_status(SaveStatus.SAVING)

    def flush(self) -> None:
        """Write a pending change right away instead of waiting for the timer."""
        with self._lock:
            if self._pending_state is None:
                return
            state = self._take_pending()
            generation = self._generation
        if state is not None:
            self._write(state, generation)

    def clear(self) -> None:
        """Drop any pending write and delete the stored document."""
        with self._lock:
            self._take_pending()
        self._storage.remove(self.key)
        self._has_saved = False
        logger.info("Cleared saved data under {!r}", self.key)
        self._set_status(SaveStatus.IDLE)

    def _cancel_timers(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._revert is not None:
            self._revert.cancel()
            self._revert = None

    def _take_pending(self) -> tuple[Variety, ...] | None:
        self._cancel_timers()
        self._generation += 1
        state, self._pending_state = self._pending_state, None
        return state

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
            state, self._pending_state = self._pending_state, None
        if state is not None:
            self._write(state, generation)

    def _write(self, state: tuple[Variety, ...], generation: int) -> None:
        # A change that arrives while the write runs bumps the generation; its
        # own write decides the status, so this one must leave it at SAVING.
        try:
            payload = json.dumps(serialize_varieties(state), ensure_ascii=False)
            self._storage.set(self.key, payload)
        except (OSError, ValueError, TypeError):
            logger.exception("Auto-save failed")
            with self._lock:
                if generation != self._generation:
                    return
            self._set_status(SaveStatus.ERROR)
            return

        logger.debug("Saved {} varieties", len(state))
        with self._lock:
            self._has_saved = True
            if generation != self._generation:
                return
            self._revert = self._scheduler.call_later(
                self.saved_display, lambda: self._revert_to_idle(generation)
            )
        self._set_status(SaveStatus.SAVED)

    def _revert_to_idle(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._revert = None
        if self.status == SaveStatus.SAVED:
            self._set_status(SaveStatus.IDLE)

"""Protocols for dependency injection in the record keeper."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for the key/value store that holds the persisted document."""

    def get(self, key: str) -> str | None:
        """Return the stored text, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store text under a key. May raise OSError (e.g. disk full)."""
        ...

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        ...


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Protocol for delayed callbacks used by the autosave debounce."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` after ``delay`` seconds unless the handle is cancelled."""
        ...


@runtime_checkable
class PhotoEncoderProtocol(Protocol):
    """Protocol for turning raw image bytes into a storable data URI."""

    def __call__(self, data: bytes) -> str: ...

"""Exceptions raised by the Rosarium record store and its helpers."""


class RosariumError(Exception):
    """Base exception for all Rosarium errors."""


class VarietyNotFoundError(RosariumError, LookupError):
    """No variety with the requested id is in the store."""

    def __init__(self, variety_id: str) -> None:
        super().__init__(f"Variety {variety_id!r} not found")
        self.variety_id = variety_id


class ChildNotFoundError(RosariumError, LookupError):
    """An event, photo or note id does not belong to the variety."""

    def __init__(self, kind: str, child_id: str) -> None:
        super().__init__(f"{kind.capitalize()} {child_id!r} not found")
        self.kind = kind
        self.child_id = child_id


class ImportValidationError(RosariumError, ValueError):
    """A backup file cannot be imported. The message is shown to the user."""


class PhotoError(RosariumError, ValueError):
    """An image could not be decoded or re-encoded."""

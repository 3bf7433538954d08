"""Two-step protocol for destructive actions.

The application never deletes anything directly. It hands back a
PendingAction describing what would happen; the caller decides how to ask
(a terminal prompt, a dialog, a test stub) and passes that as ``confirm``.
"""

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

Confirm = Callable[[str], bool]

DELETE_VARIETY_PROMPT = (
    "Delete this variety?\nThis action cannot be undone and all data will be lost."
)
DELETE_EVENT_PROMPT = "Delete this event?"
DELETE_PHOTO_PROMPT = "Delete this photo?"
DELETE_NOTE_PROMPT = "Delete this note?"
IMPORT_PROMPT = "This will replace your current data with the imported file. Are you sure?"
RESET_PROMPT = "Reset all saved data? Everything stored locally will be erased."


@dataclass(frozen=True)
class PendingAction:
    """An action that only takes effect once confirmed."""

    prompt: str
    effect: Callable[[], None]

    def execute(self, confirm: Confirm) -> bool:
        """Ask ``confirm`` and apply the effect if it agrees.

        Returns:
            True if the action ran.
        """
        if not confirm(self.prompt):
            logger.debug("Declined: {}", self.prompt.splitlines()[0])
            return False
        self.effect()
        return True


def always(_prompt: str) -> bool:
    """Confirmation stub for non-interactive callers that already asked."""
    return True

"""Configuration constants for rosarium."""

from pathlib import Path

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/rosarium").expanduser(),
    Path("~/.rosarium").expanduser(),
    Path("~/.config/rosarium").expanduser(),
]

# Single key holding the whole document (a JSON array of varieties).
STORAGE_KEY: str = "rosarium_roses"

# Autosave: wait this long after the last change before writing.
SAVE_DEBOUNCE_SECONDS: float = 1.0

# How long the "saved" status shows before returning to idle.
SAVED_DISPLAY_SECONDS: float = 2.0

# Photos are bounded to this many pixels on the longer side.
PHOTO_MAX_DIMENSION: int = 800
PHOTO_JPEG_QUALITY: int = 70

BACKUP_FILENAME_PREFIX: str = "rosarium_backup_"


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the preferred one if none exist."""
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]

"""Export the collection to a backup file and validate backups for import."""

import json
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

from loguru import logger

from rosarium.config import BACKUP_FILENAME_PREFIX
from rosarium.core.dates import today
from rosarium.exceptions import ImportValidationError
from rosarium.models.variety import Variety, serialize_varieties


def backup_filename(day: date | None = None) -> str:
    return f"{BACKUP_FILENAME_PREFIX}{(day or today()).isoformat()}.json"


def export_json(varieties: Sequence[Variety]) -> str:
    """Pretty-printed JSON array of every variety."""
    return json.dumps(serialize_varieties(varieties), indent=2, ensure_ascii=False) + "\n"


def export_to_directory(
    varieties: Sequence[Variety], directory: Path, *, day: date | None = None
) -> Path:
    """Write a dated backup file into ``directory`` and return its path."""
    path = directory / backup_filename(day)
    path.write_text(export_json(varieties), encoding="utf-8")
    logger.info("Exported {} varieties to {}", len(varieties), path)
    return path


def parse_backup(text: str) -> list[Any]:
    """Decode a backup and check its top-level shape.

    Raises:
        ImportValidationError: The text is not JSON, or not a JSON array.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        msg = "Failed to parse JSON file."
        raise ImportValidationError(msg) from e
    if not isinstance(data, list):
        msg = "Invalid file format."
        raise ImportValidationError(msg)
    return data


def load_backup(path: Path) -> list[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read {path}: {e}"
        raise ImportValidationError(msg) from e
    return parse_backup(text)

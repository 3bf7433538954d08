"""Key/value storage backed by one JSON file per key."""

import os
import re
from pathlib import Path

from loguru import logger

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage:
    """Store text values as ``<key>.json`` files inside a data directory.

    - Do not rewrite a file whose contents are already the same.
    - Write through a temporary file and rename, so a crash mid-write never
      leaves a truncated document behind.
    """

    def __init__(self, datadir: str | Path, *, create: bool = False) -> None:
        path = Path(datadir).expanduser()
        if create:
            path.mkdir(parents=True, exist_ok=True)
        self.datadir = str(path.resolve())
        if not Path(self.datadir).is_dir():
            msg = f"Data directory {self.datadir!r} not found"
            raise ValueError(msg)

        logger.debug("Storage ready, datadir {!r}", self.datadir)

    def path_for(self, key: str) -> Path:
        """Return the file that holds ``key``. Raise if the key is not a plain name."""
        if not _KEY_RE.match(key) or key.startswith("."):
            msg = f"Invalid storage key: {key!r}"
            raise ValueError(msg)
        fname = str(Path(self.datadir) / f"{key}.json")
        if not fname.startswith(self.datadir + "/"):
            msg = f"Path escapes datadir: {fname!r}"
            raise ValueError(msg)
        return Path(fname)

    def get(self, key: str) -> str | None:
        try:
            return self.path_for(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            if path.read_text(encoding="utf-8") == value:
                logger.debug("Unchanged, not writing {}", path)
                return
        except (FileNotFoundError, UnicodeDecodeError):
            pass

        tmp = path.with_suffix(".tmp")
        logger.debug("Writing {}", path)
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(value)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
            logger.debug("Removed {}", path)
        except FileNotFoundError:
            pass

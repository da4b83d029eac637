"""
Storage backends for the serialized definition collection.
"""
import os
import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..core.exceptions import StorageReadError, StorageWriteError, error_context
from ..core.interfaces import DefinitionStorage


logger = logging.getLogger(__name__)


class JSONFileStorage(DefinitionStorage):
    """Collection kept as a UTF-8 JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[str]:
        if not self.path.exists():
            logger.info(f"No stored definitions at {self.path}")
            return None

        with error_context("reading definitions", StorageReadError, logger, location=str(self.path)):
            return self.path.read_text(encoding="utf-8")

    def save(self, serialized: str) -> None:
        """Write atomically: a temp file in the same directory replaces the target."""
        with error_context("writing definitions", StorageWriteError, logger, location=str(self.path)):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(serialized)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        logger.debug(f"Saved {len(serialized)} chars to {self.path}")

    def __repr__(self) -> str:
        return f"JSONFileStorage({str(self.path)!r})"


class MemoryStorage(DefinitionStorage):
    """In-process storage; keeps the last saved text."""

    def __init__(self, initial: Optional[str] = None):
        self.data = initial
        self.saves = 0

    def load(self) -> Optional[str]:
        return self.data

    def save(self, serialized: str) -> None:
        self.data = serialized
        self.saves += 1

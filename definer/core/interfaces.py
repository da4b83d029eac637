"""
Core interfaces for the glossary system.

The command engine only talks to its surroundings through these: where the
output is drawn, how an entry is edited, how files are picked and saved, and
where the collection is stored.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .models import Definition, EditorValues, ResultDescriptor


ImportCallback = Callable[[str], Any]


class IRenderer(ABC):
    """Display surface for result descriptors."""

    @abstractmethod
    def render(self, descriptor: ResultDescriptor) -> None:
        """Draw one descriptor (echo lines are rendered before their result)."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the display surface."""
        pass


class IDefinitionEditor(ABC):
    """Form used by the add and edit flows."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    def open(self, definition: Optional[Definition] = None) -> None:
        """Open blank, or pre-populated with ``definition``."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def get_values(self) -> EditorValues:
        """Current, trimmed field values."""
        pass

    @abstractmethod
    def set_message(self, message: str) -> None:
        """Show a rejection message next to the form."""
        pass


class IFileIO(ABC):
    """File chooser and download/save boundary."""

    @abstractmethod
    def request_import(self, on_loaded: ImportCallback) -> None:
        """
        Ask the user for a JSON file.

        The selection may complete later; ``on_loaded`` is then called once
        with the file's full text content.
        """
        pass

    @abstractmethod
    def save_download(self, filename: str, content: bytes) -> None:
        """Hand exported content to the user under ``filename``."""
        pass


class DefinitionStorage(ABC):
    """Durable storage for the serialized collection."""

    @abstractmethod
    def load(self) -> Optional[str]:
        """Serialized collection, or None when nothing was stored yet."""
        pass

    @abstractmethod
    def save(self, serialized: str) -> None:
        pass

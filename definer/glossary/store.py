"""
In-memory definition collection with persistence hand-off.

The store holds the authoritative copy and is its only writer; every mutation
is followed by a save through the storage backend.
"""
import json
import logging
from importlib import resources
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.exceptions import DefinitionNotFoundError, StorageReadError
from ..core.interfaces import DefinitionStorage
from ..core.models import Definition
from . import serialization


logger = logging.getLogger(__name__)

DEFAULTS_RESOURCE = "default_definitions.json"


def load_default_definitions() -> List[Definition]:
    """Seed collection shipped with the package."""
    text = resources.files("definer.data").joinpath(DEFAULTS_RESOURCE).read_text(encoding="utf-8")
    return [Definition.from_dict(item) for item in json.loads(text)]


class DefinitionStore:
    """Ordered definition collection."""

    def __init__(
        self,
        storage: DefinitionStorage,
        defaults: Optional[Callable[[], Iterable[Definition]]] = None
    ):
        self.storage = storage
        self._defaults = defaults or load_default_definitions
        self._definitions: List[Definition] = []

    # ----- loading -----

    def load(self) -> None:
        """Load from storage, seeding from the defaults when nothing usable is stored."""
        try:
            text = self.storage.load()
            if text is not None:
                self._definitions = serialization.loads(text)
                logger.info(f"Loaded {len(self._definitions)} definitions from {self.storage!r}")
                return
        except StorageReadError as e:
            logger.error(f"Error loading definitions, using defaults: {e}")

        self._definitions = list(self._defaults())
        logger.info(f"Seeded {len(self._definitions)} default definitions")

    # ----- reads -----

    def list(self) -> Tuple[Definition, ...]:
        return tuple(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def find_by_name_or_alias(self, name: str) -> Tuple[Definition, int]:
        """
        Exact, case-insensitive lookup of a term or alias.

        Raises:
            DefinitionNotFoundError: If no definition carries ``name``
        """
        for index, definition in enumerate(self._definitions):
            if definition.has_key(name):
                return definition, index
        raise DefinitionNotFoundError(f"Term '{name}' not found.", term=name)

    # ----- writes -----

    def add(self, definition: Definition) -> None:
        self._definitions.append(definition)
        logger.info(f"Added definition: {definition.term}")
        self.persist()

    def update(self, index: int, definition: Definition) -> None:
        self._check_index(index)
        self._definitions[index] = definition
        logger.info(f"Updated definition #{index}: {definition.term}")
        self.persist()

    def remove_at(self, index: int) -> Definition:
        self._check_index(index)
        removed = self._definitions.pop(index)
        logger.info(f"Deleted definition #{index}: {removed.term}")
        self.persist()
        return removed

    def replace_all(self, definitions: Sequence[Definition]) -> None:
        self._definitions = list(definitions)
        logger.info(f"Replaced collection with {len(self._definitions)} definitions")
        self.persist()

    def persist(self) -> None:
        """
        Save the collection.

        Raises:
            StorageWriteError: If the backend fails; the in-memory collection
                keeps the change
        """
        self.storage.save(serialization.dumps(self._definitions))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._definitions):
            raise DefinitionNotFoundError(f"No definition at position {index}.", index=index)

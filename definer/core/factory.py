"""
Factory for wiring the glossary system from configuration.
"""
import logging
from pathlib import Path
from typing import Optional

from ..commands.dispatcher import CommandDispatcher
from ..glossary.history import CommandHistory
from ..glossary.storage import JSONFileStorage
from ..glossary.store import DefinitionStore
from ..glossary.validator import DefinitionValidator
from ..utils.config_manager import AppConfig
from .interfaces import DefinitionStorage, IDefinitionEditor, IFileIO, IRenderer


logger = logging.getLogger(__name__)


class DefinerFactory:
    """Builds configured stores and dispatchers."""

    @staticmethod
    def create_storage(config: AppConfig) -> DefinitionStorage:
        return JSONFileStorage(Path(config.storage.data_path))

    @staticmethod
    def create_store(
        config: AppConfig,
        storage: Optional[DefinitionStorage] = None
    ) -> DefinitionStore:
        """Create a store and load it (seeding defaults on first run)."""
        store = DefinitionStore(storage or DefinerFactory.create_storage(config))
        store.load()
        return store

    @staticmethod
    def create_dispatcher(
        config: AppConfig,
        renderer: IRenderer,
        editor: IDefinitionEditor,
        file_io: IFileIO,
        storage: Optional[DefinitionStorage] = None
    ) -> CommandDispatcher:
        """
        Create a fully configured command dispatcher.

        Args:
            config: Application configuration
            renderer: Display surface
            editor: Add/edit form
            file_io: Import/export file boundary
            storage: Storage backend (defaults to the configured JSON file)

        Returns:
            Dispatcher over a loaded store
        """
        store = DefinerFactory.create_store(config, storage)
        logger.info(f"Creating dispatcher over {len(store)} definitions")

        return CommandDispatcher(
            store=store,
            renderer=renderer,
            editor=editor,
            file_io=file_io,
            history=CommandHistory(),
            validator=DefinitionValidator(),
            suggestion_threshold=config.matching.suggestion_threshold,
        )

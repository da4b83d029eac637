"""
Command dispatcher: turns one input line into an action against the store.

Holds the transient session state: the open add/edit session and the import
payload waiting for ``import --confirm``.
"""
import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..core.exceptions import (
    DefinerError,
    EditorSessionError,
    ImportFormatError,
    StorageError,
    UsageError,
)
from ..core.interfaces import IDefinitionEditor, IFileIO, IRenderer
from ..core.models import (
    CONFIRM_FLAG,
    EXPORT_FILENAME,
    Creating,
    Definition,
    EditSession,
    Editing,
    ResultDescriptor,
    fold,
)
from ..glossary import serialization
from ..glossary.history import CommandHistory
from ..glossary.matcher import SUGGESTION_THRESHOLD, find_matches, suggest
from ..glossary.store import DefinitionStore
from ..glossary.validator import DefinitionValidator
from . import formatting


logger = logging.getLogger(__name__)

Handler = Callable[[str], Optional[ResultDescriptor]]


def parse_command(line: str) -> Tuple[str, str]:
    """Split on the first whitespace run into ``(base, remainder)``."""
    parts = line.strip().split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


class CommandDispatcher:
    """Routes command lines to handlers and renders their results."""

    def __init__(
        self,
        store: DefinitionStore,
        renderer: IRenderer,
        editor: IDefinitionEditor,
        file_io: IFileIO,
        history: Optional[CommandHistory] = None,
        validator: Optional[DefinitionValidator] = None,
        suggestion_threshold: int = SUGGESTION_THRESHOLD
    ):
        self.store = store
        self.renderer = renderer
        self.editor = editor
        self.file_io = file_io
        self.history = history or CommandHistory()
        self.validator = validator or DefinitionValidator()
        self.suggestion_threshold = suggestion_threshold

        self.session: EditSession = None
        self.pending_import: Optional[List[Definition]] = None

        self._handlers: Dict[str, Handler] = {
            "help": self._help,
            "list": self._list,
            "ls": self._list,
            "add": self._add,
            "edit": self._edit,
            "delete": self._delete,
            "rm": self._delete,
            "find": self._find,
            "export": self._export,
            "import": self._import,
        }

    @property
    def commands(self) -> List[str]:
        return sorted(set(self._handlers) | {"clear"})

    # ========================================================================
    # ENTRY POINTS
    # ========================================================================

    def execute(self, line: str) -> Optional[ResultDescriptor]:
        """Record ``line`` in the history, process it, reset the recall cursor."""
        command = line.strip()
        if not command:
            return None

        self.history.append(command)
        result = self.process(command)
        self.history.reset_cursor()
        return result

    def process(self, line: str) -> Optional[ResultDescriptor]:
        """
        Run one command line.

        The echo of the line is rendered before the result. Unknown commands
        are looked up as terms.

        Returns:
            The rendered result, or None when the command only echoes
        """
        command = line.strip()
        base, remainder = parse_command(command)

        if fold(base) == "clear":
            self._clear()
            return None

        handler = self._handlers.get(fold(base))
        if handler is None:
            handler, remainder = self._find, command

        self.renderer.render(ResultDescriptor.echo(command))

        try:
            result = handler(remainder)
        except StorageError as e:
            logger.error(f"Command '{command}' could not be saved: {e.message}", exc_info=True)
            result = self._error_descriptor(e)
        except DefinerError as e:
            logger.info(f"Command '{command}' failed: {e.message}")
            result = self._error_descriptor(e)

        if result is not None:
            self.renderer.render(result)
        return result

    def save_definition(self) -> ResultDescriptor:
        """
        Submit the editor's values.

        On a validation failure the message goes to the editor and the session
        stays open for correction.

        Raises:
            EditorSessionError: If no add/edit session is open
        """
        session = self.session
        if session is None:
            raise EditorSessionError("No definition is being edited.")

        candidate = self.editor.get_values().to_definition()
        exclude_index = session.index if isinstance(session, Editing) else None

        rejection = self.validator.check(candidate, self.store.list(), exclude_index=exclude_index)
        if rejection is not None:
            self.editor.set_message(rejection.message)
            return ResultDescriptor.error(rejection.message)

        try:
            if isinstance(session, Editing):
                self.store.update(session.index, candidate)
                message = f"Definition for '{candidate.term}' updated."
            else:
                self.store.add(candidate)
                message = f"Definition for '{candidate.term}' saved."
            result = ResultDescriptor.success(message)
        except DefinerError as e:
            logger.error(f"Saving '{candidate.term}' failed: {e.message}", exc_info=True)
            result = self._error_descriptor(e)

        self._close_session()
        self.renderer.render(result)
        return result

    def cancel_edit(self) -> None:
        """Close the editor without writing anything."""
        self._close_session()

    def stage_import(self, text: str) -> ResultDescriptor:
        """
        Resume an ``import`` once the chosen file has been read.

        This is the only writer of the pending import buffer.
        """
        try:
            definitions = serialization.parse_import(text)
        except ImportFormatError as e:
            logger.info(f"Import rejected: {e.message}")
            self.pending_import = None
            result = ResultDescriptor.error(f"Error reading file: {e.message}")
        else:
            self.pending_import = definitions
            logger.info(f"Staged {len(definitions)} definitions for import")
            result = ResultDescriptor.warning(formatting.format_import_staged(len(definitions)))

        self.renderer.render(result)
        return result

    # ========================================================================
    # HANDLERS
    # ========================================================================

    def _help(self, remainder: str) -> ResultDescriptor:
        return ResultDescriptor(formatting.HELP_TEXT)

    def _clear(self) -> None:
        self.renderer.clear()
        self.history.clear()

    def _list(self, remainder: str) -> ResultDescriptor:
        tokens = remainder.split()
        tag = fold(tokens[0]) if tokens else None

        definitions = self.store.list()
        if tag:
            definitions = [d for d in definitions if d.has_tag(tag)]

        if not definitions:
            suffix = f" with tag '{tag}'" if tag else ""
            return ResultDescriptor.warning(f"No terms found{suffix}.")

        ordered = sorted(definitions, key=lambda d: fold(d.term))
        return ResultDescriptor(formatting.format_term_list(ordered, tag))

    def _add(self, remainder: str) -> None:
        self._open_session(Creating(), None)

    def _edit(self, remainder: str) -> None:
        name = " ".join(remainder.split())
        if not name:
            raise UsageError("Usage: edit [term]", command="edit")

        definition, index = self.store.find_by_name_or_alias(name)
        self._open_session(Editing(index), definition)

    def _delete(self, remainder: str) -> ResultDescriptor:
        tokens = remainder.split()
        confirmed = CONFIRM_FLAG in tokens
        name = " ".join(t for t in tokens if t != CONFIRM_FLAG)
        if not name:
            raise UsageError("Usage: delete [term]", command="delete")

        definition, index = self.store.find_by_name_or_alias(name)

        if not confirmed:
            return ResultDescriptor.warning(formatting.format_delete_prompt(name))

        self.store.remove_at(index)
        return ResultDescriptor.success(f"Definition for '{definition.term}' has been deleted.")

    def _find(self, remainder: str) -> ResultDescriptor:
        query = remainder.strip()
        if not query:
            raise UsageError("Usage: find [term]", command="find")

        definitions = self.store.list()
        matches = find_matches(query, definitions)

        if matches.is_empty:
            suggestion = suggest(query, definitions, self.suggestion_threshold)
            return ResultDescriptor.error(formatting.format_not_found(query, suggestion))

        if matches.exact is not None:
            return ResultDescriptor(formatting.format_definition(matches.exact))

        if len(matches.partial) == 1:
            return ResultDescriptor(formatting.format_definition(matches.partial[0]))

        return ResultDescriptor.warning(formatting.format_ambiguous(matches.partial))

    def _export(self, remainder: str) -> ResultDescriptor:
        content = serialization.dumps(self.store.list(), indent=2).encode("utf-8")
        self.file_io.save_download(EXPORT_FILENAME, content)
        return ResultDescriptor.success("Exporting definitions...")

    def _import(self, remainder: str) -> ResultDescriptor:
        if CONFIRM_FLAG not in remainder.split():
            self.file_io.request_import(self.stage_import)
            return ResultDescriptor("Opening file dialog...")

        if self.pending_import is None:
            return ResultDescriptor.warning("No file loaded. Please run 'import' first.")

        staged, self.pending_import = self.pending_import, None
        self.store.replace_all(staged)
        return ResultDescriptor.success("Definitions successfully imported and saved.")

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _open_session(self, session: EditSession, definition: Optional[Definition]) -> None:
        self.session = session
        self.editor.open(definition)

    def _close_session(self) -> None:
        self.session = None
        self.editor.close()

    @staticmethod
    def _error_descriptor(error: DefinerError) -> ResultDescriptor:
        if isinstance(error, UsageError):
            return ResultDescriptor.warning(error.message)
        message = error.message
        if not message.startswith("Error"):
            message = f"Error: {message}"
        return ResultDescriptor.error(message)

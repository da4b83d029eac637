"""
Terminal implementations of the renderer, editor and file collaborators.
"""
import logging
import readline
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.text import Text

from .. import __version__
from ..core.interfaces import IDefinitionEditor, IFileIO, IRenderer, ImportCallback
from ..core.models import Definition, EditorValues, StyleClass
from ..glossary.history import CommandHistory


logger = logging.getLogger(__name__)


class RichRenderer(IRenderer):
    """Renders result descriptors to a Rich console."""

    STYLES = {
        StyleClass.PLAIN: "",
        StyleClass.ECHO: "dim",
        StyleClass.SUCCESS: "green",
        StyleClass.WARNING: "yellow",
        StyleClass.ERROR: "red",
    }

    def __init__(self, console: Console, show_welcome: bool = True):
        self.console = console
        self.show_welcome = show_welcome

    def render(self, descriptor) -> None:
        if descriptor.style is StyleClass.ECHO:
            self.console.print(Text.assemble(("> ", "bold cyan"), (descriptor.content, "dim")))
            return

        # Text() keeps user content out of Rich markup parsing
        self.console.print(Text(descriptor.content, style=self.STYLES[descriptor.style]))
        self.console.print()

    def clear(self) -> None:
        self.console.clear()
        if self.show_welcome:
            self.welcome()

    def welcome(self) -> None:
        self.console.print(f"[bold cyan]Definer v{__version__}[/bold cyan]")
        self.console.print("[dim]Type 'help' to see available commands.[/dim]\n")


class PromptEditor(IDefinitionEditor):
    """Add/edit form driven by click prompts."""

    def __init__(self, console: Console):
        self.console = console
        self._open = False
        self._values = EditorValues()
        self.message = ""

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, definition: Optional[Definition] = None) -> None:
        self._values = EditorValues.from_definition(definition) if definition else EditorValues()
        self.message = ""
        self._open = True

    def close(self) -> None:
        self._open = False

    def get_values(self) -> EditorValues:
        return self._values

    def set_message(self, message: str) -> None:
        self.message = message
        self.console.print(Text(message, style="red"))

    def run(self, dispatcher) -> None:
        """
        Prompt for the fields and submit until saved or cancelled.

        Current values are offered as defaults, so a rejected entry only needs
        the offending field retyped. Ctrl-C or end of input at any prompt
        cancels the edit.
        """
        try:
            while self.is_open:
                current = self._values
                self._values = EditorValues.from_raw(
                    term=click.prompt("Term", default=current.term),
                    aliases=click.prompt("Aliases (comma separated)", default=", ".join(current.aliases)),
                    tags=click.prompt("Tags (comma separated)", default=", ".join(current.tags)),
                    definition=click.prompt("Definition", default=current.definition),
                )
                dispatcher.save_definition()

                if self.is_open and not click.confirm("Edit again?", default=True):
                    self._cancel(dispatcher)
        except click.Abort:
            self.console.print()
            self._cancel(dispatcher)

    def _cancel(self, dispatcher) -> None:
        dispatcher.cancel_edit()
        self.console.print("[dim]Edit cancelled.[/dim]\n")


class PromptFileIO(IFileIO):
    """
    File chooser and export target for the terminal.

    Import requests are queued and resolved by the shell after the ``import``
    command has rendered, then handed back through the callback.
    """

    def __init__(self, console: Console, export_dir: Path = Path(".")):
        self.console = console
        self.export_dir = Path(export_dir).expanduser()
        self._pending: List[ImportCallback] = []

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def request_import(self, on_loaded: ImportCallback) -> None:
        self._pending.append(on_loaded)

    def resolve_pending(self) -> None:
        while self._pending:
            on_loaded = self._pending.pop(0)
            text = self._choose_file()
            if text is not None:
                on_loaded(text)

    def save_download(self, filename: str, content: bytes) -> None:
        path = self.export_dir / filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Export to {path} failed: {e}")
            self.console.print(Text(f"Error: could not write {path}: {e}", style="red"))
            return

        logger.info(f"Exported {len(content)} bytes to {path}")
        self.console.print(f"[dim]Saved to: {path}[/dim]")

    def _choose_file(self) -> Optional[str]:
        try:
            raw = click.prompt("JSON file to import", default="", show_default=False).strip()
        except click.Abort:
            raw = ""
        if not raw:
            self.console.print("[dim]No file selected.[/dim]\n")
            return None

        path = Path(raw).expanduser()
        if path.suffix.lower() != ".json":
            self.console.print(Text(f"Error reading file: {path} is not a .json file.", style="red"))
            return None

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.info(f"Could not read import file {path}: {e}")
            self.console.print(Text(f"Error reading file: {e}", style="red"))
            return None


class ReadlineHistory:
    """
    Mirrors a CommandHistory into readline so the arrow keys recall commands.

    readline also records answers typed at editor and file prompts; rebuilding
    from the command history after every line drops them, and an emptied
    history (``clear``) empties readline too.
    """

    def __init__(self, history: CommandHistory):
        self.history = history

    def sync(self) -> None:
        readline.clear_history()
        for entry in self.history.entries:
            readline.add_history(entry)

#!/usr/bin/env python3
"""
Definer - Command Line Interface
"""
import sys
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..commands.dispatcher import CommandDispatcher
from ..core.exceptions import DefinerError
from ..core.factory import DefinerFactory
from ..core.models import StyleClass
from ..utils.config_manager import AppConfig, ConfigManager, get_config_manager
from ..utils.logger import setup_logging
from .terminal import PromptEditor, PromptFileIO, ReadlineHistory, RichRenderer


console = Console()

EXIT_WORDS = ("quit", "exit")


class TerminalSession:
    """Dispatcher plus the terminal collaborators it talks to."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.renderer = RichRenderer(console, show_welcome=config.ui.show_welcome)
        self.editor = PromptEditor(console)
        self.file_io = PromptFileIO(console, Path(config.storage.export_dir))
        self.dispatcher: CommandDispatcher = DefinerFactory.create_dispatcher(
            config, self.renderer, self.editor, self.file_io
        )
        self.readline_history = ReadlineHistory(self.dispatcher.history)

    def run_line(self, line: str):
        """Execute one line, drive any editor or file dialog it opened, then refresh recall."""
        result = self.dispatcher.execute(line)
        if self.editor.is_open:
            self.editor.run(self.dispatcher)
        if self.file_io.has_pending:
            self.file_io.resolve_pending()
        self.readline_history.sync()
        return result


def _load_config(ctx: click.Context) -> AppConfig:
    manager: ConfigManager = ctx.obj["config_manager"]
    return manager.config


def _open_session(ctx: click.Context) -> TerminalSession:
    try:
        return TerminalSession(_load_config(ctx))
    except DefinerError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    '--config', 'config_path',
    type=click.Path(path_type=Path),
    envvar='DEFINER_CONFIG',
    help='Config file (YAML or JSON). Default: ~/.definer/config.yaml'
)
@click.pass_context
def cli(ctx, config_path):
    """Definer - a personal glossary for the command line.

    Run without a command to start the interactive shell.
    """
    ctx.ensure_object(dict)

    try:
        manager = get_config_manager(config_path)
    except (DefinerError, OSError, ValueError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)

    ctx.obj["config_manager"] = manager

    log = manager.config.logging
    setup_logging(
        log_dir=Path(log.log_dir),
        log_level=log.log_level,
        console_level=log.console_level,
        use_colors=log.use_colors,
        max_bytes=log.max_bytes,
        backup_count=log.backup_count,
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_context
def shell(ctx):
    """
    Start the interactive glossary shell.

    Type 'help' inside the shell for commands; 'quit' or 'exit' leaves.
    """
    session = _open_session(ctx)
    prompt = session.config.ui.prompt

    if session.config.ui.show_welcome:
        session.renderer.welcome()

    while True:
        try:
            line = console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if line.strip().lower() in EXIT_WORDS:
            break

        session.run_line(line)


@cli.command()
@click.argument('words', nargs=-1, required=True)
@click.pass_context
def run(ctx, words):
    """
    Execute a single glossary command and exit.

    Example:

        definer run find vector

        definer run list calculus
    """
    session = _open_session(ctx)
    result = session.run_line(" ".join(words))

    if result is not None and result.style is StyleClass.ERROR:
        sys.exit(1)


@cli.command()
@click.option('--template', type=click.Path(path_type=Path), help='Write a commented config template to this path')
@click.pass_context
def config(ctx, template):
    """
    Show the effective configuration.

    Example:
        definer config
        definer config --template definer.yaml
    """
    manager: ConfigManager = ctx.obj["config_manager"]

    if template:
        manager.export_template(template)
        console.print(f"[green]✓ Template written to {template}[/green]")
        return

    table = Table(title=f"Configuration ({manager.config_path})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    for section, values in asdict(manager.config).items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", repr(value) if isinstance(value, str) else str(value))

    console.print(table)


if __name__ == '__main__':
    cli()

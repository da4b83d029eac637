"""
Plain-text content for result descriptors.
"""
from typing import Optional, Sequence

from ..core.models import CONFIRM_FLAG, Definition


HELP_TEXT = """\
add                 - Opens an editor to add a new definition.
edit [term]         - Opens an editor to modify an existing definition.
delete, rm          - Deletes a term after confirmation.
find [term]         - Displays the definition for a term.
list, ls            - Lists all terms, or only terms with a specific [tag].
import              - Imports definitions from a JSON file.
export              - Exports all definitions to a JSON file.
clear               - Clears the terminal screen and command history.
help                - Shows this help message."""


def _joined_or_none(items: Sequence[str]) -> str:
    return ", ".join(items) if items else "none"


def format_definition(definition: Definition) -> str:
    return "\n".join([
        f"Term: {definition.term}",
        f"Aliases: {_joined_or_none(definition.aliases)}",
        f"Tags: {_joined_or_none(definition.tags)}",
        "",
        definition.definition,
    ])


def format_term_list(definitions: Sequence[Definition], tag: Optional[str] = None) -> str:
    """Title line followed by one ``- term (aliases)`` line per definition."""
    title = f"Terms tagged with '{tag}':" if tag else "Available Terms:"
    lines = [title]
    for definition in definitions:
        line = f"- {definition.term}"
        if definition.aliases:
            line += f" ({', '.join(definition.aliases)})"
        lines.append(line)
    return "\n".join(lines)


def format_ambiguous(definitions: Sequence[Definition]) -> str:
    lines = ["Ambiguous term. Did you mean one of these?"]
    lines.extend(f"- {d.term}" for d in definitions)
    return "\n".join(lines)


def format_not_found(query: str, suggestion: Optional[str]) -> str:
    message = f"Error: Definition for '{query}' not found."
    if suggestion:
        message += f" Did you mean '{suggestion}'?"
    return message


def format_delete_prompt(term: str) -> str:
    return (
        "This is a destructive action. To confirm, type:\n"
        f"delete {term} {CONFIRM_FLAG}"
    )


def format_import_staged(count: int) -> str:
    return (
        f"File loaded successfully. Found {count} definitions.\n"
        f"To replace current definitions, type: import {CONFIRM_FLAG}"
    )

"""
Core Data Models
================

Definitions, editor field values, edit-session variants and the result
descriptors handed to the renderer.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union


# ============================================================================
# CONSTANTS
# ============================================================================

EXPORT_FILENAME = "definitions.json"
CONFIRM_FLAG = "--confirm"
LIST_DELIMITER = ","


def fold(text: str) -> str:
    """Case-insensitive comparison key."""
    return text.lower()


def split_list_field(raw: str) -> List[str]:
    """Split a comma separated editor field, dropping blank items."""
    return [item.strip() for item in raw.split(LIST_DELIMITER) if item.strip()]


# ============================================================================
# ENUMS
# ============================================================================

class StyleClass(Enum):
    PLAIN = "plain"
    ECHO = "echo"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# ============================================================================
# DEFINITION
# ============================================================================

@dataclass
class Definition:
    """A glossary entry: a term, its aliases and tags, and a body."""
    term: str
    definition: str
    aliases: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def keys(self) -> Iterator[str]:
        """Term first, then aliases, in stored order."""
        yield self.term
        yield from self.aliases

    def has_key(self, name: str) -> bool:
        wanted = fold(name)
        return any(fold(key) == wanted for key in self.keys())

    def has_tag(self, tag: str) -> bool:
        wanted = fold(tag)
        return any(fold(t) == wanted for t in self.tags)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Definition':
        """Build from the wire format; aliases and tags default to empty."""
        return cls(
            term=str(data.get('term') or ''),
            definition=str(data.get('definition') or ''),
            aliases=[str(a) for a in (data.get('aliases') or [])],
            tags=[str(t) for t in (data.get('tags') or [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'term': self.term,
            'aliases': list(self.aliases),
            'tags': list(self.tags),
            'definition': self.definition,
        }


@dataclass(frozen=True)
class EditorValues:
    """Field values read back from the editor."""
    term: str = ""
    aliases: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    definition: str = ""

    @classmethod
    def from_raw(cls, term: str, aliases: str, tags: str, definition: str) -> 'EditorValues':
        """Trim free-text fields and split the comma separated ones."""
        return cls(
            term=term.strip(),
            aliases=split_list_field(aliases),
            tags=split_list_field(tags),
            definition=definition.strip(),
        )

    @classmethod
    def from_definition(cls, definition: Definition) -> 'EditorValues':
        return cls(
            term=definition.term,
            aliases=list(definition.aliases),
            tags=list(definition.tags),
            definition=definition.definition,
        )

    def to_definition(self) -> Definition:
        return Definition(
            term=self.term,
            definition=self.definition,
            aliases=list(self.aliases),
            tags=list(self.tags),
        )


# ============================================================================
# EDIT SESSION
# ============================================================================

@dataclass(frozen=True)
class Creating:
    """Editor is open for a new definition."""


@dataclass(frozen=True)
class Editing:
    """Editor is open on the definition at ``index``."""
    index: int


EditSession = Optional[Union[Creating, Editing]]


# ============================================================================
# RESULTS
# ============================================================================

@dataclass(frozen=True)
class ResultDescriptor:
    """What the renderer receives: plain-text content and a style."""
    content: str
    style: StyleClass = StyleClass.PLAIN

    @classmethod
    def echo(cls, line: str) -> 'ResultDescriptor':
        return cls(line, StyleClass.ECHO)

    @classmethod
    def success(cls, content: str) -> 'ResultDescriptor':
        return cls(content, StyleClass.SUCCESS)

    @classmethod
    def warning(cls, content: str) -> 'ResultDescriptor':
        return cls(content, StyleClass.WARNING)

    @classmethod
    def error(cls, content: str) -> 'ResultDescriptor':
        return cls(content, StyleClass.ERROR)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a find scan: an exact hit, or partial hits in order."""
    exact: Optional[Definition] = None
    partial: List[Definition] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.exact is None and not self.partial

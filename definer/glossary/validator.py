"""
Validation of definitions before they are written to the store.
"""
import re
import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Set

from ..core.exceptions import InvalidDefinitionError, ValidationReason
from ..core.models import Definition, fold


logger = logging.getLogger(__name__)

RESERVED_COMMANDS: FrozenSet[str] = frozenset({
    "help", "clear", "list", "ls", "add", "edit",
    "delete", "rm", "find", "import", "export",
})

# Letters, digits, whitespace, hyphen, apostrophe, period.
TERM_PATTERN = re.compile(r"[A-Za-z0-9\s'.-]+")
TAG_PATTERN = re.compile(r"[A-Za-z0-9-]+")


@dataclass
class ValidationRules:
    """Validation rules configuration."""
    reserved_commands: FrozenSet[str] = RESERVED_COMMANDS
    term_pattern: re.Pattern = TERM_PATTERN
    tag_pattern: re.Pattern = TAG_PATTERN
    forbidden_term_chars: str = ","

    def __post_init__(self):
        self.reserved_commands = frozenset(fold(c) for c in self.reserved_commands)

    def is_reserved(self, name: str) -> bool:
        return fold(name) in self.reserved_commands

    def is_valid_name(self, name: str) -> bool:
        return self.term_pattern.fullmatch(name) is not None

    def is_valid_tag(self, tag: str) -> bool:
        return self.tag_pattern.fullmatch(tag) is not None


class DefinitionValidator:
    """Checks a candidate definition against the rules and the collection."""

    def __init__(self, rules: Optional[ValidationRules] = None):
        self.rules = rules or ValidationRules()

    def validate(
        self,
        candidate: Definition,
        definitions: Sequence[Definition],
        exclude_index: Optional[int] = None
    ) -> None:
        """
        Validate ``candidate`` against ``definitions``.

        Checks run in a fixed order and the first failure is raised.

        Args:
            candidate: Definition about to be written
            definitions: Current collection
            exclude_index: Index of the entry being edited, skipped by the
                collision check so an entry never collides with itself

        Raises:
            InvalidDefinitionError: With the reason and, where there is one,
                the offending value
        """
        rules = self.rules
        term = candidate.term
        aliases = candidate.aliases

        if not term.strip() or not candidate.definition.strip():
            self._reject("Term and Definition are required.", ValidationReason.REQUIRED_FIELDS)

        if rules.is_reserved(term):
            self._reject(
                f"Error: '{term}' is a reserved command.",
                ValidationReason.RESERVED_TERM, term
            )

        if any(ch in term for ch in rules.forbidden_term_chars):
            self._reject(
                "Error: Term cannot contain commas.",
                ValidationReason.ILLEGAL_CHARACTER, term
            )

        for alias in aliases:
            if rules.is_reserved(alias):
                self._reject(
                    f"Error: Alias '{alias}' is a reserved command.",
                    ValidationReason.RESERVED_ALIAS, alias
                )

        folded_aliases = {fold(a) for a in aliases}
        if len(folded_aliases) != len(aliases):
            self._reject("Error: Duplicate aliases are not allowed.", ValidationReason.DUPLICATE_ALIAS)

        if fold(term) in folded_aliases:
            self._reject(
                "Error: Term cannot also be an alias.",
                ValidationReason.ALIAS_EQUALS_TERM, term
            )

        taken = self._names_in_use(definitions, exclude_index)
        if fold(term) in taken:
            self._reject(
                f"Error: Term '{term}' already exists.",
                ValidationReason.ALREADY_EXISTS, term
            )
        for alias in aliases:
            if fold(alias) in taken:
                self._reject(
                    f"Error: Alias '{alias}' already exists.",
                    ValidationReason.ALREADY_EXISTS, alias
                )

        if not rules.is_valid_name(term):
            self._reject(
                "Term contains invalid characters.",
                ValidationReason.INVALID_CHARACTERS, term
            )
        bad_alias = next((a for a in aliases if not rules.is_valid_name(a)), None)
        if bad_alias is not None:
            self._reject(
                "Aliases contain invalid characters.",
                ValidationReason.INVALID_CHARACTERS, bad_alias
            )

        bad_tag = next((t for t in candidate.tags if not rules.is_valid_tag(t)), None)
        if bad_tag is not None:
            self._reject(
                "Tags can only contain letters, numbers, and hyphens.",
                ValidationReason.INVALID_TAG, bad_tag
            )

    def check(
        self,
        candidate: Definition,
        definitions: Sequence[Definition],
        exclude_index: Optional[int] = None
    ) -> Optional[InvalidDefinitionError]:
        """Non-raising form of :meth:`validate`."""
        try:
            self.validate(candidate, definitions, exclude_index)
        except InvalidDefinitionError as e:
            return e
        return None

    @staticmethod
    def _names_in_use(definitions: Sequence[Definition], exclude_index: Optional[int]) -> Set[str]:
        names: Set[str] = set()
        for index, definition in enumerate(definitions):
            if exclude_index is not None and index == exclude_index:
                continue
            names.update(fold(key) for key in definition.keys())
        return names

    @staticmethod
    def _reject(message: str, reason: ValidationReason, value: Optional[str] = None) -> None:
        logger.info(f"Rejected definition ({reason.value}): {message}")
        raise InvalidDefinitionError(message, reason=reason, value=value)

"""
JSON encoding of definition collections and parsing of import payloads.
"""
import json
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Type

from ..core.exceptions import DefinerError, ImportFormatError, StorageReadError, wrap_error
from ..core.models import Definition


logger = logging.getLogger(__name__)

LIST_FIELDS = ('aliases', 'tags')


def dumps(definitions: Sequence[Definition], indent: Optional[int] = None) -> str:
    """Serialize to the wire format (a JSON array of objects)."""
    return json.dumps(
        [d.to_dict() for d in definitions],
        indent=indent,
        ensure_ascii=False
    )


def loads(text: str) -> List[Definition]:
    """
    Decode a stored collection.

    Raises:
        StorageReadError: If the text is not a JSON array of objects, or an
            entry carries ``aliases`` or ``tags`` that are not lists of strings
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise wrap_error(e, StorageReadError, "Stored definitions are not valid JSON")

    if not isinstance(data, list) or not all(isinstance(item, Mapping) for item in data):
        raise StorageReadError("Stored definitions must be a JSON array of objects")

    return _to_definitions(data, StorageReadError, "Stored definitions")


def parse_import(text: str) -> List[Definition]:
    """
    Parse the content of an import file.

    Only the first entry is checked for the required keys; later entries are
    taken as they are.

    Raises:
        ImportFormatError: If the content is not a JSON array of objects, its
            first object lacks ``term`` or ``definition``, or an entry carries
            ``aliases`` or ``tags`` that are not lists of strings
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise wrap_error(e, ImportFormatError, "Invalid JSON")

    if not isinstance(data, list):
        raise ImportFormatError("Invalid format: JSON must be an array.")

    if not all(isinstance(item, Mapping) for item in data):
        raise ImportFormatError("Invalid format: every entry must be an object.")

    if data and (not data[0].get('term') or not data[0].get('definition')):
        raise ImportFormatError(
            "Invalid format: Objects must contain 'term' and 'definition' keys."
        )

    logger.debug(f"Parsed import payload with {len(data)} entries")
    return _to_definitions(data, ImportFormatError, "Invalid format")


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _to_definitions(
    data: Sequence[Mapping],
    error_class: Type[DefinerError],
    prefix: str
) -> List[Definition]:
    """Build definitions, rejecting list fields that are not lists of strings."""
    definitions = []
    for position, item in enumerate(data, start=1):
        for name in LIST_FIELDS:
            value = item.get(name)
            if value is not None and not _is_string_list(value):
                raise error_class(
                    f"{prefix}: '{name}' of entry {position} must be a list of strings."
                )
        definitions.append(Definition.from_dict(item))
    return definitions

"""Core models, interfaces and exceptions."""
from .exceptions import (
    DefinerError,
    DefinitionNotFoundError,
    ImportFormatError,
    InvalidDefinitionError,
    StorageError,
    UsageError,
    ValidationReason,
)
from .models import Definition, EditorValues, ResultDescriptor, StyleClass

__all__ = [
    "DefinerError", "DefinitionNotFoundError", "ImportFormatError",
    "InvalidDefinitionError", "StorageError", "UsageError", "ValidationReason",
    "Definition", "EditorValues", "ResultDescriptor", "StyleClass",
]

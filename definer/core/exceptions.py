"""
Custom exceptions for the glossary system.
Provides clear error hierarchy and meaningful error messages.

Every failure surfaced to the user is a DefinerError subclass; the command
dispatcher renders them as plain text and the session continues.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Optional, Dict, Any, Type
import logging

__all__ = [
    # Base
    'DefinerError',
    # Commands
    'UsageError', 'EditorSessionError',
    # Glossary
    'DefinitionNotFoundError', 'InvalidDefinitionError', 'ValidationReason',
    # Import / storage
    'ImportFormatError', 'StorageError', 'StorageReadError', 'StorageWriteError',
    # Configuration
    'ConfigurationError',
    # Utilities
    'error_context', 'wrap_error',
]


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class DefinerError(Exception):
    """
    Base exception for all glossary system errors.

    All custom exceptions inherit from this class for unified error handling.
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize exception with message and optional context.

        Args:
            message: Error message shown to the user
            **context: Additional context information (logged, never shown)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context
        }


# ============================================================================
# COMMAND EXCEPTIONS
# ============================================================================

class UsageError(DefinerError):
    """Raised when a command is missing a required argument."""

    def __init__(self, message: str, command: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, command=command, **context)
        self.command = command


class EditorSessionError(DefinerError):
    """Raised when the editor is submitted without an open add/edit session."""
    pass


# ============================================================================
# GLOSSARY EXCEPTIONS
# ============================================================================

class DefinitionNotFoundError(DefinerError):
    """Raised when a term or alias fails exact resolution."""

    def __init__(self, message: str, term: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, term=term, **context)
        self.term = term


class ValidationReason(Enum):
    """Why a candidate definition was rejected, in check order."""
    REQUIRED_FIELDS = "required_fields"
    RESERVED_TERM = "reserved_term"
    ILLEGAL_CHARACTER = "illegal_character"
    RESERVED_ALIAS = "reserved_alias"
    DUPLICATE_ALIAS = "duplicate_alias"
    ALIAS_EQUALS_TERM = "alias_equals_term"
    ALREADY_EXISTS = "already_exists"
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_TAG = "invalid_tag"


class InvalidDefinitionError(DefinerError):
    """Raised when a definition doesn't meet validation requirements."""

    def __init__(
        self,
        message: str,
        reason: ValidationReason,
        value: Optional[str] = None,
        **context: Any
    ) -> None:
        super().__init__(message, reason=reason.value, value=value, **context)
        self.reason = reason
        self.value = value


# ============================================================================
# IMPORT / STORAGE EXCEPTIONS
# ============================================================================

class ImportFormatError(DefinerError):
    """Raised when an import payload is malformed or misses required fields."""
    pass


class StorageError(DefinerError):
    """Base exception for persistence errors."""

    def __init__(self, message: str, location: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, location=location, **context)
        self.location = location


class StorageReadError(StorageError):
    """Raised when the stored collection cannot be read or decoded."""
    pass


class StorageWriteError(StorageError):
    """Raised when the collection cannot be saved."""
    pass


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================

class ConfigurationError(DefinerError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, key: Optional[str] = None, **context: Any) -> None:
        super().__init__(message, key=key, **context)
        self.key = key


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def wrap_error(
    error: Exception,
    error_class: Type[DefinerError],
    message: Optional[str] = None,
    **context: Any
) -> DefinerError:
    """
    Wrap an exception in a custom exception type.

    Args:
        error: Original exception
        error_class: Exception class to wrap with
        message: Optional custom message
        **context: Extra context passed to the new exception

    Returns:
        Wrapped exception with ``__cause__`` set to the original

    Raises:
        TypeError: If error_class is not a DefinerError subclass

    Example:
        >>> try:
        ...     json.loads(text)
        ... except ValueError as e:
        ...     raise wrap_error(e, ImportFormatError, "Invalid JSON")
    """
    if not issubclass(error_class, DefinerError):
        raise TypeError(
            f"error_class must be subclass of DefinerError, "
            f"got {error_class.__name__}"
        )

    error_msg = f"{message}: {error}" if message else str(error)
    wrapped = error_class(error_msg, **context)
    wrapped.__cause__ = error
    return wrapped


@contextmanager
def error_context(
    operation: str,
    error_class: Type[DefinerError] = DefinerError,
    logger: Optional[logging.Logger] = None,
    **context: Any
):
    """
    Context manager for consistent error handling and wrapping.

    Args:
        operation: Name of operation being performed
        error_class: Exception class to wrap errors with
        logger: Optional logger for error logging
        **context: Extra context attached to the wrapped exception

    Raises:
        error_class: Wrapped exception if error occurs

    Example:
        >>> with error_context("writing definitions", StorageWriteError):
        ...     path.write_text(text)
    """
    try:
        yield
    except error_class:
        raise
    except KeyboardInterrupt:
        raise
    except Exception as e:
        if logger:
            logger.error(f"Error during {operation}: {e}", exc_info=True)

        raise wrap_error(e, error_class, f"Error during {operation}", **context)

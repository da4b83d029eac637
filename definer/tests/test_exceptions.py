"""Tests for the exception hierarchy and wrapping helpers."""

import logging

import pytest

from definer.core.exceptions import (
    ConfigurationError,
    DefinerError,
    InvalidDefinitionError,
    StorageWriteError,
    ValidationReason,
    error_context,
    wrap_error,
)


def test_str_is_message_and_context_is_kept():
    error = InvalidDefinitionError("Tags bad.", reason=ValidationReason.INVALID_TAG, value="a b")
    assert str(error) == "Tags bad."
    assert error.to_dict() == {
        "error_type": "InvalidDefinitionError",
        "message": "Tags bad.",
        "context": {"reason": "invalid_tag", "value": "a b"},
    }


def test_wrap_error_chains_cause():
    original = OSError("disk full")
    wrapped = wrap_error(original, StorageWriteError, "Could not save", location="/tmp/x")
    assert isinstance(wrapped, StorageWriteError)
    assert wrapped.message == "Could not save: disk full"
    assert wrapped.location == "/tmp/x"
    assert wrapped.__cause__ is original


def test_wrap_error_requires_definer_error_class():
    with pytest.raises(TypeError):
        wrap_error(ValueError("x"), ValueError)


def test_error_context_wraps_foreign_errors(caplog):
    logger = logging.getLogger("definer.test")
    with caplog.at_level(logging.ERROR, logger="definer.test"):
        with pytest.raises(ConfigurationError) as exc_info:
            with error_context("parsing", ConfigurationError, logger, key="ui"):
                raise ValueError("bad value")

    assert exc_info.value.message == "Error during parsing: bad value"
    assert exc_info.value.key == "ui"
    assert "Error during parsing: bad value" in caplog.text


def test_error_context_passes_own_errors_through():
    original = ConfigurationError("already specific")
    with pytest.raises(ConfigurationError) as exc_info:
        with error_context("parsing", ConfigurationError):
            raise original
    assert exc_info.value is original


def test_error_context_default_class():
    with pytest.raises(DefinerError):
        with error_context("anything"):
            raise KeyError("k")

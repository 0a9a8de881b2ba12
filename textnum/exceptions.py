"""Typed exceptions for textnum.

Hierarchy:
    TextNumError (base)
    +-- ConfigError
    |   +-- FormatsFileParseError
    |   +-- FormatsFileValidationError
    +-- FilterPluginNotFoundError
    +-- InvalidSeparatorError
    +-- NonFiniteNumberError
    +-- ConstraintViolationError

An unresolved text format is not an exception: the resolver returns it as
a value and the executor turns it into empty text plus a diagnostic.
Exceptions raised by filters are never wrapped.
"""

from __future__ import annotations


class TextNumError(Exception):
    """Base for all textnum exceptions."""


# --- Configuration ---


class ConfigError(TextNumError):
    """Configuration error."""


class FormatsFileParseError(ConfigError):
    """Failed to read or parse a formats file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse formats file '{path}': {reason}")


class FormatsFileValidationError(ConfigError):
    """Formats file has the wrong shape or names unknown filters."""

    def __init__(self, path: str, errors: list[str]) -> None:
        self.path = path
        self.errors = errors
        detail = "; ".join(errors)
        super().__init__(f"Formats file '{path}' is invalid: {detail}")


# --- Filters ---


class FilterPluginNotFoundError(TextNumError):
    """No filter plugin registered under the requested id."""

    def __init__(self, plugin_id: str) -> None:
        self.plugin_id = plugin_id
        super().__init__(f"Filter plugin '{plugin_id}' not found")


# --- Number ---


class InvalidSeparatorError(TextNumError):
    """Thousand separator outside the supported set."""

    def __init__(self, separator: str) -> None:
        self.separator = separator
        super().__init__(f"Unsupported thousand separator: {separator!r}")


class NonFiniteNumberError(TextNumError):
    """NaN or infinite value given where a displayable number is required."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot format non-finite number: {value!r}")


# --- Item ---


class ConstraintViolationError(TextNumError):
    """Item value violates the field constraints."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("; ".join(messages))

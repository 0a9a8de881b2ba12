"""Field-level constraints on text-with-number items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textnum.exceptions import ConstraintViolationError

if TYPE_CHECKING:
    from textnum._types import CompositeValue
    from textnum.config.display import FieldSettings


def validate_item(value: CompositeValue, settings: FieldSettings) -> list[str]:
    """Return one message per violated constraint (empty when valid)."""
    label = settings.label
    errors: list[str] = []

    max_length = settings.text.max_length
    if max_length is not None and len(value.text_value) > max_length:
        errors.append(f"{label}: The text value may not be longer than {max_length} characters.")

    number = settings.number
    if number.min is not None and value.number_value < number.min:
        errors.append(f"{label}: the number value may be no less than {number.min:g}.")
    if number.max is not None and value.number_value > number.max:
        errors.append(f"{label}: the number value may be no greater than {number.max:g}.")
    if number.unsigned and value.number_value < 0:
        errors.append(f"{label}: The integer value must be larger or equal to 0.")

    allowed = settings.text.allowed_formats
    if allowed and value.text_format_id is not None and value.text_format_id not in allowed:
        errors.append(f"{label}: The text format {value.text_format_id} is not allowed.")

    return errors


def check_item(value: CompositeValue, settings: FieldSettings) -> None:
    """Raise if the item violates any constraint.

    Raises:
        ConstraintViolationError: With every violation message.
    """
    errors = validate_item(value, settings)
    if errors:
        raise ConstraintViolationError(errors)

"""Display and field settings for text-with-number values."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from textnum._constants import DEFAULT_TEXT_MAX_LENGTH, THOUSAND_SEPARATORS


class NumberDisplayConfig(BaseModel):
    """How a formatter displays the number.

    ``scale`` is only used by decimal formatters; integer formatters
    always render zero decimals.
    """

    thousand_separator: str = ""
    prefix_suffix: bool = True
    decimal_separator: str = "."
    scale: int = Field(default=2, ge=0, le=10)

    @field_validator("thousand_separator")
    @classmethod
    def separator_must_be_supported(cls, v: str) -> str:
        if v not in THOUSAND_SEPARATORS:
            msg = f"thousand_separator must be one of {sorted(THOUSAND_SEPARATORS)}, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("decimal_separator")
    @classmethod
    def decimal_separator_must_be_set(cls, v: str) -> str:
        if v not in {".", ","}:
            msg = f"decimal_separator must be '.' or ',', got {v!r}"
            raise ValueError(msg)
        return v


class TextFieldSettings(BaseModel):
    """Text half of the field settings."""

    max_length: int | None = Field(default=DEFAULT_TEXT_MAX_LENGTH, ge=1)
    allowed_formats: list[str] = []


class NumberFieldSettings(BaseModel):
    """Number half of the field settings.

    ``prefix`` and ``suffix`` accept the ``singular|plural`` syntax.
    """

    min: float | None = None
    max: float | None = None
    prefix: str = ""
    suffix: str = ""
    unsigned: bool = False


class FieldSettings(BaseModel):
    """Settings of one text-with-number field."""

    label: str = "Text with number"
    text: TextFieldSettings = TextFieldSettings()
    number: NumberFieldSettings = NumberFieldSettings()

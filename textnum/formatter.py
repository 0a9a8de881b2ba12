"""Field formatters for text-with-number items.

A formatter owns the display settings of one field and renders each of
its items through ``TextWithNumberRenderer``. Subclasses only decide how
the bare number is formatted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from textnum._constants import SUMMARY_SAMPLE_NUMBER
from textnum.config.display import FieldSettings, NumberDisplayConfig
from textnum.number import NumberFormatter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textnum._types import CompositeValue, Number
    from textnum.render import RenderResult, TextWithNumberRenderer


class TextWithNumberFormatter(ABC):
    """Renders the items of one field.

    Args:
        renderer: Per-item pipeline.
        field_settings: Field-level settings (prefix, suffix, limits).
        display: Display settings; defaults to NumberDisplayConfig().
    """

    formatter_id: ClassVar[str]

    def __init__(
        self,
        renderer: TextWithNumberRenderer,
        field_settings: FieldSettings | None = None,
        display: NumberDisplayConfig | None = None,
    ) -> None:
        self._renderer = renderer
        self.field_settings = field_settings or FieldSettings()
        self.display = display or NumberDisplayConfig()

    @abstractmethod
    def number_formatter(self) -> NumberFormatter:
        """Formatter for the bare number."""
        ...

    def number_format(self, value: Number) -> str:
        return self.number_formatter().format(value)

    def settings_summary(self) -> list[str]:
        """Human-readable lines describing the display settings."""
        summary = [f"Number: {self.number_format(SUMMARY_SAMPLE_NUMBER)}"]
        if self.display.prefix_suffix:
            summary.append("Display number with prefix and suffix.")
        return summary

    def view_elements(self, items: Iterable[CompositeValue]) -> list[RenderResult]:
        """Render every non-empty item, in order."""
        formatter = self.number_formatter()
        return [
            self._renderer.render(
                item,
                self.display,
                self.field_settings.number,
                number_formatter=formatter,
            )
            for item in items
            if not item.is_empty()
        ]


class TextDefaultWithIntegerFormatter(TextWithNumberFormatter):
    """Number rendered as an integer (no decimals)."""

    formatter_id = "text_default_with_integer"

    def number_formatter(self) -> NumberFormatter:
        return NumberFormatter(self.display.thousand_separator)


class TextDefaultWithDecimalFormatter(TextWithNumberFormatter):
    """Number rendered with ``display.scale`` decimals."""

    formatter_id = "text_default_with_decimal"

    def number_formatter(self) -> NumberFormatter:
        return NumberFormatter(
            self.display.thousand_separator,
            decimals=self.display.scale,
            decimal_separator=self.display.decimal_separator,
        )


FORMATTERS: dict[str, type[TextWithNumberFormatter]] = {
    TextDefaultWithIntegerFormatter.formatter_id: TextDefaultWithIntegerFormatter,
    TextDefaultWithDecimalFormatter.formatter_id: TextDefaultWithDecimalFormatter,
}

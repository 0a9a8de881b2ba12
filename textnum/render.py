"""Composite rendering: filtered text beside a formatted number.

``TextWithNumberRenderer`` runs the whole per-item pipeline:

    CompositeValue
      -> FormatResolver        (format id or fallback)
      -> FilterChainExecutor   (prepare + process passes)
      -> NumberFormatter       (grouping, affixes)
      -> CompositionRenderer   (final markup)

and returns the markup with the merged cache metadata. An unresolved
format renders as an empty text fragment; the number is still shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from textnum._constants import NUMBER_ITEM_CLASS, TEXT_ITEM_CLASS
from textnum.cache import CacheableMetadata
from textnum.filters.executor import FilterChainExecutor
from textnum.logging import get_logger
from textnum.number import NumberFormatter

if TYPE_CHECKING:
    from textnum._types import CompositeValue
    from textnum.config.display import NumberDisplayConfig, NumberFieldSettings
    from textnum.diagnostics import DiagnosticEvent
    from textnum.filters.resolver import FormatResolver
    from textnum.number import FormattedNumber
    from textnum.plural import Pluralizer

logger = get_logger("render")


class CompositionRenderer:
    """Wraps each fragment in its own container, text first."""

    def compose(self, text_markup: str, number_markup: str) -> str:
        return (
            f'<p class="{TEXT_ITEM_CLASS}">{text_markup}</p>'
            f'<p class="{NUMBER_ITEM_CLASS}">{number_markup}</p>'
        )


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Final markup of one item and everything it was built from."""

    markup: str
    text_markup: str
    number: FormattedNumber
    cacheability: CacheableMetadata
    diagnostic: DiagnosticEvent | None = None

    @property
    def cache_tags(self) -> frozenset[str]:
        return self.cacheability.tags

    @property
    def cache_contexts(self) -> frozenset[str]:
        return self.cacheability.contexts

    @property
    def max_age(self) -> int:
        return self.cacheability.max_age

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "markup": self.markup,
            "text_markup": self.text_markup,
            "number": {
                "original_value": str(self.number.original_value),
                "formatted_value": self.number.formatted_value,
                "markup": self.number.markup,
                "prefix": self.number.prefix,
                "suffix": self.number.suffix,
                "content": self.number.content_attribute,
            },
            **self.cacheability.as_dict(),
        }
        if self.diagnostic is not None:
            data["diagnostic"] = {
                "channel": self.diagnostic.channel,
                "message": self.diagnostic.formatted(),
                "reason": self.diagnostic.reason.value if self.diagnostic.reason else None,
            }
        return data


class TextWithNumberRenderer:
    """Renders CompositeValue items.

    Args:
        resolver: Resolves text format ids.
        executor: Runs filter chains; a default one is created if omitted.
        composer: Builds the final markup.
        pluralizer: Selects singular/plural affix forms.
    """

    def __init__(
        self,
        resolver: FormatResolver,
        executor: FilterChainExecutor | None = None,
        composer: CompositionRenderer | None = None,
        pluralizer: Pluralizer | None = None,
    ) -> None:
        self._resolver = resolver
        self._executor = executor if executor is not None else FilterChainExecutor()
        self._composer = composer if composer is not None else CompositionRenderer()
        self._pluralizer = pluralizer

    def render(
        self,
        value: CompositeValue,
        display: NumberDisplayConfig,
        number_settings: NumberFieldSettings,
        number_formatter: NumberFormatter | None = None,
    ) -> RenderResult:
        """Render one item.

        Args:
            value: The item to render.
            display: Thousand separator and affix visibility.
            number_settings: Field prefix/suffix specs.
            number_formatter: Overrides the integer formatter built from
                ``display`` (decimal formatters pass their own).

        Raises:
            Exception: Whatever a filter raises; nothing is caught here.
        """
        resolution = self._resolver.resolve(value.text_format_id)
        processed = self._executor.run(
            value.text_value,
            resolution,
            value.text_filter_types_to_skip,
            value.langcode,
        )

        formatter = number_formatter or NumberFormatter(display.thousand_separator)
        number = formatter.format_with_affixes(
            value.number_value,
            number_settings.prefix,
            number_settings.suffix,
            include_affixes=display.prefix_suffix,
            pluralizer=self._pluralizer,
        )

        markup = self._composer.compose(processed.markup, number.markup)
        cacheability = processed.cacheability.merge(number.cacheability)
        logger.debug(
            "item_rendered",
            format_id=resolution.format_id,
            resolved=processed.diagnostic is None,
            markup_length=len(markup),
        )
        return RenderResult(
            markup=markup,
            text_markup=processed.markup,
            number=number,
            cacheability=cacheability,
            diagnostic=processed.diagnostic,
        )

"""Core types for textnum.

Enums and dataclasses shared by the filter pipeline, the number formatter
and the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

Number = int | float | Decimal


class FilterType(Enum):
    """Filter type tag.

    The skip policy operates on this tag only:
    - MARKUP_LANGUAGE: converts a markup language to HTML (line breaks, URLs)
    - HTML_RESTRICTOR: limits or escapes HTML; can never be skipped
    - TRANSFORM_REVERSIBLE: transformation that can be undone (e.g. alignment)
    - TRANSFORM_IRREVERSIBLE: transformation that cannot be undone
    """

    MARKUP_LANGUAGE = "markup_language"
    HTML_RESTRICTOR = "html_restrictor"
    TRANSFORM_REVERSIBLE = "transform_reversible"
    TRANSFORM_IRREVERSIBLE = "transform_irreversible"


RESTRICTOR_TYPE = FilterType.HTML_RESTRICTOR


class UnresolvedReason(Enum):
    """Why a text format could not be used."""

    MISSING = "missing"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class CompositeValue:
    """One text-with-number item, built fresh per render.

    ``text_format_id`` of None selects the fallback format.
    """

    text_value: str
    number_value: Number
    text_format_id: str | None = None
    text_filter_types_to_skip: frozenset[FilterType] = field(default_factory=frozenset)
    langcode: str = ""

    def is_empty(self) -> bool:
        """True when both the text and the number carry nothing."""
        text_is_empty = not self.text_value
        number_is_empty = not self.number_value or str(self.number_value) == "0"
        return text_is_empty and number_is_empty

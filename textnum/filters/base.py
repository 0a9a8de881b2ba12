"""Base interface for text filters.

A filter is one step of a text format's chain. It has a type tag that the
skip policy looks at, an enabled flag, and two phases:

- ``prepare()`` runs over the whole chain first, so filters can escape
  structurally significant content (code spans, formulas) before any
  filter treats the text as HTML.
- ``process()`` runs over the chain a second time and returns the
  transformed text together with the cache metadata it depends on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from textnum.cache import EMPTY, CacheableMetadata

if TYPE_CHECKING:
    from textnum._types import FilterType


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Processed text plus the cacheability delta of one filter."""

    processed_text: str
    cacheability: CacheableMetadata = field(default=EMPTY)


class Filter(ABC):
    """Text filter plugin.

    Subclasses set ``plugin_id`` and ``filter_type`` and implement
    ``process()``. ``settings`` holds plugin-specific options merged over
    ``default_settings``.
    """

    plugin_id: ClassVar[str]
    filter_type: ClassVar[FilterType]
    default_settings: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        *,
        status: bool = True,
        weight: int = 0,
        settings: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        self.weight = weight
        self.settings: dict[str, Any] = {**self.default_settings, **(settings or {})}

    def prepare(self, text: str, langcode: str) -> str:
        """Escape content that later filters must not see as markup.

        Default implementation returns the text unchanged.
        """
        return text

    @abstractmethod
    def process(self, text: str, langcode: str) -> FilterResult:
        """Transform text.

        Args:
            text: Text after the prepare pass and any earlier filters.
            langcode: Language of the text (may be empty).

        Returns:
            FilterResult with the processed text and its cache metadata.
        """
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(plugin_id={self.plugin_id!r}, "
            f"status={self.status!r}, weight={self.weight!r})"
        )

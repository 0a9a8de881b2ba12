"""Shared test helpers for filter pipeline tests.

Usage:
    from tests.helpers import FailingFilter, RecordingFilter
"""

from __future__ import annotations

from textnum._constants import MAX_AGE_PERMANENT
from textnum._types import FilterType
from textnum.cache import CacheableMetadata
from textnum.filters.base import Filter, FilterResult


class RecordingFilter(Filter):
    """Filter that records the text it saw and appends its marker.

    ``prepare()`` appends ``<p:MARKER>`` and ``process()`` appends
    ``<MARKER>``, so the output shows which filters ran and in what order.
    """

    plugin_id = "recording"
    filter_type = FilterType.TRANSFORM_REVERSIBLE

    def __init__(
        self,
        marker: str,
        filter_type: FilterType = FilterType.TRANSFORM_REVERSIBLE,
        *,
        status: bool = True,
        weight: int = 0,
        tags: frozenset[str] = frozenset(),
        contexts: frozenset[str] = frozenset(),
        max_age: int = MAX_AGE_PERMANENT,
    ) -> None:
        super().__init__(status=status, weight=weight)
        self.marker = marker
        self.filter_type = filter_type  # type: ignore[misc]
        self._cacheability = CacheableMetadata(tags=tags, contexts=contexts, max_age=max_age)
        self.prepared: list[str] = []
        self.processed: list[str] = []
        self.langcodes: list[str] = []

    def prepare(self, text: str, langcode: str) -> str:
        self.prepared.append(text)
        return f"{text}<p:{self.marker}>"

    def process(self, text: str, langcode: str) -> FilterResult:
        self.processed.append(text)
        self.langcodes.append(langcode)
        return FilterResult(f"{text}<{self.marker}>", self._cacheability)


class FailingFilter(Filter):
    """Filter whose process() always raises."""

    plugin_id = "failing"
    filter_type = FilterType.TRANSFORM_IRREVERSIBLE

    def process(self, text: str, langcode: str) -> FilterResult:
        msg = "filter exploded"
        raise RuntimeError(msg)

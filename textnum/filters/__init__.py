"""Text filter pipeline (format resolution, filter chain execution)."""

from __future__ import annotations

from textnum.filters.base import Filter, FilterResult
from textnum.filters.executor import FilterChainExecutor, ProcessedText
from textnum.filters.format import InMemoryFormatRepository, TextFormat
from textnum.filters.resolver import FormatResolver, Resolved, Unresolved

__all__ = [
    "Filter",
    "FilterChainExecutor",
    "FilterResult",
    "FormatResolver",
    "InMemoryFormatRepository",
    "ProcessedText",
    "Resolved",
    "TextFormat",
    "Unresolved",
]

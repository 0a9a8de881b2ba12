"""Filter chain execution.

Applies a text format's filters to raw text in two passes over the same
stored order: every applicable filter's ``prepare()`` first, then every
applicable filter's ``process()``. Each ``process()`` result carries a
cache metadata delta that is folded into the running total; the format's
own cache tags are added once both passes are done.

Filters of the restrictor type always run, whatever the skip set says.
Exceptions raised by filters propagate unchanged: returning unfiltered
text after a failed filter would render unsanitized input.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from textnum._constants import FILTER_LOG_CHANNEL
from textnum._types import RESTRICTOR_TYPE, FilterType, UnresolvedReason
from textnum.cache import EMPTY, CacheableMetadata
from textnum.diagnostics import DiagnosticEvent, StructlogSink
from textnum.filters.resolver import Resolved
from textnum.logging import get_logger

if TYPE_CHECKING:
    from textnum.diagnostics import LogSink
    from textnum.filters.base import Filter
    from textnum.filters.format import TextFormat
    from textnum.filters.resolver import Resolution, Unresolved

logger = get_logger("filter.executor")

_UNRESOLVED_MESSAGES = {
    UnresolvedReason.MISSING: "Missing text format: %format.",
    UnresolvedReason.DISABLED: "Disabled text format: %format.",
}


def normalize_newlines(text: str) -> str:
    """Convert Windows and old Mac line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def must_apply(text_filter: Filter, skip_types: Collection[FilterType]) -> bool:
    """Whether a filter runs under the given skip set.

    Disabled filters never run; restrictor filters always run when enabled.
    """
    if not text_filter.status:
        return False
    return text_filter.filter_type == RESTRICTOR_TYPE or text_filter.filter_type not in skip_types


@dataclass(frozen=True, slots=True)
class ProcessedText:
    """Filtered markup, safe to output as is, and its cache metadata."""

    markup: str
    cacheability: CacheableMetadata = field(default=EMPTY)
    diagnostic: DiagnosticEvent | None = None


class FilterChainExecutor:
    """Runs a format's filter chain over text.

    Args:
        sink: Receives diagnostics for unresolved formats. Defaults to a
              structlog-backed sink.
    """

    def __init__(self, sink: LogSink | None = None) -> None:
        self._sink: LogSink = sink if sink is not None else StructlogSink()

    def apply(
        self,
        text: str,
        text_format: TextFormat,
        skip_types: Collection[FilterType] = frozenset(),
        langcode: str = "",
        cacheability: CacheableMetadata = EMPTY,
    ) -> tuple[str, CacheableMetadata]:
        """Filter text with a resolved format.

        Args:
            text: Raw text.
            text_format: Format whose filters are applied in stored order.
            skip_types: Filter types to skip (restrictors are never skipped).
            langcode: Language code forwarded to every filter.
            cacheability: Metadata gathered before filtering (e.g. while
                resolving the format).

        Returns:
            Tuple (filtered text, accumulated cache metadata).
        """
        text = normalize_newlines(text)
        applicable = [f for f in text_format.filters() if must_apply(f, skip_types)]

        for text_filter in applicable:
            text = text_filter.prepare(text, langcode)

        for text_filter in applicable:
            logger.debug("filter_start", filter=text_filter.plugin_id, text_length=len(text))
            result = text_filter.process(text, langcode)
            cacheability = cacheability.merge(result.cacheability)
            text = result.processed_text
            logger.debug("filter_complete", filter=text_filter.plugin_id, text_length=len(text))

        cacheability = cacheability.merge(CacheableMetadata(tags=text_format.cache_tags))
        return text, cacheability

    def run(
        self,
        text: str,
        resolution: Resolution,
        skip_types: Collection[FilterType] = frozenset(),
        langcode: str = "",
    ) -> ProcessedText:
        """Filter text according to a resolution outcome.

        An Unresolved outcome yields empty markup and a diagnostic; the
        original text is discarded rather than shown unfiltered.
        """
        if isinstance(resolution, Resolved):
            markup, cacheability = self.apply(
                text,
                resolution.format,
                skip_types,
                langcode,
                resolution.cacheability,
            )
            return ProcessedText(markup, cacheability)
        return ProcessedText("", resolution.cacheability, self._report(resolution))

    def _report(self, resolution: Unresolved) -> DiagnosticEvent:
        event = DiagnosticEvent(
            channel=FILTER_LOG_CHANNEL,
            message=_UNRESOLVED_MESSAGES[resolution.reason],
            context={"%format": resolution.format_id},
            reason=resolution.reason,
        )
        try:
            self._sink.warn(event.channel, event.message, dict(event.context))
        except Exception:
            logger.warning(
                "diagnostic_sink_failed",
                format_id=resolution.format_id,
                exc_info=True,
            )
        return event

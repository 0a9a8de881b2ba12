"""Text format resolution.

Turns an optional format id into a usable ``TextFormat``. An absent id
falls back to the configured fallback format, and the configuration's own
cache metadata is attached so renders that relied on it are invalidated
when it changes. A missing or disabled format is a normal outcome, not an
error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from textnum._types import UnresolvedReason
from textnum.cache import EMPTY, CacheableMetadata
from textnum.logging import get_logger

if TYPE_CHECKING:
    from textnum.config.filter_config import FilterConfigSnapshot
    from textnum.filters.format import FormatRepository, TextFormat

logger = get_logger("filter.resolver")


@dataclass(frozen=True, slots=True)
class Resolved:
    """The format to apply, plus metadata gathered while resolving it."""

    format: TextFormat
    format_id: str
    cacheability: CacheableMetadata = field(default=EMPTY)


@dataclass(frozen=True, slots=True)
class Unresolved:
    """No usable format; the text must render as empty."""

    reason: UnresolvedReason
    format_id: str
    cacheability: CacheableMetadata = field(default=EMPTY)


Resolution = Resolved | Unresolved


class FormatResolver:
    """Resolves format ids against a repository and a config snapshot."""

    def __init__(self, repository: FormatRepository, config: FilterConfigSnapshot) -> None:
        self._repository = repository
        self._config = config

    @property
    def config(self) -> FilterConfigSnapshot:
        return self._config

    def resolve(self, format_id: str | None) -> Resolution:
        """Resolve a format id.

        Args:
            format_id: Requested format, or None for the fallback format.

        Returns:
            Resolved with the format, or Unresolved with the reason.
        """
        cacheability = EMPTY
        if format_id is None:
            format_id = self._config.get("fallback_format")
            cacheability = cacheability.merge(self._config.cacheability)
            logger.debug("fallback_format_used", format_id=format_id)

        text_format = self._repository.load(format_id)
        if text_format is None:
            return Unresolved(UnresolvedReason.MISSING, format_id, cacheability)
        if not text_format.status:
            return Unresolved(UnresolvedReason.DISABLED, format_id, cacheability)
        return Resolved(text_format, format_id, cacheability)

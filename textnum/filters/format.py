"""Text formats and the format repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from textnum._constants import FORMAT_CACHE_TAG_PREFIX
from textnum.filters.builtin import create_filter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textnum.filters.base import Filter


class TextFormat:
    """A named, ordered chain of filters.

    Stored order is by weight, ties broken by the order the filters were
    given in. The order is fixed at construction and every caller sees the
    same sequence.
    """

    def __init__(
        self,
        format_id: str,
        filters: Iterable[Filter] = (),
        *,
        name: str | None = None,
        status: bool = True,
    ) -> None:
        self.format_id = format_id
        self.name = name or format_id
        self.status = status
        # sorted() is stable, so equal weights keep their given order.
        self._filters: tuple[Filter, ...] = tuple(sorted(filters, key=lambda f: f.weight))

    def filters(self) -> tuple[Filter, ...]:
        """Filters in stored order."""
        return self._filters

    @property
    def cache_tags(self) -> frozenset[str]:
        return frozenset({f"{FORMAT_CACHE_TAG_PREFIX}{self.format_id}"})

    def __repr__(self) -> str:
        return f"TextFormat(format_id={self.format_id!r}, status={self.status!r})"


class FormatRepository(Protocol):
    """Read-only access to text formats."""

    def load(self, format_id: str) -> TextFormat | None: ...


class InMemoryFormatRepository:
    """Format repository backed by a dict, populated once at startup."""

    def __init__(self, formats: Iterable[TextFormat] = ()) -> None:
        self._formats: dict[str, TextFormat] = {f.format_id: f for f in formats}

    def load(self, format_id: str) -> TextFormat | None:
        return self._formats.get(format_id)

    def all(self) -> list[TextFormat]:
        return list(self._formats.values())

    def __contains__(self, format_id: object) -> bool:
        return format_id in self._formats

    def __len__(self) -> int:
        return len(self._formats)


def builtin_formats() -> list[TextFormat]:
    """The formats available without a formats file.

    ``plain_text`` is the default fallback format.
    """
    return [
        TextFormat(
            "plain_text",
            [
                create_filter("filter_html_escape", weight=-10),
                create_filter("filter_url"),
                create_filter("filter_autop"),
            ],
            name="Plain text",
        ),
        TextFormat(
            "basic_html",
            [
                create_filter("filter_html", weight=-10),
                create_filter("filter_code_escape"),
                create_filter("filter_url"),
                create_filter("filter_autop", weight=10),
            ],
            name="Basic HTML",
        ),
    ]

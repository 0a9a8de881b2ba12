"""Tests for FormatResolver."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from textnum._types import UnresolvedReason
from textnum.cache import EMPTY
from textnum.config.filter_config import FilterConfigSnapshot
from textnum.config.settings import TextNumSettings
from textnum.filters.format import InMemoryFormatRepository, TextFormat
from textnum.filters.resolver import FormatResolver, Resolved, Unresolved


class TestExplicitFormat:
    def test_existing_enabled_format_resolves(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("restricted")
        assert isinstance(result, Resolved)
        assert result.format.format_id == "restricted"
        assert result.format_id == "restricted"

    def test_explicit_format_carries_no_config_dependency(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("restricted")
        assert result.cacheability == EMPTY

    def test_format_tags_not_merged_at_resolution(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("restricted")
        assert "config:filter.format.restricted" not in result.cacheability.tags

    def test_missing_format(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("nope")
        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.MISSING
        assert result.format_id == "nope"

    def test_disabled_format(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("retired")
        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.DISABLED
        assert result.format_id == "retired"


class TestFallbackFormat:
    def test_absent_id_uses_fallback(self, resolver: FormatResolver) -> None:
        result = resolver.resolve(None)
        assert isinstance(result, Resolved)
        assert result.format_id == "plain_text"

    def test_fallback_attaches_config_cacheability(self, resolver: FormatResolver) -> None:
        result = resolver.resolve(None)
        assert "config:filter.settings" in result.cacheability.tags

    def test_missing_fallback_still_attaches_config_cacheability(
        self, repository: InMemoryFormatRepository
    ) -> None:
        resolver = FormatResolver(repository, FilterConfigSnapshot(fallback_format="gone"))
        result = resolver.resolve(None)
        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.MISSING
        assert result.format_id == "gone"
        assert "config:filter.settings" in result.cacheability.tags

    def test_empty_string_is_not_absent(self, resolver: FormatResolver) -> None:
        result = resolver.resolve("")
        assert isinstance(result, Unresolved)
        assert result.cacheability == EMPTY

    def test_config_read_through_snapshot(self) -> None:
        config = MagicMock(spec=FilterConfigSnapshot)
        config.get.return_value = "custom"
        config.cacheability = FilterConfigSnapshot().cacheability
        repository = InMemoryFormatRepository([TextFormat("custom")])

        result = FormatResolver(repository, config).resolve(None)

        config.get.assert_called_once_with("fallback_format")
        assert isinstance(result, Resolved)


class TestFilterConfigSnapshot:
    def test_get_known_key(self) -> None:
        assert FilterConfigSnapshot(fallback_format="x").get("fallback_format") == "x"

    def test_get_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            FilterConfigSnapshot().get("nope")

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEXTNUM_FALLBACK_FORMAT", "basic_html")
        snapshot = FilterConfigSnapshot.from_settings(TextNumSettings())
        assert snapshot.fallback_format == "basic_html"

    def test_snapshot_is_frozen(self) -> None:
        snapshot = FilterConfigSnapshot()
        with pytest.raises(Exception):  # noqa: B017
            snapshot.fallback_format = "other"  # type: ignore[misc]

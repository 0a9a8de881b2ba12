"""Shared fixtures for all tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path so tests can import the `textnum` package
# when running pytest from the repository root without an editable install.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from textnum.config.filter_config import FilterConfigSnapshot  # noqa: E402
from textnum.config.settings import get_settings  # noqa: E402
from textnum.diagnostics import RecordingSink  # noqa: E402
from textnum.filters.builtin import create_filter  # noqa: E402
from textnum.filters.executor import FilterChainExecutor  # noqa: E402
from textnum.filters.format import InMemoryFormatRepository, TextFormat  # noqa: E402
from textnum.filters.resolver import FormatResolver  # noqa: E402
from textnum.render import TextWithNumberRenderer  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture
def formats_dir() -> Path:
    return FIXTURES_DIR / "formats"


@pytest.fixture
def restrictor_format() -> TextFormat:
    """Format with only an HTML restrictor allowing <em> and <strong>."""
    return TextFormat(
        "restricted",
        [create_filter("filter_html", settings={"allowed_html": "<em> <strong>"})],
    )


@pytest.fixture
def repository(restrictor_format: TextFormat) -> InMemoryFormatRepository:
    return InMemoryFormatRepository(
        [
            restrictor_format,
            TextFormat("plain_text", [create_filter("filter_html_escape")]),
            TextFormat("retired", [create_filter("filter_html_escape")], status=False),
        ]
    )


@pytest.fixture
def config() -> FilterConfigSnapshot:
    return FilterConfigSnapshot(fallback_format="plain_text")


@pytest.fixture
def resolver(repository: InMemoryFormatRepository, config: FilterConfigSnapshot) -> FormatResolver:
    return FormatResolver(repository, config)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def executor(sink: RecordingSink) -> FilterChainExecutor:
    return FilterChainExecutor(sink=sink)


@pytest.fixture
def renderer(resolver: FormatResolver, executor: FilterChainExecutor) -> TextWithNumberRenderer:
    return TextWithNumberRenderer(resolver, executor)

"""Tests for CompositionRenderer and TextWithNumberRenderer."""

from __future__ import annotations

from decimal import Decimal

import pytest

from textnum._constants import LANGUAGE_INTERFACE_CONTEXT
from textnum._types import RESTRICTOR_TYPE, CompositeValue, FilterType, UnresolvedReason
from textnum.config.display import NumberDisplayConfig, NumberFieldSettings
from textnum.config.filter_config import FilterConfigSnapshot
from textnum.diagnostics import RecordingSink
from textnum.filters.executor import FilterChainExecutor
from textnum.filters.format import InMemoryFormatRepository, TextFormat
from textnum.filters.resolver import FormatResolver
from textnum.number import NumberFormatter
from textnum.render import CompositionRenderer, TextWithNumberRenderer
from tests.helpers import FailingFilter, RecordingFilter

TEXT_OPEN = '<p class="text_with_number__text_item">'
NUMBER_OPEN = '</p><p class="text_with_number__number_item">'


class TestCompositionRenderer:
    def test_text_first_then_number(self) -> None:
        markup = CompositionRenderer().compose("<em>t</em>", "$1")
        assert markup == f"{TEXT_OPEN}<em>t</em>{NUMBER_OPEN}$1</p>"

    def test_empty_fragments_still_wrapped(self) -> None:
        markup = CompositionRenderer().compose("", "")
        assert markup == f"{TEXT_OPEN}{NUMBER_OPEN}</p>"


class TestRender:
    def test_composition_scenario(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="<b>hi</b>", number_value=1000, text_format_id="restricted")

        result = renderer.render(
            value,
            NumberDisplayConfig(thousand_separator=","),
            NumberFieldSettings(prefix="$|$", suffix=""),
        )

        assert result.markup == f"{TEXT_OPEN}hi{NUMBER_OPEN}$1,000</p>"
        assert result.text_markup == "hi"
        assert result.number.markup == "$1,000"
        assert result.number.content_attribute == "1000"
        assert result.diagnostic is None

    def test_cacheability_combines_text_and_number(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="x", number_value=2)
        result = renderer.render(
            value, NumberDisplayConfig(), NumberFieldSettings(suffix=" item| items")
        )
        assert result.cache_tags == {"config:filter.settings", "config:filter.format.plain_text"}
        assert result.cache_contexts == {LANGUAGE_INTERFACE_CONTEXT}
        assert result.max_age == -1
        assert result.number.markup == "2 items"

    def test_affixes_hidden(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="x", number_value=1, text_format_id="restricted")
        result = renderer.render(
            value,
            NumberDisplayConfig(prefix_suffix=False),
            NumberFieldSettings(prefix="dollar |dollars "),
        )
        assert result.number.markup == "1"
        assert result.number.prefix == "dollar "

    def test_skip_set_forwarded(self) -> None:
        restrictor = RecordingFilter("r", RESTRICTOR_TYPE)
        markup_filter = RecordingFilter("m", FilterType.MARKUP_LANGUAGE)
        repository = InMemoryFormatRepository([TextFormat("f", [restrictor, markup_filter])])
        renderer = TextWithNumberRenderer(FormatResolver(repository, FilterConfigSnapshot()))
        value = CompositeValue(
            text_value="x",
            number_value=0,
            text_format_id="f",
            text_filter_types_to_skip=frozenset({FilterType.MARKUP_LANGUAGE, RESTRICTOR_TYPE}),
            langcode="fr",
        )

        result = renderer.render(value, NumberDisplayConfig(), NumberFieldSettings())

        assert result.text_markup == "x<p:r><r>"
        assert markup_filter.processed == []
        assert restrictor.langcodes == ["fr"]

    def test_custom_number_formatter(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="x", number_value=Decimal("1234.5"))
        result = renderer.render(
            value,
            NumberDisplayConfig(thousand_separator=","),
            NumberFieldSettings(),
            number_formatter=NumberFormatter(",", decimals=2),
        )
        assert result.number.markup == "1,234.50"


class TestUnresolvedRender:
    def test_missing_format_renders_empty_text_beside_number(
        self, renderer: TextWithNumberRenderer, sink: RecordingSink
    ) -> None:
        value = CompositeValue(text_value="<b>secret</b>", number_value=5, text_format_id="gone")

        result = renderer.render(value, NumberDisplayConfig(), NumberFieldSettings())

        assert result.markup == f"{TEXT_OPEN}{NUMBER_OPEN}5</p>"
        assert "secret" not in result.markup
        assert result.diagnostic is not None
        assert result.diagnostic.reason is UnresolvedReason.MISSING
        assert sink.events == [("filter", "Missing text format: %format.", {"%format": "gone"})]

    def test_disabled_format(self, renderer: TextWithNumberRenderer, sink: RecordingSink) -> None:
        value = CompositeValue(text_value="t", number_value=5, text_format_id="retired")
        result = renderer.render(value, NumberDisplayConfig(), NumberFieldSettings())
        assert result.text_markup == ""
        assert result.diagnostic is not None
        assert result.diagnostic.reason is UnresolvedReason.DISABLED
        assert sink.events[0][2] == {"%format": "retired"}

    def test_as_dict_includes_diagnostic(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="t", number_value=5, text_format_id="retired")
        data = renderer.render(value, NumberDisplayConfig(), NumberFieldSettings()).as_dict()
        assert data["diagnostic"] == {
            "channel": "filter",
            "message": "Disabled text format: retired.",
            "reason": "disabled",
        }
        assert data["cache_tags"] == []
        assert data["max_age"] == -1


class TestFilterFailureRender:
    def test_filter_exception_aborts_render(self, config: FilterConfigSnapshot) -> None:
        repository = InMemoryFormatRepository([TextFormat("f", [FailingFilter()])])
        renderer = TextWithNumberRenderer(
            FormatResolver(repository, config), FilterChainExecutor(sink=RecordingSink())
        )
        value = CompositeValue(text_value="x", number_value=1, text_format_id="f")
        with pytest.raises(RuntimeError, match="filter exploded"):
            renderer.render(value, NumberDisplayConfig(), NumberFieldSettings())


class TestRenderResult:
    def test_as_dict(self, renderer: TextWithNumberRenderer) -> None:
        value = CompositeValue(text_value="<em>a</em>", number_value=1000, text_format_id="restricted")
        data = renderer.render(
            value, NumberDisplayConfig(thousand_separator=","), NumberFieldSettings(prefix="$")
        ).as_dict()
        assert data["text_markup"] == "<em>a</em>"
        assert data["number"] == {
            "original_value": "1000",
            "formatted_value": "1,000",
            "markup": "$1,000",
            "prefix": "$",
            "suffix": "",
            "content": "1000",
        }
        assert data["cache_tags"] == ["config:filter.format.restricted"]
        assert data["cache_contexts"] == []
        assert "diagnostic" not in data

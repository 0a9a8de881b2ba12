"""Tests for diagnostic events and sinks."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from textnum._types import UnresolvedReason
from textnum.diagnostics import DiagnosticEvent, RecordingSink, StructlogSink


class TestDiagnosticEvent:
    def test_formatted_replaces_placeholders(self) -> None:
        event = DiagnosticEvent(
            channel="filter",
            message="Missing text format: %format.",
            context={"%format": "full_html"},
            reason=UnresolvedReason.MISSING,
        )
        assert event.formatted() == "Missing text format: full_html."
        assert event.message == "Missing text format: %format."

    def test_formatted_without_context(self) -> None:
        assert DiagnosticEvent("filter", "plain").formatted() == "plain"


class TestRecordingSink:
    def test_records_and_clears(self) -> None:
        sink = RecordingSink()
        context = {"%format": "x"}
        sink.warn("filter", "msg", context)
        context["%format"] = "changed"

        assert sink.events == [("filter", "msg", {"%format": "x"})]
        sink.clear()
        assert sink.events == []


class TestStructlogSink:
    @patch("textnum.diagnostics.get_logger")
    def test_logs_warning_on_channel(self, mock_get_logger: MagicMock) -> None:
        logger = MagicMock()
        mock_get_logger.return_value = logger

        StructlogSink().warn("filter", "Disabled text format: %format.", {"%format": "old"})

        mock_get_logger.assert_called_once_with("filter")
        logger.warning.assert_called_once_with(
            "diagnostic_reported",
            message="Disabled text format: old.",
            template="Disabled text format: %format.",
            format="old",
        )

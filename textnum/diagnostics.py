"""Diagnostic events and the sinks that receive them.

The pipeline reports non-fatal problems (a missing or disabled text
format) as events instead of exceptions. Sinks are fire-and-forget.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from textnum.logging import get_logger

if TYPE_CHECKING:
    from textnum._types import UnresolvedReason


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """A warning raised while rendering.

    ``message`` keeps its placeholders (e.g. ``%format``); ``context`` maps
    them to values.
    """

    channel: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    reason: UnresolvedReason | None = None

    def formatted(self) -> str:
        """Message with placeholders replaced by their context values."""
        text = self.message
        for placeholder, value in self.context.items():
            text = text.replace(placeholder, str(value))
        return text


class LogSink(Protocol):
    def warn(self, channel: str, message: str, context: dict[str, Any]) -> None: ...


class StructlogSink:
    """Writes diagnostics through structlog, one logger per channel.

    Each diagnostic is logged as a ``diagnostic_reported`` event carrying
    the substituted message, the raw template and the context values.
    """

    def warn(self, channel: str, message: str, context: dict[str, Any]) -> None:
        logger = get_logger(channel)
        fields = {key.lstrip("%@!"): value for key, value in context.items()}
        logger.warning(
            "diagnostic_reported",
            message=DiagnosticEvent(channel, message, context).formatted(),
            template=message,
            **fields,
        )


class RecordingSink:
    """Keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def warn(self, channel: str, message: str, context: dict[str, Any]) -> None:
        self.events.append((channel, message, dict(context)))

    def clear(self) -> None:
        self.events.clear()

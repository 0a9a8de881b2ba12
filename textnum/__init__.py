"""textnum: filtered text with a formatted number, plus cache metadata."""

from __future__ import annotations

__version__ = "0.1.0"

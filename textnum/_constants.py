"""Shared constants (single source of truth for defaults used across modules)."""

from __future__ import annotations

# Max-age value meaning "cache forever".
MAX_AGE_PERMANENT = -1

THIN_SPACE = "\u2009"

# Thousand markers accepted by the number display settings, with labels.
THOUSAND_SEPARATORS: dict[str, str] = {
    "": "- None -",
    ".": "Decimal point",
    ",": "Comma",
    " ": "Space",
    THIN_SPACE: "Thin space",
    "'": "Apostrophe",
}

DEFAULT_FALLBACK_FORMAT = "plain_text"

# Logging channel used for unresolved format diagnostics.
FILTER_LOG_CHANNEL = "filter"

DEFAULT_TEXT_MAX_LENGTH = 255

# Sample rendered by the formatter settings summary.
SUMMARY_SAMPLE_NUMBER = 1234.1234567890

TEXT_ITEM_CLASS = "text_with_number__text_item"
NUMBER_ITEM_CLASS = "text_with_number__number_item"

# Cache tag of the process-wide filter settings.
FILTER_SETTINGS_CACHE_TAG = "config:filter.settings"
FORMAT_CACHE_TAG_PREFIX = "config:filter.format."

# Cache context of renders that depend on the interface language.
LANGUAGE_INTERFACE_CONTEXT = "languages:language_interface"

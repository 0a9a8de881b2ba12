"""Pluralization helper interface.

Locale rules are out of scope here: the number formatter only asks the
helper to pick between a singular and a plural form.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from textnum._constants import LANGUAGE_INTERFACE_CONTEXT
from textnum.cache import CacheableMetadata

if TYPE_CHECKING:
    from textnum._types import Number


class Pluralizer(Protocol):
    """Selects the singular or plural form for a value."""

    @property
    def cacheability(self) -> CacheableMetadata: ...

    def plural_select(self, value: Number, singular: str, plural: str) -> str: ...


class DefaultPluralizer:
    """Two-form rule: exactly 1 is singular, everything else is plural.

    The selected form is translated per interface language, so renders
    that used it vary by that context.
    """

    @property
    def cacheability(self) -> CacheableMetadata:
        return CacheableMetadata(contexts=frozenset({LANGUAGE_INTERFACE_CONTEXT}))

    def plural_select(self, value: Number, singular: str, plural: str) -> str:
        return singular if value == 1 else plural

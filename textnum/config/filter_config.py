"""Read-only snapshot of the filter configuration.

The resolver reads the fallback format through this snapshot instead of
reaching into process-wide settings, and the snapshot carries the cache
metadata a render picks up when it depends on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from textnum._constants import DEFAULT_FALLBACK_FORMAT, FILTER_SETTINGS_CACHE_TAG, MAX_AGE_PERMANENT
from textnum.cache import CacheableMetadata

if TYPE_CHECKING:
    from textnum.config.settings import TextNumSettings


class FilterConfigSnapshot(BaseModel):
    """Immutable view of the ``filter.settings`` configuration."""

    model_config = ConfigDict(frozen=True)

    fallback_format: str = DEFAULT_FALLBACK_FORMAT

    @classmethod
    def from_settings(cls, settings: TextNumSettings) -> FilterConfigSnapshot:
        return cls(fallback_format=settings.filter.fallback_format)

    def get(self, key: str) -> Any:
        """Return a configuration value by key.

        Raises:
            KeyError: If the key is not part of the filter configuration.
        """
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    @property
    def cache_tags(self) -> frozenset[str]:
        return frozenset({FILTER_SETTINGS_CACHE_TAG})

    @property
    def cache_contexts(self) -> frozenset[str]:
        return frozenset()

    @property
    def cache_max_age(self) -> int:
        return MAX_AGE_PERMANENT

    @property
    def cacheability(self) -> CacheableMetadata:
        return CacheableMetadata.from_dependency(self)

"""Cacheability metadata and its merge rules.

Rendered markup carries three pieces of cache metadata:
- tags: invalidation keys (set union on merge)
- contexts: variation axes (set union on merge)
- max-age: validity window in seconds, ``-1`` meaning permanent
  (minimum on merge, with ``-1`` treated as infinity)

Merging is commutative, associative and idempotent, and ``EMPTY`` is the
identity, so metadata from any number of sources can be folded in any
grouping without changing the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from textnum._constants import MAX_AGE_PERMANENT

if TYPE_CHECKING:
    from collections.abc import Iterable


@runtime_checkable
class CacheableDependency(Protocol):
    """Anything whose state the rendered output depends on."""

    @property
    def cache_tags(self) -> frozenset[str]: ...

    @property
    def cache_contexts(self) -> frozenset[str]: ...

    @property
    def cache_max_age(self) -> int: ...


def merge_max_age(a: int, b: int) -> int:
    """Shortest validity window wins; ``-1`` only survives against ``-1``."""
    if a == MAX_AGE_PERMANENT:
        return b
    if b == MAX_AGE_PERMANENT:
        return a
    return min(a, b)


@dataclass(frozen=True, slots=True)
class CacheableMetadata:
    """Immutable cache tags, contexts and max-age."""

    tags: frozenset[str] = field(default_factory=frozenset)
    contexts: frozenset[str] = field(default_factory=frozenset)
    max_age: int = MAX_AGE_PERMANENT

    def __post_init__(self) -> None:
        if self.max_age < MAX_AGE_PERMANENT:
            msg = f"max_age must be -1 or >= 0, got {self.max_age}"
            raise ValueError(msg)
        # Accept any iterable of strings; store as frozensets.
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "contexts", frozenset(self.contexts))

    @classmethod
    def from_dependency(cls, dependency: CacheableDependency) -> CacheableMetadata:
        """Build metadata from an object implementing CacheableDependency."""
        return cls(
            tags=dependency.cache_tags,
            contexts=dependency.cache_contexts,
            max_age=dependency.cache_max_age,
        )

    def merge(self, other: CacheableMetadata) -> CacheableMetadata:
        """Return the combination of both; neither operand is modified."""
        return CacheableMetadata(
            tags=self.tags | other.tags,
            contexts=self.contexts | other.contexts,
            max_age=merge_max_age(self.max_age, other.max_age),
        )

    def with_tags(self, *tags: str) -> CacheableMetadata:
        return self.merge(CacheableMetadata(tags=frozenset(tags)))

    def with_contexts(self, *contexts: str) -> CacheableMetadata:
        return self.merge(CacheableMetadata(contexts=frozenset(contexts)))

    def with_max_age(self, max_age: int) -> CacheableMetadata:
        return self.merge(CacheableMetadata(max_age=max_age))

    @property
    def is_permanent(self) -> bool:
        return self.max_age == MAX_AGE_PERMANENT

    def as_dict(self) -> dict[str, object]:
        """Sorted, JSON-friendly representation."""
        return {
            "cache_tags": sorted(self.tags),
            "cache_contexts": sorted(self.contexts),
            "max_age": self.max_age,
        }


EMPTY = CacheableMetadata()


def merge(a: CacheableMetadata, b: CacheableMetadata) -> CacheableMetadata:
    """Merge two metadata values (commutative and associative)."""
    return a.merge(b)


def merge_all(items: Iterable[CacheableMetadata]) -> CacheableMetadata:
    """Fold any number of metadata values, starting from ``EMPTY``."""
    return reduce(merge, items, EMPTY)


def merge_tags(*groups: Iterable[str]) -> frozenset[str]:
    """Union of tag collections."""
    result: set[str] = set()
    for group in groups:
        result.update(group)
    return frozenset(result)

"""Memoization of effective settings values.

The cache belongs to exactly one ``SettingsStore`` and lives as long as that
store, which is one request. It is keyed by group id and only a write through
the owning store invalidates an entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["EffectiveValues", "EffectiveValueCache"]


@dataclass(frozen=True, slots=True)
class EffectiveValues:
    """Resolved values of one group.

    Attributes:
        prefixed: Derived key -> value.
        unprefixed: Bare field id -> value (last write wins on shared ids).
    """

    prefixed: dict[str, Any]
    unprefixed: dict[str, Any]


@dataclass
class EffectiveValueCache:
    """Per-store cache of ``EffectiveValues`` keyed by group id."""

    _entries: dict[str, EffectiveValues] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0

    def get(self, group_id: str) -> EffectiveValues | None:
        entry = self._entries.get(group_id)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, group_id: str, values: EffectiveValues) -> None:
        self._entries[group_id] = values

    def invalidate(self, group_id: str) -> None:
        self._entries.pop(group_id, None)

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._entries

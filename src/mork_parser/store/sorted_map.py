# src/mork_parser/store/sorted_map.py

from __future__ import annotations

from bisect import insort
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")


class SortedIntMap(Generic[V]):
    """
    Integer-keyed map that iterates in ascending key order.

    Keys are unique. Lookups go through a dict; the sorted key list is only
    touched when a new key is inserted (bisect), so iteration order is
    deterministic regardless of insertion order.
    """

    __slots__ = ("_keys", "_entries")

    def __init__(self) -> None:
        self._keys: List[int] = []
        self._entries: Dict[int, V] = {}

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def set(self, key: int, value: V) -> Optional[V]:
        """Insert or replace; returns the replaced value (None if new)."""
        previous = self._entries.get(key)
        if key not in self._entries:
            insort(self._keys, key)
        self._entries[key] = value
        return previous

    def get_or_create(self, key: int, factory: Callable[[], V]) -> V:
        """Return the entry for ``key``, creating it with ``factory`` if absent."""
        if key in self._entries:
            return self._entries[key]
        entry = factory()
        insort(self._keys, key)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._keys.clear()
        self._entries.clear()

    # ------------------------------------------------------------------ #
    # Access
    # ------------------------------------------------------------------ #

    def get(self, key: int, default: Optional[V] = None) -> Optional[V]:
        return self._entries.get(key, default)

    def __getitem__(self, key: int) -> V:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._keys))

    def keys(self) -> List[int]:
        return list(self._keys)

    def values(self) -> List[V]:
        return [self._entries[k] for k in self._keys]

    def items(self) -> List[Tuple[int, V]]:
        return [(k, self._entries[k]) for k in self._keys]

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<{type(self).__name__} keys={len(self._keys)}>"

# src/mork_parser/store/dictionary.py

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from mork_parser.core.context import Diagnostics

from .sorted_map import SortedIntMap


class MorkDict:
    """
    A Mork dictionary: object id -> string.

    Two instances live in every database, ``columns`` (column id -> field
    name such as "FirstName") and ``values`` (value id -> literal text).
    Keys are unique and kept in ascending order; setting an existing key
    replaces its value and leaves a trace line.
    """

    def __init__(self, name: str, diagnostics: Optional[Diagnostics] = None):
        self.name = name
        self.diagnostics = diagnostics or Diagnostics.silent()
        self._entries: SortedIntMap[str] = SortedIntMap()

    def set(self, key: int, value: str) -> None:
        self.diagnostics.log(
            "     Setting %s dictionary key %3d/%2X to \"%s\"",
            self.name, key, key, value,
        )
        previous = self._entries.set(key, value)
        if previous is not None and previous != value:
            self.diagnostics.notice(
                "     - Changing %3d/%2X from \"%s\" to \"%s\"",
                key, key, previous, value,
            )

    def get(self, key: int) -> str:
        """Return the string for ``key``, or "" when there is none."""
        return self._entries.get(key) or ""

    def reverse_lookup(self, value: str) -> int:
        """Return the lowest key holding ``value``, or 0 when there is none."""
        for key, text in self._entries.items():
            if text == value:
                return key
        return 0

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> List[int]:
        return self._entries.keys()

    def items(self) -> List[Tuple[int, str]]:
        return self._entries.items()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<MorkDict {self.name} entries={len(self)}>"

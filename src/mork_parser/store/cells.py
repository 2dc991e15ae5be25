# src/mork_parser/store/cells.py

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from mork_parser.core.context import Diagnostics

from .sorted_map import SortedIntMap


class CellSet:
    """
    The cells of one row: column id -> value id, ascending by column id.

    Both ids are resolved through the database dictionaries; a column can
    appear only once per row and a later value replaces an earlier one.
    """

    __slots__ = ("_cells", "diagnostics")

    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self._cells: SortedIntMap[int] = SortedIntMap()
        self.diagnostics = diagnostics or Diagnostics.silent()

    def set(self, column_id: int, value_id: int) -> None:
        self.diagnostics.log(
            "     Setting cell with key %3d/%2X to %d/%X",
            column_id, column_id, value_id, value_id,
        )
        previous = self._cells.set(column_id, value_id)
        if previous is not None and previous != value_id:
            self.diagnostics.notice(
                "     - Changing cell %3d/%2X from %d/%X to %d/%X",
                column_id, column_id, previous, previous, value_id, value_id,
            )

    def get(self, column_id: int) -> Optional[int]:
        return self._cells.get(column_id)

    def items(self) -> List[Tuple[int, int]]:
        return self._cells.items()

    def clear(self) -> None:
        self._cells.clear()

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        pairs = ", ".join(f"{c:X}={v:X}" for c, v in self.items())
        return f"<CellSet {pairs}>"

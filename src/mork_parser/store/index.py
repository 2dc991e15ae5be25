# src/mork_parser/store/index.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from mork_parser.core.context import Diagnostics

from .cells import CellSet
from .sorted_map import SortedIntMap

DEFAULT_SCOPE = 0x80

# row id -> cells
RowMap = SortedIntMap[CellSet]
# row scope -> rows
RowScopeMap = SortedIntMap[RowMap]
# table id -> row scopes
TableMap = SortedIntMap[RowScopeMap]


@dataclass(frozen=True, slots=True)
class RowRef:
    """One row of the index together with the keys that lead to it."""
    table_scope: int
    table_id: int
    row_scope: int
    row_id: int
    cells: CellSet


class RowIndex:
    """
    Four-level index: table scope -> table id -> row scope -> row id -> cells.

    Every level is created on first access, so looking a row up is also how
    it comes into existence. A scope of 0 means "not given" and is replaced
    by ``default_scope`` at both the table and the row level.
    """

    def __init__(
        self,
        default_scope: int = DEFAULT_SCOPE,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.default_scope = default_scope
        self.diagnostics = diagnostics or Diagnostics.silent()
        self.table_scopes: SortedIntMap[TableMap] = SortedIntMap()

    def resolve_scope(self, scope: int) -> int:
        return scope or self.default_scope

    def get_cells(
        self,
        table_scope: int,
        table_id: int,
        row_scope: int,
        row_id: int,
    ) -> CellSet:
        """Return the cell set for a row, creating any missing level."""
        tables = self.table_scopes.get_or_create(
            self.resolve_scope(table_scope), SortedIntMap
        )
        row_scopes = tables.get_or_create(table_id, SortedIntMap)
        rows = row_scopes.get_or_create(self.resolve_scope(row_scope), SortedIntMap)
        return rows.get_or_create(row_id, lambda: CellSet(self.diagnostics))

    def find_cells(
        self,
        table_scope: int,
        table_id: int,
        row_scope: int,
        row_id: int,
    ) -> Optional[CellSet]:
        """Like ``get_cells`` but never creates anything."""
        tables = self.table_scopes.get(self.resolve_scope(table_scope))
        if tables is None:
            return None
        row_scopes = tables.get(table_id)
        if row_scopes is None:
            return None
        rows = row_scopes.get(self.resolve_scope(row_scope))
        if rows is None:
            return None
        return rows.get(row_id)

    def iter_rows(self) -> Iterator[RowRef]:
        """Yield every row depth-first, ascending keys at every level."""
        for table_scope, tables in self.table_scopes.items():
            for table_id, row_scopes in tables.items():
                for row_scope, rows in row_scopes.items():
                    for row_id, cells in rows.items():
                        yield RowRef(table_scope, table_id, row_scope, row_id, cells)

    def clear(self) -> None:
        """Release every level, innermost first."""
        for tables in self.table_scopes.values():
            for row_scopes in tables.values():
                for rows in row_scopes.values():
                    for cells in rows.values():
                        cells.clear()
                    rows.clear()
                row_scopes.clear()
            tables.clear()
        self.table_scopes.clear()

    def __len__(self) -> int:
        return len(self.table_scopes)

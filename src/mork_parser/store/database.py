# src/mork_parser/store/database.py

"""
The in-memory Mork database.

Owns the two dictionaries, the row index, and the state the parser mutates
while it runs (what a cell block is filling, the synthetic value id
counter, the row currently being filled). Exporters only use the query
side: ``column_name``, ``value_text``, ``column_id`` and ``iter_rows``.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Optional

from mork_parser.core.context import Diagnostics
from mork_parser.core.exceptions import MorkFormatError

from .cells import CellSet
from .dictionary import MorkDict
from .index import DEFAULT_SCOPE, RowIndex, RowRef

MAX_VALUE_ID = 0x7FFFFFFF


class ParsingTarget(Enum):
    """What the cells currently being parsed are written into."""
    COLUMNS = "columns"
    VALUES = "values"
    ROWS = "rows"


class MorkDatabase:
    def __init__(
        self,
        *,
        default_scope: int = DEFAULT_SCOPE,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.diagnostics = diagnostics or Diagnostics.silent()
        self.columns = MorkDict("columns", self.diagnostics)
        self.values = MorkDict("values", self.diagnostics)
        self.index = RowIndex(default_scope, self.diagnostics)

        # Parse state
        self.parsing_target = ParsingTarget.VALUES
        self.next_synthetic_value_id = MAX_VALUE_ID
        self.active_cells: Optional[CellSet] = None

        # Set when parsing stopped on a format error
        self.error: Optional[MorkFormatError] = None

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def default_scope(self) -> int:
        return self.index.default_scope

    @property
    def ok(self) -> bool:
        """True when the whole input was parsed without a format error."""
        return self.error is None

    # ------------------------------------------------------------------ #
    # Write path (used by the parser)
    # ------------------------------------------------------------------ #

    def get_cells(
        self,
        table_scope: int,
        table_id: int,
        row_scope: int,
        row_id: int,
    ) -> CellSet:
        return self.index.get_cells(table_scope, table_id, row_scope, row_id)

    def set_current_row(
        self,
        table_scope: int,
        table_id: int,
        row_scope: int,
        row_id: int,
    ) -> CellSet:
        """Point ``active_cells`` at a row, creating it if needed."""
        self.diagnostics.log(
            "  Setting active cells to Table ID %d in TableScope %d "
            "and Row ID %d in Row Scope %d",
            table_id, self.index.resolve_scope(table_scope),
            row_id, self.index.resolve_scope(row_scope),
        )
        self.active_cells = self.get_cells(table_scope, table_id, row_scope, row_id)
        return self.active_cells

    def mint_value_id(self, text: str) -> int:
        """Intern an inline literal under a fresh synthetic id and return it."""
        self.next_synthetic_value_id -= 1
        self.values.set(self.next_synthetic_value_id, text)
        return self.next_synthetic_value_id

    # ------------------------------------------------------------------ #
    # Query surface
    # ------------------------------------------------------------------ #

    def column_name(self, column_id: int) -> str:
        return self.columns.get(column_id)

    def value_text(self, value_id: int) -> str:
        return self.values.get(value_id)

    def column_id(self, name: str) -> int:
        return self.columns.reverse_lookup(name)

    def iter_rows(self) -> Iterator[RowRef]:
        return self.index.iter_rows()

    @property
    def row_count(self) -> int:
        return sum(1 for _ in self.iter_rows())

    def value_for_column(self, cells: CellSet, name: str) -> Optional[str]:
        """
        Resolved text of the cell whose column is called ``name``.

        Returns None when the column is unknown or the row has no such
        cell; returns "" for a cell whose value id has no entry.
        """
        column_id = self.column_id(name)
        if not column_id:
            return None
        value_id = cells.get(column_id)
        if value_id is None:
            return None
        return self.value_text(value_id)

    def row_values(self, cells: CellSet) -> Dict[str, str]:
        """Map each cell's column name (hex id if unnamed) to its text."""
        out: Dict[str, str] = {}
        for column_id, value_id in cells.items():
            name = self.column_name(column_id) or f"{column_id:X}"
            out[name] = self.value_text(value_id)
        return out

    # ------------------------------------------------------------------ #
    # Teardown
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        self.columns.clear()
        self.values.clear()
        self.active_cells = None
        self.index.clear()

    def __enter__(self) -> "MorkDatabase":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"<MorkDatabase columns={len(self.columns)} values={len(self.values)} "
            f"table_scopes={len(self.index)}>"
        )

"""
report.py
Plain-text dumps of a MorkDatabase.

Layout (indentation is part of the format):

    Table scope map with 1 entries
    Table scope 128:
         Mork table map with 2 entries
         Table   1:
              Row scope map with 1 entries
              Row scope 128:
                   Mork row map with 3 entries
                   Row   1:
                   Mork cells with 2 entries
                     "FirstName" = "Jane" (142/8E = 160/A0)
"""

from __future__ import annotations

from typing import TextIO

from mork_parser.store.database import MorkDatabase
from mork_parser.store.dictionary import MorkDict

from .vcard import write_vcard_21


def dump_dict(out: TextIO, dictionary: MorkDict) -> None:
    for key, value in dictionary.items():
        out.write(f'  {key:3d}/{key:2X}: "{value}"\n')


def dump_columns(out: TextIO, db: MorkDatabase) -> None:
    dump_dict(out, db.columns)


def dump_values(out: TextIO, db: MorkDatabase) -> None:
    dump_dict(out, db.values)


def dump_table_scope_map(
    out: TextIO,
    db: MorkDatabase,
    *,
    with_vcards: bool = False,
) -> None:
    """
    Write the whole index, depth-first.

    With ``with_vcards`` each row is followed by its vCard 2.1 rendering
    (rows that do not make a contact produce nothing).
    """
    table_scopes = db.index.table_scopes
    out.write(f"Table scope map with {len(table_scopes)} entries\n")
    for table_scope, tables in table_scopes.items():
        out.write(f"Table scope {table_scope:3d}:\n")
        out.write(f"     Mork table map with {len(tables)} entries\n")
        for table_id, row_scopes in tables.items():
            out.write(f"     Table {table_id:3d}:\n")
            out.write(f"          Row scope map with {len(row_scopes)} entries\n")
            for row_scope, rows in row_scopes.items():
                out.write(f"          Row scope {row_scope:3d}:\n")
                out.write(f"               Mork row map with {len(rows)} entries\n")
                for row_id, cells in rows.items():
                    out.write(f"               Row {row_id:3d}:\n")
                    out.write(f"               Mork cells with {len(cells)} entries\n")
                    for column_id, value_id in cells.items():
                        out.write(
                            f'                 "{db.column_name(column_id)}" = '
                            f'"{db.value_text(value_id)}" '
                            f"({column_id}/{column_id:X} = {value_id}/{value_id:X})\n"
                        )
                    if with_vcards:
                        write_vcard_21(out, db, cells)


def dump_database(out: TextIO, db: MorkDatabase, *, with_vcards: bool = False) -> None:
    """Columns, values and structure, as printed by the ``mork`` command."""
    out.write("\nDump of Mork Data\n")
    out.write("----- columns table -----\n")
    dump_columns(out, db)
    out.write("----- values table -----\n")
    dump_values(out, db)
    out.write("----- mork structure -----\n")
    dump_table_scope_map(out, db, with_vcards=with_vcards)

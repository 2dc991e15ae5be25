from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from mork_parser.cli.utils import MORK_ARGUMENT, NO_GROUPS_OPTION, VERBOSE_OPTION, load_mork
from mork_parser.exporter.vcard import contact_fields, is_contact

console = Console()


def stats_command(
    mork: Path = MORK_ARGUMENT,
    no_groups: bool = NO_GROUPS_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Count dictionary entries, tables, rows and contacts.
    """
    db = load_mork(mork, verbose=verbose, no_groups=no_groups)

    rows = list(db.iter_rows())
    contacts = sum(
        1 for row in rows if is_contact(row.cells, contact_fields(db, row.cells))
    )
    tables = sum(len(tables) for tables in db.index.table_scopes.values())

    table = Table(title="Mork Statistics")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    for label, count in (
        ("Columns", len(db.columns)),
        ("Values", len(db.values)),
        ("Table scopes", len(db.index)),
        ("Tables", tables),
        ("Rows", len(rows)),
        ("Contacts", contacts),
    ):
        table.add_row(label, str(count))

    console.print(table)

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from mork_parser.cli.utils import MORK_ARGUMENT, NO_GROUPS_OPTION, VERBOSE_OPTION, load_mork
from mork_parser.exporter import export_database_to_vcards
from mork_parser.exporter.vcard import PROFILES, dump_vcards

console = Console(stderr=True)


def vcard_command(
    mork: Path = MORK_ARGUMENT,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write to file instead of stdout"),
    version: str = typer.Option("3.0", "--version", help="vCard version: 2.1 or 3.0"),
    no_groups: bool = NO_GROUPS_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Export the contacts of an address book as vCards.
    """
    if version not in PROFILES:
        raise typer.BadParameter(
            f"expected one of {', '.join(sorted(PROFILES))}", param_hint="--version"
        )

    db = load_mork(mork, verbose=verbose, no_groups=no_groups)

    if out:
        count = export_database_to_vcards(db, out, version=version)
    else:
        count = dump_vcards(sys.stdout, db, version=version)

    if verbose:
        console.log(f"{count} contact(s) exported")

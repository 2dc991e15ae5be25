from __future__ import annotations

import sys
from pathlib import Path

import typer

from mork_parser.cli.utils import MORK_ARGUMENT, NO_GROUPS_OPTION, VERBOSE_OPTION, load_mork
from mork_parser.exporter.report import dump_database


def dump_command(
    mork: Path = MORK_ARGUMENT,
    vcards: bool = typer.Option(False, "--vcards", help="Follow each row with its vCard 2.1"),
    trace: bool = typer.Option(False, "--trace", help="Print the parser trace"),
    no_groups: bool = NO_GROUPS_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Dump columns, values and the table structure, like ``mork FILE``.
    """
    db = load_mork(mork, verbose=verbose, trace=trace, no_groups=no_groups)
    dump_database(sys.stdout, db, with_vcards=vcards)

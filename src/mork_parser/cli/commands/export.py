from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from mork_parser.cli.utils import (
    MORK_ARGUMENT,
    NO_GROUPS_OPTION,
    VERBOSE_OPTION,
    load_mork,
    write_json,
)
from mork_parser.exporter.json_exporter import build_database_dict


def export_command(
    mork: Path = MORK_ARGUMENT,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write to file instead of stdout"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON"),
    no_groups: bool = NO_GROUPS_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Export dictionaries and rows as JSON (stdout by default).
    """
    db = load_mork(mork, verbose=verbose, no_groups=no_groups)
    write_json(build_database_dict(db), out=out, pretty=pretty)

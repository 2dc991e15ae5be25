from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict

import typer
from rich.console import Console

from mork_parser.core.context import Diagnostics
from mork_parser.core.exceptions import MorkHeaderError
from mork_parser.parser_core import parse_mork_file
from mork_parser.store.database import MorkDatabase

# stdout is reserved for command output (JSON, vCards, dumps)
err_console = Console(stderr=True)

# Options shared by the commands
MORK_ARGUMENT = typer.Argument(..., exists=True, readable=True, help="Mork file (e.g. abook.mab)")
NO_GROUPS_OPTION = typer.Option(
    False,
    "--no-groups",
    "-g",
    help="Skip group markers and apply group content inline",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log load timing")


def load_mork(
    path: Path,
    *,
    verbose: bool = False,
    trace: bool = False,
    no_groups: bool = False,
) -> MorkDatabase:
    """
    Parse ``path`` for a CLI command.

    A header mismatch ends the command with exit code 1. A format error
    is reported and the partial database is still returned.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    try:
        db = parse_mork_file(
            path,
            diagnostics=Diagnostics.default(verbose=trace),
            parse_groups=False if no_groups else None,
        )
    except MorkHeaderError as exc:
        err_console.print(f"[bold red]Not a Mork file:[/bold red] {path}: {exc}")
        raise typer.Exit(code=1) from exc

    elapsed = time.perf_counter() - t0

    if db.error is not None:
        err_console.print(f"[yellow]Parsing stopped early:[/yellow] {db.error}")

    if verbose:
        err_console.log(f"Loaded {path.name} in {elapsed:.2f}s")

    return db


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)

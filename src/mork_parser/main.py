"""
Main entry for the ``mork`` command.

    mork [-g] [-v] [-V vcards.vcf] FILE...

Every FILE is dumped to stdout (columns, values, then the table
structure). With -V the contacts of all files go to one vCard file.
The exit status is 1 if any file could not be read or stopped early.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from mork_parser.config import get_config
from mork_parser.logging import get_logger

from mork_parser.core.context import ParseContext
from mork_parser.core.pipeline import Pipeline

log = get_logger("main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mork",
        description="Dump Mork (Thunderbird .mab) files and export contacts as vCards",
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Mork file(s) to parse",
    )
    parser.add_argument(
        "-g",
        "--no-groups",
        action="store_true",
        help="Do not apply transaction groups; skip them like comments",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Trace parsing to stdout",
    )
    parser.add_argument(
        "-V",
        "--vcard",
        metavar="VCF",
        default=None,
        help="Also write every contact to this vCard file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(
    input_paths: List[str],
    vcard_path: Optional[str] = None,
    *,
    parse_groups: bool = True,
    verbose: bool = False,
    debug_flag: bool = False,
) -> ParseContext:
    """
    Prepare context and execute the pipeline. Returns the finished context.
    """
    cfg = get_config()
    cfg.debug = bool(debug_flag) or cfg.debug

    ctx = ParseContext(
        config=cfg,
        logger=log,
        input_paths=list(input_paths),
        vcard_path=vcard_path,
        parse_groups=parse_groups,
        verbose=verbose,
        debug=cfg.debug,
    )

    Pipeline(ctx).run()

    if vcard_path:
        log.info("vCards written to %s", vcard_path)
    return ctx


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    try:
        ctx = run(
            args.files,
            args.vcard,
            parse_groups=not args.no_groups,
            verbose=args.verbose,
            debug_flag=args.debug,
        )
    except Exception as exc:
        log.exception(f"Unhandled exception in main: {exc}")
        raise

    for message in ctx.errors:
        log.error(message)
    return 1 if ctx.errors else 0


if __name__ == "__main__":
    sys.exit(main())

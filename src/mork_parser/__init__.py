"""
mork_parser: read Mork (Thunderbird ``.mab``) files into a queryable database.

    from mork_parser import load

    db = load("abook.mab")
    for row in db.iter_rows():
        print(db.row_values(row.cells))
"""

from __future__ import annotations

from mork_parser.core.context import Diagnostics
from mork_parser.core.exceptions import (
    MorkError,
    MorkFormatError,
    MorkHeaderError,
    PushbackError,
)
from mork_parser.parser_core import MorkParser, load, parse_mork_file, parse_mork_stream
from mork_parser.store.database import MorkDatabase

__version__ = "0.1.0"

__all__ = [
    "Diagnostics",
    "MorkDatabase",
    "MorkError",
    "MorkFormatError",
    "MorkHeaderError",
    "MorkParser",
    "PushbackError",
    "load",
    "parse_mork_file",
    "parse_mork_stream",
]

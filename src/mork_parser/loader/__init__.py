# src/mork_parser/loader/__init__.py

"""
Public interface for the Mork loader stack.

Intended usage from other parts of the project and tests:

    from mork_parser.loader import (
        RollbackReader,
        RawCell,
        ScopedId,
        parse_hex,
        parse_scoped_id,
        read_cell,
        GroupFooter,
        parse_group_header,
        parse_group_footer,
    )
"""

from __future__ import annotations

from .groups import (
    GroupFooter,
    parse_group_footer,
    parse_group_header,
    read_group_body,
    read_marker,
)
from .reader import RollbackReader
from .tokenizer import (
    RawCell,
    ScopedId,
    parse_hex,
    parse_scoped_id,
    read_cell,
)

__all__ = [
    "GroupFooter",
    "RawCell",
    "RollbackReader",
    "ScopedId",
    "parse_group_footer",
    "parse_group_header",
    "parse_hex",
    "parse_scoped_id",
    "read_cell",
    "read_group_body",
    "read_marker",
]

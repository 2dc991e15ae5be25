# src/mork_parser/store/__init__.py

"""
In-memory storage for parsed Mork data.

    from mork_parser.store import (
        MorkDatabase,
        MorkDict,
        CellSet,
        RowIndex,
        RowRef,
        ParsingTarget,
    )
"""

from __future__ import annotations

from .cells import CellSet
from .database import MAX_VALUE_ID, MorkDatabase, ParsingTarget
from .dictionary import MorkDict
from .index import DEFAULT_SCOPE, RowIndex, RowRef
from .sorted_map import SortedIntMap

__all__ = [
    "CellSet",
    "DEFAULT_SCOPE",
    "MAX_VALUE_ID",
    "MorkDatabase",
    "MorkDict",
    "ParsingTarget",
    "RowIndex",
    "RowRef",
    "SortedIntMap",
]

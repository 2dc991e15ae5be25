"""
json_exporter.py
Structured JSON exporter for MorkDatabase objects.

The document keeps both dictionaries (keyed by hex id, as ids are written in
the file) and the row index as a flat, ordered list of rows whose cells are
resolved to column name -> text.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from mork_parser.logging import get_logger
from mork_parser.store.database import MorkDatabase
from mork_parser.store.dictionary import MorkDict

log = get_logger("json_exporter")


def _dictionary_to_json(dictionary: MorkDict) -> Dict[str, str]:
    return {f"{key:X}": value for key, value in dictionary.items()}


def build_rows_list(db: MorkDatabase) -> List[Dict[str, Any]]:
    """
    One entry per row, depth-first through the index.
    """
    return [
        {
            "table_scope": row.table_scope,
            "table_id": row.table_id,
            "row_scope": row.row_scope,
            "row_id": row.row_id,
            "cells": db.row_values(row.cells),
        }
        for row in db.iter_rows()
    ]


def build_database_dict(db: MorkDatabase) -> Dict[str, Any]:
    """
    Convert the in-memory database into a JSON-safe dict.
    """
    rows = build_rows_list(db)
    return {
        "counts": {
            "columns": len(db.columns),
            "values": len(db.values),
            "table_scopes": len(db.index),
            "rows": len(rows),
        },
        "columns": _dictionary_to_json(db.columns),
        "values": _dictionary_to_json(db.values),
        "rows": rows,
        **({"error": str(db.error)} if db.error is not None else {}),
    }


def serialize_database_to_json_string(db: MorkDatabase, indent: int = 2) -> str:
    return json.dumps(
        build_database_dict(db),
        indent=indent,
        ensure_ascii=False,
    )


def export_database_json(db: MorkDatabase, output_path: str | Path, indent: int = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting database JSON to: %s (columns=%d, values=%d, table_scopes=%d)",
        output_path,
        len(db.columns),
        len(db.values),
        len(db.index),
    )

    json_str = serialize_database_to_json_string(db, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)

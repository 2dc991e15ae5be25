"""
Exporter package.

Re-exports the export entry points used by the pipeline and the CLI.
"""

from __future__ import annotations

from .exporter import export_database_to_json, export_database_to_vcards
from .report import dump_database, dump_table_scope_map
from .vcard import dump_vcards, vcard_escape, write_vcard_21, write_vcard_30

__all__ = [
    "dump_database",
    "dump_table_scope_map",
    "dump_vcards",
    "export_database_to_json",
    "export_database_to_vcards",
    "vcard_escape",
    "write_vcard_21",
    "write_vcard_30",
]

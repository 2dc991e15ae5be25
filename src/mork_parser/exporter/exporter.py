"""
exporter.py
High-level export entry points used by the pipeline and the CLI:

    export_database_to_json(db, output_path)
    export_database_to_vcards(db, output_path, version="3.0")

Both accept a str or Path and create missing parent directories.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from mork_parser.config import get_config
from mork_parser.logging import get_logger
from mork_parser.store.database import MorkDatabase

from .json_exporter import export_database_json
from .vcard import PROFILES, dump_vcards

log = get_logger("exporter")


def export_database_to_json(db: MorkDatabase, output_path: str | Path, **kwargs) -> None:
    """
    Write ``db`` as JSON. Keyword arguments (e.g. indent=2) are forwarded to
    json_exporter.export_database_json.
    """
    export_database_json(db, Path(output_path), **kwargs)


def export_database_to_vcards(
    db: MorkDatabase,
    output_path: str | Path,
    version: Optional[str] = None,
) -> int:
    """
    Write every contact row as a vCard. The version defaults to
    ``export.vcard_version`` from the config. Returns the number of cards.
    """
    version = str(version or get_config().export.get("vcard_version", "3.0"))
    if version not in PROFILES:
        raise ValueError(
            f"Unsupported vCard version {version!r}; expected one of {sorted(PROFILES)}"
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info("Exporting vCard %s to: %s", version, output_path)
    with output_path.open("w", encoding="utf-8", newline="") as f:
        count = dump_vcards(f, db, version=version)

    log.info("vCard export complete. cards=%d", count)
    return count

# tests/test_json_export.py

from __future__ import annotations

import json

from mork_parser import Diagnostics, load
from mork_parser.exporter import export_database_to_json, export_database_to_vcards
from mork_parser.exporter.json_exporter import build_database_dict


def test_build_database_dict(abook_path) -> None:
    db = load(abook_path, diagnostics=Diagnostics.silent())
    data = build_database_dict(db)

    assert data["counts"]["rows"] == 4
    assert data["counts"]["table_scopes"] == 1
    assert data["columns"]["8E"] == "FirstName"
    assert data["values"]["A4"] == "Example, Inc."
    assert "error" not in data

    first = data["rows"][0]
    assert (first["table_scope"], first["table_id"], first["row_id"]) == (0x80, 0, 4)
    assert first["cells"] == {
        "FirstName": "Ann",
        "LastName": "Lee",
        "PrimaryEmail": "ann@example.net",
    }


def test_error_is_reported() -> None:
    db = load(
        b'// <!-- <mdb:mork:z v="1.4"/> -->\n<(80=a)> ?',
        diagnostics=Diagnostics.silent(),
    )
    assert "error" in build_database_dict(db)


def test_export_to_json_file(abook_path, tmp_path) -> None:
    db = load(abook_path, diagnostics=Diagnostics.silent())
    target = tmp_path / "nested" / "abook.json"
    export_database_to_json(db, target)

    with target.open(encoding="utf-8") as f:
        data = json.load(f)
    assert data == build_database_dict(db)


def test_export_to_vcard_file(abook_path, tmp_path) -> None:
    db = load(abook_path, diagnostics=Diagnostics.silent())
    target = tmp_path / "contacts.vcf"
    assert export_database_to_vcards(db, target, version="2.1") == 3
    assert target.read_text(encoding="utf-8").count("VERSION:2.1") == 3

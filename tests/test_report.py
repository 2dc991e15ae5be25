# tests/test_report.py

from __future__ import annotations

import io

import pytest

from mork_parser import Diagnostics, load
from mork_parser.exporter.report import (
    dump_columns,
    dump_database,
    dump_table_scope_map,
)


@pytest.fixture
def abook(abook_path):
    return load(abook_path, diagnostics=Diagnostics.silent())


def test_dump_columns_line_format(abook) -> None:
    out = io.StringIO()
    dump_columns(out, abook)
    lines = out.getvalue().splitlines()
    assert '  142/8E: "FirstName"' in lines
    assert lines[0] == '  128/80: "ns:addrbk:db:row:scope:card:all"'


def test_dump_table_scope_map_layout(abook) -> None:
    out = io.StringIO()
    dump_table_scope_map(out, abook)
    lines = out.getvalue().splitlines()

    assert lines[0] == "Table scope map with 1 entries"
    assert lines[1] == "Table scope 128:"
    assert lines[2] == "     Mork table map with 2 entries"
    assert lines[3] == "     Table   0:"
    assert "     Table   1:" in lines
    assert "               Row   1:" in lines
    assert '                 "FirstName" = "Jane" (142/8E = 160/A0)' in lines


def test_dump_with_vcards(abook) -> None:
    out = io.StringIO()
    dump_table_scope_map(out, abook, with_vcards=True)
    assert out.getvalue().count("VERSION:2.1") == 3


def test_dump_database_sections(abook) -> None:
    out = io.StringIO()
    dump_database(out, abook)
    text = out.getvalue()
    assert text.startswith("\nDump of Mork Data\n")
    assert text.index("----- columns table -----") < text.index("----- values table -----")
    assert text.index("----- values table -----") < text.index("----- mork structure -----")

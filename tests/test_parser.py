# tests/test_parser.py

from __future__ import annotations

import io
import logging

import pytest

from conftest import mork_bytes
from mork_parser import (
    Diagnostics,
    MorkFormatError,
    MorkHeaderError,
    MorkParser,
    load,
    parse_mork_file,
    parse_mork_stream,
)
from mork_parser.config import MPConfig
from mork_parser.loader import RollbackReader
from mork_parser.store import MAX_VALUE_ID


def parse(body: bytes, **kwargs):
    kwargs.setdefault("diagnostics", Diagnostics.silent())
    return load(mork_bytes(body), **kwargs)


# ---------------------------------------------------------
# Header
# ---------------------------------------------------------
def test_bad_header_raises() -> None:
    with pytest.raises(MorkHeaderError):
        load(b"BEGIN:VCARD\nEND:VCARD\n", diagnostics=Diagnostics.silent())


@pytest.mark.parametrize(
    "data",
    [
        b'// <!-- <mdb:mork:z v="1.5"/> -->\n<(80=a)>',
        b'// <!-- <mdb:mork:z v="1.4"/> --',
        b"",
    ],
)
def test_header_must_match_exactly(data) -> None:
    with pytest.raises(MorkHeaderError):
        load(data, diagnostics=Diagnostics.silent())


def test_header_only_gives_empty_database() -> None:
    db = parse(b"")
    assert db.ok
    assert len(db.columns) == 0
    assert len(db.index) == 0


# ---------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------
def test_column_dictionary() -> None:
    db = parse(b"< <(a=c)> (8E=FirstName)(8F=LastName)>")
    assert db.column_name(0x8E) == "FirstName"
    assert db.column_id("LastName") == 0x8F
    assert len(db.values) == 0


def test_value_dictionary_with_comment() -> None:
    db = parse(b"<// a comment (81=ignored)\n(A0=Jane)(A1=Example$2C Inc.)>")
    assert db.value_text(0xA0) == "Jane"
    assert db.value_text(0xA1) == "Example, Inc."
    assert 0x81 not in db.values


def test_dictionary_overwrite_and_empty_value() -> None:
    db = parse(b"<(80=a)(80=b)(81=c)(81=)>")
    assert db.value_text(0x80) == "b"
    assert db.value_text(0x81) == "c"


def test_bad_column_marker_is_not_fatal(diagnostics, caplog) -> None:
    caplog.set_level(logging.WARNING)
    db = parse(b"< <(x=y)> (80=a)>", diagnostics=diagnostics)
    assert db.ok
    assert db.value_text(0x80) == "a"
    assert any("dictionary" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------
# Tables and rows
# ---------------------------------------------------------
def test_row_id_without_scope_uses_default_scope() -> None:
    db = parse(b"{1 {(k=^83:c)(s=9)} [80(8E=Jane)]}")
    cells = db.index.find_cells(0x80, 1, 0x80, 0x80)
    assert cells is not None
    assert db.value_text(cells.get(0x8E)) == "Jane"


def test_scoped_table_and_row() -> None:
    db = parse(b"{2:^81 [1:^82(80=x)]}")
    assert db.index.find_cells(0x81, 2, 0x82, 1) is not None


def test_top_level_row_goes_to_table_zero() -> None:
    db = parse(b"[4(80=x)]")
    assert db.index.find_cells(0x80, 0, 0x80, 4) is not None


def test_inline_values_get_synthetic_ids() -> None:
    db = parse(b"{1 [1(81=a)(82=b)]}")
    cells = db.index.find_cells(0, 1, 0, 1)
    assert cells.get(0x81) == MAX_VALUE_ID - 1
    assert cells.get(0x82) == MAX_VALUE_ID - 2
    assert db.value_text(cells.get(0x82)) == "b"


def test_value_reference_in_row() -> None:
    db = parse(b"<(A0=Jane)> {1 [1(^8E^A0)]}")
    cells = db.index.find_cells(0, 1, 0, 1)
    assert cells.get(0x8E) == 0xA0
    assert db.next_synthetic_value_id == MAX_VALUE_ID


def test_rows_are_updated_in_place() -> None:
    db = parse(b"{1 [1(80=a)(81=b)]} {1 [1(80=c)]}")
    cells = db.index.find_cells(0, 1, 0, 1)
    assert len(cells) == 2
    assert db.value_text(cells.get(0x80)) == "c"
    assert db.value_text(cells.get(0x81)) == "b"


def test_row_hint_and_meta_are_skipped() -> None:
    db = parse(b"{1 [-2 [meta] (80=x)]}")
    cells = db.index.find_cells(0, 1, 0, 2)
    assert cells is not None
    assert len(cells) == 1


def test_bare_row_id_in_table_creates_row() -> None:
    db = parse(b"{1 {(k=c)} 5 6}")
    assert db.index.find_cells(0, 1, 0, 5) is not None
    assert db.index.find_cells(0, 1, 0, 6) is not None


def test_lookahead_is_not_limited_by_max_pushback() -> None:
    db = parse(b"<(80=1$zz)(81=b)>", max_pushback=1)
    assert db.ok
    assert db.value_text(0x80) == "1$zz"
    assert db.value_text(0x81) == "b"

    db = parse(b"{1 {(k=c)} 5[6(81=x)]}", max_pushback=0)
    assert db.ok
    assert db.index.find_cells(0, 1, 0, 5) is not None
    assert len(db.index.find_cells(0, 1, 0, 6)) == 1


def test_escaped_close_paren_in_value() -> None:
    db = parse(b"<(80=a\\)b)>")
    assert db.value_text(0x80) == "a)b"


# ---------------------------------------------------------
# Format errors
# ---------------------------------------------------------
@pytest.mark.parametrize(
    "body",
    [
        b"<(80=a)> x",
        b"<(80=a)> / x",
        b"<(80=a)> [1(81=b) x]",
        b"<(80=a)> [1(81=abc",
        b"<(80=a)> <(81=b)",
        b"<(80=a)> {1 [1(81=b)]",
    ],
)
def test_format_error_returns_partial_database(body) -> None:
    db = parse(body)
    assert not db.ok
    assert isinstance(db.error, MorkFormatError)
    assert db.error.database is db
    assert db.value_text(0x80) == "a"


def test_format_error_raises_in_strict_mode() -> None:
    with pytest.raises(MorkFormatError) as excinfo:
        parse(b"<(80=a)> x", strict=True)
    assert excinfo.value.database.value_text(0x80) == "a"
    assert excinfo.value.position is not None


def test_format_error_goes_to_error_channel(diagnostics, caplog) -> None:
    caplog.set_level(logging.ERROR)
    parse(b"?", diagnostics=diagnostics)
    errors = [r for r in caplog.records if r.name == "tests.mork.errors"]
    assert errors
    assert "format error" in errors[0].getMessage()


def test_trace_channel(diagnostics, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    parse(b"<(80=a)>", diagnostics=diagnostics)
    messages = [r.getMessage() for r in caplog.records if r.name == "tests.mork.trace"]
    assert any("header found" in m for m in messages)
    assert any("Entering parse_dict" in m for m in messages)


# ---------------------------------------------------------
# Entry points
# ---------------------------------------------------------
def test_parser_class_directly() -> None:
    parser = MorkParser(RollbackReader(mork_bytes(b"<(80=a)>")))
    db = parser.parse()
    assert db.value_text(0x80) == "a"


def test_parse_stream_uses_config_defaults() -> None:
    cfg = MPConfig({"parser": {"default_scope": 0x90}})
    db = parse_mork_stream(
        io.BytesIO(mork_bytes(b"{1 [2(80=x)]}")),
        diagnostics=Diagnostics.silent(),
        config=cfg,
    )
    assert db.default_scope == 0x90
    assert db.index.find_cells(0x90, 1, 0x90, 2) is not None


def test_parse_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_mork_file(tmp_path / "missing.mab")


def test_parse_mock_address_book(abook_path) -> None:
    db = parse_mork_file(abook_path, diagnostics=Diagnostics.silent())
    assert db.ok
    assert db.column_id("FirstName") == 0x8E
    assert db.row_count == 4

    jane = db.index.find_cells(0x80, 1, 0x80, 1)
    assert db.value_for_column(jane, "DisplayName") == "Jane Doe"
    assert db.value_for_column(jane, "Company") == "Example, Inc."
    assert db.value_for_column(jane, "Notes") == "First line\r\nsecond line"

    john = db.index.find_cells(0x80, 1, 0x80, 2)
    assert db.value_for_column(john, "JobTitle") == "Engineer; Senior"

    ann = db.index.find_cells(0x80, 0, 0x80, 4)
    assert db.value_for_column(ann, "LastName") == "Lee"

    # Row 5 only exists in an aborted group
    assert db.index.find_cells(0x80, 0, 0x80, 5) is None

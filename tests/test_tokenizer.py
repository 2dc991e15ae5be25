# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from mork_parser.loader import (
    RollbackReader,
    ScopedId,
    parse_hex,
    parse_scoped_id,
    read_cell,
)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("8E", 0x8E),
        (b"A0", 0xA0),
        ("0x1f", 0x1F),
        ("  12", 0x12),
        ("1g", 1),
        ("-1", -1),
        ("zz", 0),
        ("", 0),
    ],
)
def test_parse_hex_follows_strtol(token, expected) -> None:
    assert parse_hex(token) == expected


def test_parse_scoped_id_variants() -> None:
    assert parse_scoped_id("80") == ScopedId(id=0x80, scope=0)
    assert parse_scoped_id("1:^80") == ScopedId(id=1, scope=0x80)
    assert parse_scoped_id(b"1:80") == ScopedId(id=1, scope=0x80)


def value_of(data: bytes) -> bytes:
    return read_cell(RollbackReader(b"80=" + data + b")")).value


def test_cell_hex_pair_escape() -> None:
    assert value_of(b"$41") == b"A"
    assert value_of(b"Example$2C Inc.") == b"Example, Inc."


def test_cell_backslash_and_continuation() -> None:
    assert value_of(b"a\\;b") == b"a;b"
    assert value_of(b"a\\)b") == b"a)b"
    assert value_of(b"one\\\ntwo") == b"onetwo"
    assert value_of(b"one\\\r\ntwo") == b"onetwo"


def test_cell_keeps_dollar_without_hex() -> None:
    assert value_of(b"$zz") == b"$zz"
    assert value_of(b"100$") == b"100$"


def test_cell_dollar_lookahead_ignores_push_back_limit() -> None:
    reader = RollbackReader(b"80=1$zz)", max_pushback=1)
    cell = read_cell(reader)
    assert cell.terminated
    assert cell.value == b"1$zz"
    assert reader.pending == 0


def test_read_cell_literal_value() -> None:
    reader = RollbackReader(b"8E=Jane)rest")
    cell = read_cell(reader)
    assert cell.column == "8E"
    assert cell.value == b"Jane"
    assert not cell.column_is_ref
    assert not cell.value_is_ref
    assert cell.terminated
    assert reader.read(4) == b"rest"


def test_read_cell_references() -> None:
    cell = read_cell(RollbackReader(b"^8E^A0)"))
    assert cell.column_is_ref
    assert cell.value_is_ref
    assert cell.column == "8E"
    assert cell.value == b"A0"

    cell = read_cell(RollbackReader(b"^8E=Jane)"))
    assert cell.column_is_ref
    assert not cell.value_is_ref
    assert cell.value == b"Jane"


def test_read_cell_whitespace_only_dropped_in_column() -> None:
    cell = read_cell(RollbackReader(b" 8 E = x y)"))
    assert cell.column == "8E"
    assert cell.value == b" x y"


def test_read_cell_value_keeps_markers_and_escapes() -> None:
    cell = read_cell(RollbackReader(b"80=a=b^c\\)d$41)"))
    assert cell.value == b"a=b^c)dA"


def test_read_cell_unterminated() -> None:
    cell = read_cell(RollbackReader(b"80=abc"))
    assert not cell.terminated
    assert cell.value == b"abc"

# tests/test_dictionary.py

from __future__ import annotations

import logging

from mork_parser.store import CellSet, MorkDict, SortedIntMap


def test_sorted_int_map_orders_keys() -> None:
    m: SortedIntMap[str] = SortedIntMap()
    for key in (5, 1, 3):
        m.set(key, str(key))
    assert m.keys() == [1, 3, 5]
    assert m.items() == [(1, "1"), (3, "3"), (5, "5")]
    assert len(m) == 3


def test_sorted_int_map_set_returns_previous() -> None:
    m: SortedIntMap[str] = SortedIntMap()
    assert m.set(1, "a") is None
    assert m.set(1, "b") == "a"
    assert len(m) == 1


def test_sorted_int_map_get_or_create_reuses_entry() -> None:
    m: SortedIntMap[list] = SortedIntMap()
    first = m.get_or_create(7, list)
    assert m.get_or_create(7, list) is first
    assert len(m) == 1


def test_dict_set_and_get() -> None:
    d = MorkDict("columns")
    d.set(0x8E, "FirstName")
    assert d.get(0x8E) == "FirstName"
    assert d.get(0x8F) == ""
    assert 0x8E in d
    assert len(d) == 1


def test_dict_overwrite_keeps_one_entry() -> None:
    d = MorkDict("values")
    d.set(0x80, "a")
    d.set(0x80, "b")
    assert d.get(0x80) == "b"
    assert len(d) == 1


def test_dict_reverse_lookup_returns_lowest_key() -> None:
    d = MorkDict("columns")
    d.set(0x90, "Name")
    d.set(0x81, "Name")
    assert d.reverse_lookup("Name") == 0x81
    assert d.reverse_lookup("Missing") == 0


def test_dict_items_ascending() -> None:
    d = MorkDict("values")
    d.set(0xA1, "b")
    d.set(0xA0, "a")
    assert d.items() == [(0xA0, "a"), (0xA1, "b")]
    d.clear()
    assert len(d) == 0


def test_dict_overwrite_is_noted_on_trace(diagnostics, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    d = MorkDict("values", diagnostics)
    d.set(0x80, "a")
    d.set(0x80, "b")
    changes = [r for r in caplog.records if "Changing" in r.getMessage()]
    assert len(changes) == 1
    assert changes[0].levelno == logging.WARNING
    assert changes[0].name == "tests.mork.trace"


def test_cell_set_one_value_per_column() -> None:
    cells = CellSet()
    cells.set(0x8E, 0xA0)
    cells.set(0x81, 0xA1)
    cells.set(0x8E, 0xA2)
    assert len(cells) == 2
    assert cells.get(0x8E) == 0xA2
    assert cells.get(0x99) is None
    assert cells.items() == [(0x81, 0xA1), (0x8E, 0xA2)]

# src/mork_parser/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .reader import RollbackReader

WHITESPACE = frozenset(b" \t\r\n\x0b\x0c")
HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

BACKSLASH = ord("\\")
DOLLAR = ord("$")
CARET = ord("^")
EQUALS = ord("=")
CLOSE_PAREN = ord(")")
COLON = ord(":")
CR = ord("\r")
LF = ord("\n")


@dataclass(frozen=True)
class ScopedId:
    """
    An object id with an optional scope, as written in table and row headers.

    Attributes:
        id: The object id (hex in the source).
        scope: The scope, or 0 when the token carried none.
    """
    id: int
    scope: int = 0


@dataclass(frozen=True)
class RawCell:
    """
    A cell as read from the stream, escapes already decoded.

    Attributes:
        column: Column token text with whitespace removed.
        value: Decoded value bytes (may be empty).
        column_is_ref: The column was written as ``^col``.
        value_is_ref: The value was written as ``^value`` (an object id).
        terminated: False when input ended before the closing ``)``.
    """
    column: str
    value: bytes
    column_is_ref: bool = False
    value_is_ref: bool = False
    terminated: bool = True

    def __str__(self) -> str:  # pragma: no cover - cosmetic
        col = f"^{self.column}" if self.column_is_ref else self.column
        sep = "^" if self.value_is_ref else "="
        return f"({col}{sep}{self.value.decode('latin-1')})"


def _as_text(token: Union[str, bytes, bytearray]) -> str:
    if isinstance(token, (bytes, bytearray)):
        return bytes(token).decode("latin-1")
    return token


def parse_hex(token: Union[str, bytes, bytearray]) -> int:
    """
    Parse a hexadecimal id the way ``strtol(token, NULL, 16)`` does.

    Leading whitespace, a sign and a ``0x`` prefix are accepted; parsing
    stops at the first non-hex character. A token with no digits is 0.
    """
    text = _as_text(token).lstrip()
    sign = 1
    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    if text[:2].lower() == "0x" and text[2:3] and text[2] in "0123456789abcdefABCDEF":
        text = text[2:]

    end = 0
    while end < len(text) and text[end] in "0123456789abcdefABCDEF":
        end += 1
    if end == 0:
        return 0
    return sign * int(text[:end], 16)


def parse_scoped_id(token: Union[str, bytes, bytearray]) -> ScopedId:
    """
    Split an ``id`` / ``id:scope`` / ``id:^scope`` token.

    Examples:
        "80"      -> ScopedId(id=0x80, scope=0)
        "1:^80"   -> ScopedId(id=1, scope=0x80)
        "1:80"    -> ScopedId(id=1, scope=0x80)

    The ``^`` in front of a scope is dropped without further meaning.
    """
    text = _as_text(token)
    id_part, colon, scope_part = text.partition(":")
    scope = 0
    if colon:
        if scope_part.startswith("^"):
            scope_part = scope_part[1:]
        scope = parse_hex(scope_part)
    return ScopedId(id=parse_hex(id_part), scope=scope)


def _decode_escape(reader: RollbackReader, byte: int, out: bytearray) -> bool:
    """
    Handle ``\\`` and ``$`` escapes.

    Returns True if ``byte`` started an escape (and ``out`` was updated),
    False if the caller should treat it as an ordinary byte.
    """
    if byte == BACKSLASH:
        escaped = reader.next()
        if escaped is None:
            return True
        if escaped == CR:
            # \ CR LF is a single continuation
            following = reader.next()
            if following is not None and following != LF:
                reader.unread(bytes([following]))
        elif escaped != LF:
            out.append(escaped)
        return True

    if byte == DOLLAR:
        pair = reader.read(2)
        if len(pair) == 2 and all(b in HEX_DIGITS for b in pair):
            out.append(int(pair, 16))
            return True
        # Not a hex escape: keep the '$' and re-read what followed
        reader.unread(pair)
        return False

    return False


def read_cell(reader: RollbackReader) -> RawCell:
    """
    Read one cell body after its opening ``(`` up to and including ``)``.

    Grammar (per byte):
        ^        first: column is an object id; second: value is an object id
        =        switches from column to value
        \\ CR/LF line continuation, dropped
        \\ x     literal x
        $hh      one byte with hex value hh
        other    literal (whitespace dropped in the column part)

    Once in the value part, ``^`` and ``=`` are literal.
    """
    column = bytearray()
    value = bytearray()
    column_is_ref = False
    value_is_ref = False
    in_column = True
    carets = 0

    while True:
        byte = reader.next()
        if byte is None:
            return RawCell(
                column=column.decode("latin-1"),
                value=bytes(value),
                column_is_ref=column_is_ref,
                value_is_ref=value_is_ref,
                terminated=False,
            )
        if byte == CLOSE_PAREN:
            break

        if in_column and byte == CARET:
            carets += 1
            if carets == 1:
                column_is_ref = True
            else:
                in_column = False
                value_is_ref = True
            continue

        if in_column and byte == EQUALS:
            in_column = False
            continue

        target = column if in_column else value
        if _decode_escape(reader, byte, target):
            continue

        if in_column and byte in WHITESPACE:
            continue
        target.append(byte)

    return RawCell(
        column=column.decode("latin-1"),
        value=bytes(value),
        column_is_ref=column_is_ref,
        value_is_ref=value_is_ref,
    )


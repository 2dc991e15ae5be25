# src/mork_parser/loader/groups.py

"""
Group markers.

A group wraps a span of Mork content that is either committed or thrown
away as a unit:

    @$${1{@          group header, group id 1 (hex)
    ...content...
    @$$}1}@          commit footer
    @$$}~abort~1}@   abort footer

The short header form ``@$$1{`` is accepted as well.

This module only recognizes the markers; replaying or discarding the
content is done by the parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from .reader import RollbackReader

AT = ord("@")
TERMINATOR = b"@$$"

HEADER_RE = re.compile(rb"\$\$\{?([0-9A-Fa-f]+)\{")
FOOTER_RE = re.compile(rb"\$\$\}(~abort~)?([0-9A-Fa-f]+)\}")

# Markers are short; anything longer is not a marker.
MAX_MARKER_LENGTH = 64


@dataclass(frozen=True)
class GroupFooter:
    group_id: int
    aborted: bool = False


def read_marker(
    reader: RollbackReader,
    pattern: Pattern[bytes],
    prefix: bytes = b"",
) -> Tuple[bytes, bool]:
    """
    Read marker text after an ``@``.

    Reading stops at the next ``@`` (consumed, not returned) or as soon as
    the text is a complete marker; an ``@`` right after a complete marker
    is consumed too.

    Returns:
        (text, complete) where ``complete`` says whether ``text`` matched
        ``pattern`` in full.
    """
    text = bytearray(prefix)
    while True:
        if pattern.fullmatch(text):
            if reader.peek() == AT:
                reader.next()
            return bytes(text), True

        byte = reader.next()
        if byte is None or byte == AT:
            break
        if len(text) < MAX_MARKER_LENGTH:
            text.append(byte)

    return bytes(text), bool(pattern.fullmatch(text))


def parse_group_header(text: bytes) -> Optional[int]:
    """Return the group id of a header marker, or None if it is not one."""
    match = HEADER_RE.fullmatch(text)
    if not match:
        return None
    return int(match.group(1), 16)


def parse_group_footer(text: bytes) -> Optional[GroupFooter]:
    """Return the commit/abort footer in ``text``, or None if corrupt."""
    match = FOOTER_RE.fullmatch(text)
    if not match:
        return None
    return GroupFooter(group_id=int(match.group(2), 16), aborted=bool(match.group(1)))


def read_group_body(reader: RollbackReader) -> Tuple[bytes, bool]:
    """
    Buffer group content verbatim up to the ``@$$`` that starts the footer.

    ``\\``-escaped pairs are copied through untouched so an escaped ``@``
    never ends the body. The terminator itself is not part of the body.

    Returns:
        (body, found) where ``found`` is False if input ended first.
    """
    body = bytearray()
    matched = 0
    while True:
        byte = reader.next()
        if byte is None:
            return bytes(body), False

        body.append(byte)
        if byte == ord("\\"):
            escaped = reader.next()
            if escaped is not None:
                body.append(escaped)
            matched = 0
            continue

        if byte == TERMINATOR[matched]:
            matched += 1
        elif byte == AT:
            matched = 1
        else:
            matched = 0

        if matched == len(TERMINATOR):
            del body[-len(TERMINATOR):]
            return bytes(body), True

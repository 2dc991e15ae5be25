"""
parser_core.py
Recursive-descent Mork parser.

The parser reads one byte stream start to finish through a RollbackReader
and writes into a MorkDatabase:

    <  ... >        dictionary (values, or columns after <(a=c)>)
    {  ... }        table, holding rows and row references
    [  ... ]        row, holding cells
    ( col = val )   cell
    // ...          comment to end of line
    @$${n{@ ... @$$}n}@   group, committed or aborted as a unit

Committed groups are not parsed recursively: their content is pushed back
onto the reader and the top-level loop reads it again as ordinary input.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from mork_parser.config import get_config
from mork_parser.core.context import Diagnostics
from mork_parser.core.exceptions import (
    MorkFormatError,
    MorkHeaderError,
    PushbackError,
)
from mork_parser.loader.groups import (
    AT,
    FOOTER_RE,
    HEADER_RE,
    TERMINATOR,
    parse_group_footer,
    parse_group_header,
    read_group_body,
    read_marker,
)
from mork_parser.loader.reader import RollbackReader
from mork_parser.loader.tokenizer import WHITESPACE, parse_hex, parse_scoped_id, read_cell
from mork_parser.store.database import MorkDatabase, ParsingTarget

MAGIC_HEADER = b'// <!-- <mdb:mork:z v="1.4"/> -->'
DICT_COLUMN_META = b"<(a=c)>"

Source = Union[str, Path, bytes, bytearray, BinaryIO]


def _show(byte: Optional[int]) -> str:
    return "end of input" if byte is None else repr(chr(byte))


class MorkParser:
    """
    Parses one Mork stream into a MorkDatabase.

    Args:
        reader: The byte source.
        database: Database to fill; a new one is created if omitted.
        diagnostics: Trace/error channels (silent if omitted).
        parse_groups: When False, group markers are skipped and group
            content is applied inline whether it was committed or aborted.
        encoding: Used to turn decoded value bytes into text.
    """

    def __init__(
        self,
        reader: RollbackReader,
        database: Optional[MorkDatabase] = None,
        *,
        diagnostics: Optional[Diagnostics] = None,
        parse_groups: bool = True,
        encoding: str = "utf-8",
    ):
        self.reader = reader
        self.diag = diagnostics or Diagnostics.silent()
        self.db = database if database is not None else MorkDatabase(diagnostics=self.diag)
        self.parse_groups = parse_groups
        self.encoding = encoding

        self._dispatch: Dict[int, Callable[[], None]] = {
            ord("<"): self.parse_dict,
            ord("/"): self.parse_comment,
            ord("{"): self.parse_table,
            ord("["): lambda: self.parse_row(0, 0),
            ord("@"): self.parse_group,
        }

    # ---------------------------------------------------------
    # Entry point
    # ---------------------------------------------------------
    def parse(self, *, strict: bool = False) -> MorkDatabase:
        """
        Parse the whole stream.

        Raises:
            MorkHeaderError: the stream does not start with the magic header.
            MorkFormatError: only with ``strict=True``; otherwise the error is
                logged, stored on ``database.error`` and the partially filled
                database is returned.
        """
        self.check_magic_header()

        try:
            self._parse_body()
        except MorkFormatError as exc:
            self._fail(exc, strict)

        return self.db

    def _fail(self, exc: MorkFormatError, strict: bool) -> None:
        exc.database = self.db
        self.db.error = exc
        self.diag.error("***** error: %s (at byte %s)", exc, exc.position)
        if strict:
            raise exc

    def check_magic_header(self) -> None:
        found = self.reader.read(len(MAGIC_HEADER))
        if found != MAGIC_HEADER:
            text = found.decode("latin-1")
            self.diag.error('***** error: Mork does not start with "%s"', text)
            raise MorkHeaderError(
                f"Mork does not start with {MAGIC_HEADER.decode()!r} (found {text!r})"
            )
        self.diag.log('Correct "%s" header found', MAGIC_HEADER.decode())

    def _parse_body(self) -> None:
        while True:
            byte = self.reader.next()
            if byte is None:
                return
            if byte in WHITESPACE:
                continue

            handler = self._dispatch.get(byte)
            if handler is None:
                raise self._error(
                    f"format error: with {_show(byte)}, "
                    "looking for '<', '/', '{', '[', or '@'"
                )
            handler()

    def _error(self, message: str) -> MorkFormatError:
        return MorkFormatError(message, position=self.reader.position)

    # ---------------------------------------------------------
    # Dictionaries and cells
    # ---------------------------------------------------------
    def parse_dict(self) -> None:
        """A dictionary starts with '<' and ends with '>'."""
        self.db.parsing_target = ParsingTarget.VALUES
        self.diag.log("Entering parse_dict()")

        while True:
            byte = self.reader.next()
            if byte is None:
                raise self._error("unterminated dictionary")
            if byte == ord(">"):
                break
            if byte in WHITESPACE:
                continue

            if byte == ord("<"):
                marker = b"<" + self.reader.read(len(DICT_COLUMN_META) - 1)
                if marker == DICT_COLUMN_META:
                    self.db.parsing_target = ParsingTarget.COLUMNS
                else:
                    self.diag.warning(
                        'Thought we were getting a dictionary but found "%s" instead of "%s"',
                        marker.decode("latin-1"), DICT_COLUMN_META.decode(),
                    )
            elif byte == ord("("):
                self.parse_cell()
            elif byte == ord("/"):
                self.parse_comment()
            else:
                self.diag.log("---- Ignored %s in parse_dict()", _show(byte))

        self.diag.log("-- Leaving parse_dict()")

    def parse_cell(self) -> None:
        """A cell starts with '(' and ends with ')'."""
        raw = read_cell(self.reader)
        self.diag.log(
            "  .  Cell => %s%s%s%s",
            "^" if raw.column_is_ref else "",
            raw.column,
            "^" if raw.value_is_ref else "=",
            raw.value.decode(self.encoding, errors="replace"),
        )
        if not raw.terminated:
            raise self._error(f"unterminated cell ({raw.column}")

        if not raw.value:
            # Empty values never clear an existing cell or entry
            return

        column_id = parse_hex(raw.column)
        text = raw.value.decode(self.encoding, errors="replace")

        if self.db.parsing_target is ParsingTarget.ROWS:
            cells = self.db.active_cells
            if cells is None:
                raise self._error("row cell found with no active row")
            if raw.value_is_ref:
                cells.set(column_id, parse_hex(text))
            else:
                cells.set(column_id, self.db.mint_value_id(text))
        elif self.db.parsing_target is ParsingTarget.COLUMNS:
            self.db.columns.set(column_id, text)
        else:
            self.db.values.set(column_id, text)

    # ---------------------------------------------------------
    # Comments and skipped blocks
    # ---------------------------------------------------------
    def parse_comment(self) -> None:
        """A comment is '//' up to the end of the line."""
        byte = self.reader.next()
        if byte != ord("/"):
            raise self._error(f"expected '/' to start a comment, found {_show(byte)}")

        text = bytearray()
        while True:
            byte = self.reader.next()
            if byte is None or byte in (ord("\r"), ord("\n")):
                break
            text.append(byte)
        self.diag.log('  Comment => "%s"', text.decode(self.encoding, errors="replace"))

    def parse_meta(self, closing: int) -> None:
        """Skip everything up to ``closing`` (no nesting)."""
        text = bytearray()
        while True:
            byte = self.reader.next()
            if byte is None or byte == closing:
                break
            text.append(byte)
        self.diag.log('    - Ignoring meta "%s"', text.decode(self.encoding, errors="replace"))

    # ---------------------------------------------------------
    # Tables and rows
    # ---------------------------------------------------------
    def parse_table(self) -> None:
        """A table starts with '{' and ends with '}'."""
        self.diag.log("Entering parse_table()")

        token = bytearray()
        byte = self.reader.next()
        while byte is not None and byte not in b"{[}":
            if byte not in WHITESPACE:
                token.append(byte)
            byte = self.reader.next()

        table = parse_scoped_id(token)
        self.diag.log("  Table id %d, scope %d", table.id, table.scope)

        while byte != ord("}"):
            if byte is None:
                raise self._error(f"unterminated table {token.decode('latin-1')}")

            if byte in WHITESPACE or byte in b"-+":
                pass
            elif byte == ord("{"):
                self.parse_meta(ord("}"))
            elif byte == ord("["):
                self.parse_row(table.id, table.scope)
            else:
                # A bare row id: makes that row current without adding cells
                row_token = bytearray()
                while byte is not None and byte not in WHITESPACE and byte not in b"{[}":
                    row_token.append(byte)
                    byte = self.reader.next()

                row = parse_scoped_id(row_token)
                self.db.set_current_row(table.scope, table.id, row.scope, row.id)

                if byte is None:
                    continue
                if byte not in WHITESPACE:
                    # Let the loop see the delimiter that ended the id
                    self.reader.unread(bytes([byte]))

            byte = self.reader.next()

        self.diag.log("-- Leaving parse_table()")

    def parse_row(self, table_id: int, table_scope: int) -> None:
        """A row starts with '[' and ends with ']'."""
        self.diag.log("  Entering parse_row()")
        self.db.parsing_target = ParsingTarget.ROWS

        token = bytearray()
        byte = self.reader.next()
        while byte is not None and byte not in b"([]":
            if byte not in WHITESPACE:
                token.append(byte)
            byte = self.reader.next()

        if token[:1] in (b"-", b"+"):
            # Cut/add hint in front of the row id; not acted on
            self.diag.log("  Ignoring row hint %s", token[:1].decode())
            del token[:1]

        row = parse_scoped_id(token)
        self.db.set_current_row(table_scope, table_id, row.scope, row.id)

        while byte != ord("]"):
            if byte is None:
                raise self._error(f"unterminated row {token.decode('latin-1')}")

            if byte in WHITESPACE:
                pass
            elif byte == ord("("):
                self.parse_cell()
            elif byte == ord("["):
                self.parse_meta(ord("]"))
            else:
                raise self._error(f"expected '(' or '[' not {_show(byte)} in parse_row")

            byte = self.reader.next()

    # ---------------------------------------------------------
    # Groups
    # ---------------------------------------------------------
    def parse_group(self) -> None:
        """
        A group: ``@$${id{@`` content ``@$$}id}@`` (or ``@$$}~abort~id}@``).

        Malformed markers are logged and skipped; they never stop the parse.
        """
        if not self.parse_groups:
            self.parse_meta(AT)
            return

        self.diag.log("Entering parse_group()")

        header, _ = read_marker(self.reader, HEADER_RE)
        start_group_id = parse_group_header(header)
        if start_group_id is None:
            self.diag.log(
                "    - Failed to recognize a group header @%s@",
                header.decode("latin-1"),
            )
            return
        self.diag.log("    + Got the group header with group id of %d", start_group_id)

        body, found = read_group_body(self.reader)
        if not found:
            self.diag.warning(
                "Group %d is not terminated before end of input; trashing its contents",
                start_group_id,
            )
            return
        self.diag.log("  . Loaded group contents:\n%s", body.decode(self.encoding, errors="replace"))

        footer_prefix = b""
        try:
            self.reader.push_back_bytes(TERMINATOR)
        except PushbackError as exc:
            self.diag.warning("Failed to unget the group footer start: %s", exc)
            footer_prefix = TERMINATOR[1:]
        if not footer_prefix:
            self.reader.next()  # the '@' just pushed back

        footer_text, _ = read_marker(self.reader, FOOTER_RE, prefix=footer_prefix)
        footer = parse_group_footer(footer_text)

        if footer is None:
            self.diag.warning(
                "Something was corrupt in the group footer @%s@; trashing contents",
                footer_text.decode("latin-1"),
            )
        elif footer.group_id != start_group_id:
            self.diag.warning(
                "Something's corrupt because the start group ID is %d "
                "and the end group ID is %d; trashing contents",
                start_group_id, footer.group_id,
            )
        elif footer.aborted:
            self.diag.log(
                "  . Found a good group %d but it was aborted... trashing contents",
                start_group_id,
            )
        else:
            self.diag.log(
                "  . Found a good unaborted group %d... pushing contents to be loaded",
                start_group_id,
            )
            try:
                self.reader.push_back_bytes(body)
            except PushbackError as exc:
                self.diag.warning(
                    "Failed ungetting group %d content: %s; trashing contents",
                    start_group_id, exc,
                )


# ---------------------------------------------------------
# Convenience loaders
# ---------------------------------------------------------
def parse_mork_stream(
    stream: Union[BinaryIO, bytes, bytearray],
    *,
    diagnostics: Optional[Diagnostics] = None,
    parse_groups: Optional[bool] = None,
    default_scope: Optional[int] = None,
    encoding: Optional[str] = None,
    max_pushback: Optional[int] = None,
    strict: bool = False,
    config=None,
) -> MorkDatabase:
    """
    Parse a binary stream (or bytes) into a MorkDatabase.

    Unset options come from the ``parser`` section of the configuration.
    """
    cfg = config if config is not None else get_config()
    options = cfg.parser

    diag = diagnostics if diagnostics is not None else Diagnostics.default(verbose=cfg.trace)
    reader = RollbackReader(
        stream,
        max_pushback=max_pushback if max_pushback is not None else options.get("max_pushback"),
    )
    database = MorkDatabase(
        default_scope=default_scope if default_scope is not None else int(options["default_scope"]),
        diagnostics=diag,
    )
    parser = MorkParser(
        reader,
        database,
        diagnostics=diag,
        parse_groups=parse_groups if parse_groups is not None else bool(options["parse_groups"]),
        encoding=encoding or options.get("encoding") or "utf-8",
    )
    return parser.parse(strict=strict)


def parse_mork_file(path: Union[str, Path], **kwargs) -> MorkDatabase:
    """
    Parse a Mork file (``abook.mab``, ``history.mab``...).

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        MorkHeaderError: if the file is not a Mork 1.4 file.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Mork file not found: {file_path}")

    with file_path.open("rb") as f:
        return parse_mork_stream(f, **kwargs)


def load(source: Source, **kwargs) -> MorkDatabase:
    """Parse a path, raw bytes, or an open binary stream."""
    if isinstance(source, (str, Path)):
        return parse_mork_file(source, **kwargs)
    if isinstance(source, (bytes, bytearray)):
        return parse_mork_stream(io.BytesIO(bytes(source)), **kwargs)
    return parse_mork_stream(source, **kwargs)

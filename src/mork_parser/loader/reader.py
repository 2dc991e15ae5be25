# src/mork_parser/loader/reader.py

from __future__ import annotations

import io
from typing import BinaryIO, List, Optional, Union

from mork_parser.core.exceptions import PushbackError

CHUNK_SIZE = 64 * 1024


class RollbackReader:
    """
    Byte source with unbounded push-back.

    Bytes are pulled from the underlying binary stream in chunks. Anything
    pushed back is returned before the stream is read again, last pushed
    first, so a whole run can be re-injected with ``push_back_bytes`` and is
    then read in its original order.

    Attributes:
        position: Number of bytes consumed so far (push-back rewinds it).
        max_pushback: Upper bound on pending pushed-back bytes, or None for
            no limit. Lookahead returned through ``peek`` or ``unread``
            does not count against it.
    """

    def __init__(
        self,
        source: Union[BinaryIO, bytes, bytearray],
        *,
        max_pushback: Optional[int] = None,
    ):
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        self._stream = source
        self._chunk = b""
        self._offset = 0
        # Stack of pushed-back bytes; the last element is read next
        self._pending: List[int] = []
        self.max_pushback = max_pushback
        self.position = 0

    # ------------------------------------------------------------------ #
    # Reading
    # ------------------------------------------------------------------ #

    def _fill(self) -> bool:
        self._chunk = self._stream.read(CHUNK_SIZE) or b""
        self._offset = 0
        return bool(self._chunk)

    def next(self) -> Optional[int]:
        """Return the next byte, or None at end of input."""
        if self._pending:
            self.position += 1
            return self._pending.pop()

        if self._offset >= len(self._chunk) and not self._fill():
            return None

        byte = self._chunk[self._offset]
        self._offset += 1
        self.position += 1
        return byte

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it."""
        byte = self.next()
        if byte is not None:
            # Not subject to max_pushback: the byte was just taken
            self._pending.append(byte)
            self.position -= 1
        return byte

    def read(self, count: int) -> bytes:
        """Read up to ``count`` bytes (fewer only at end of input)."""
        out = bytearray()
        while len(out) < count:
            byte = self.next()
            if byte is None:
                break
            out.append(byte)
        return bytes(out)

    # ------------------------------------------------------------------ #
    # Push-back
    # ------------------------------------------------------------------ #

    def push_back(self, byte: int) -> None:
        """Make ``byte`` the next byte returned by ``next()``."""
        if self.max_pushback is not None and len(self._pending) >= self.max_pushback:
            raise PushbackError(
                f"push-back buffer full ({self.max_pushback} bytes pending)"
            )
        self._pending.append(byte)
        self.position = max(self.position - 1, 0)

    def push_back_bytes(self, data: Union[bytes, bytearray]) -> None:
        """
        Prepend ``data`` to the pending input.

        Equivalent to pushing each byte back in reverse order. Nothing is
        pushed back if the whole run does not fit under ``max_pushback``.
        """
        if (
            self.max_pushback is not None
            and len(self._pending) + len(data) > self.max_pushback
        ):
            raise PushbackError(
                f"cannot push back {len(data)} bytes "
                f"({len(self._pending)} pending, limit {self.max_pushback})"
            )
        for byte in reversed(data):
            self.push_back(byte)

    def unread(self, data: Union[bytes, bytearray]) -> None:
        """
        Return bytes just taken by lookahead (a delimiter, a non-hex ``$``
        pair) to the input.

        Like ``peek()``, not subject to ``max_pushback``.
        """
        self._pending.extend(reversed(data))
        self.position = max(self.position - len(data), 0)

    @property
    def pending(self) -> int:
        """Number of pushed-back bytes not yet re-read."""
        return len(self._pending)

from __future__ import annotations

from typing import Any, Optional


class MorkError(Exception):
    """Base exception for Mork parsing failures."""


class MorkHeaderError(MorkError):
    """Raised when the stream does not start with the Mork magic header."""


class MorkFormatError(MorkError):
    """
    Raised when a structural construct cannot be parsed.

    Parsing stops at this point. ``database`` holds whatever was built before
    the error, ``position`` the byte offset where it was detected.
    """

    def __init__(
        self,
        message: str,
        *,
        position: Optional[int] = None,
        database: Any = None,
    ):
        super().__init__(message)
        self.position = position
        self.database = database


class PushbackError(MorkError):
    """Raised when the rollback reader cannot accept more pushed-back bytes."""


class PipelineError(Exception):
    """Base exception for pipeline failures."""


class ParseExecutionError(PipelineError):
    """Raised when parsing fails."""

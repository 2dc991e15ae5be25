from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import Any, Dict, Optional

from mork_parser.logging import get_error_logger, get_trace_logger


@dataclass
class Diagnostics:
    """
    The parser's two side channels.

    ``trace`` receives a running commentary of what the parser is doing and
    is silent unless configured; ``errors`` receives recoverable problems and
    format errors. Either may be ``None`` to disable it.
    """

    trace: Optional[Logger] = None
    errors: Optional[Logger] = None

    @classmethod
    def default(cls, *, verbose: bool = False) -> "Diagnostics":
        return cls(
            trace=get_trace_logger() if verbose else None,
            errors=get_error_logger(),
        )

    @classmethod
    def silent(cls) -> "Diagnostics":
        return cls()

    def log(self, message: str, *args: Any) -> None:
        if self.trace is not None:
            self.trace.debug(message, *args)

    def notice(self, message: str, *args: Any) -> None:
        """A data anomaly worth flagging in the trace, never an error."""
        if self.trace is not None:
            self.trace.warning(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        if self.errors is not None:
            self.errors.warning(message, *args)
        self.log(message, *args)

    def error(self, message: str, *args: Any) -> None:
        if self.errors is not None:
            self.errors.error(message, *args)
        self.log(message, *args)


@dataclass
class ParseContext:
    """
    Shared pipeline context.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_paths: list = field(default_factory=list)
    vcard_path: Optional[str] = None
    parse_groups: bool = True

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: list = field(default_factory=list)

    verbose: bool = False
    debug: bool = False

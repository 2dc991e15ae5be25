"""
Logging package for ``mork_parser``.

Use ``get_logger(__name__)`` in modules to inherit shared handlers and write to a
module-specific log file. The parser's two diagnostic channels come from
``get_trace_logger`` and ``get_error_logger``.
"""

from .logger import (
    get_error_logger,
    get_logger,
    get_trace_logger,
)

__all__ = [
    "get_error_logger",
    "get_logger",
    "get_trace_logger",
]

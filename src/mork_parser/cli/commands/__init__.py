"""
CLI command modules for mork_parser.

Each command module defines a single Typer-compatible command function.
"""

from mork_parser.cli.commands.dump import dump_command
from mork_parser.cli.commands.export import export_command
from mork_parser.cli.commands.stats import stats_command
from mork_parser.cli.commands.vcard import vcard_command

__all__ = [
    "dump_command",
    "export_command",
    "stats_command",
    "vcard_command",
]

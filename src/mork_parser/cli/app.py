from __future__ import annotations

import typer
from rich.console import Console

from mork_parser.cli.commands.dump import dump_command
from mork_parser.cli.commands.export import export_command
from mork_parser.cli.commands.stats import stats_command
from mork_parser.cli.commands.vcard import vcard_command

app = typer.Typer(
    name="mork-parser",
    help="Mork (Thunderbird address book) parser, inspector, and exporter",
    add_completion=False,
)

console = Console()

app.command("dump")(dump_command)
app.command("vcard")(vcard_command)
app.command("export")(export_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from mork_parser.core.context import Diagnostics, ParseContext
from mork_parser.core.exceptions import MorkHeaderError, ParseExecutionError
from mork_parser.exporter.report import dump_database
from mork_parser.exporter.vcard import dump_vcards
from mork_parser.parser_core import parse_mork_file
from mork_parser.store.database import MorkDatabase


class Pipeline:
    """
    Orchestrates the ``mork`` command: parse each input, dump it, and
    optionally append its contacts to one vCard file.
    No parsing logic lives here.
    """

    def __init__(self, context: ParseContext, out: Optional[TextIO] = None):
        self.ctx = context
        self.log = context.logger
        self.out = out or sys.stdout

    def _diagnostics(self) -> Diagnostics:
        verbose = self.ctx.verbose or bool(getattr(self.ctx.config, "trace", False))
        return Diagnostics.default(verbose=verbose)

    def run(self) -> List[MorkDatabase]:
        self.log.info("Pipeline starting (%d input file(s))", len(self.ctx.input_paths))

        version = str(self.ctx.config.export.get("vcard_version", "3.0"))
        databases: List[MorkDatabase] = []
        vcard_file = None

        try:
            if self.ctx.vcard_path:
                vcard_file = open(self.ctx.vcard_path, "w", encoding="utf-8", newline="")

            for path in self.ctx.input_paths:
                self.log.info("Parsing Mork file: %s", path)
                try:
                    db = parse_mork_file(
                        path,
                        diagnostics=self._diagnostics(),
                        parse_groups=self.ctx.parse_groups,
                        config=self.ctx.config,
                    )
                except (FileNotFoundError, MorkHeaderError) as exc:
                    self.log.error("Skipping %s: %s", path, exc)
                    self.ctx.errors.append(f"{path}: {exc}")
                    continue

                if db.error is not None:
                    self.ctx.errors.append(f"{path}: {db.error}")

                dump_database(self.out, db)
                if vcard_file is not None:
                    cards = dump_vcards(vcard_file, db, version=version)
                    self.ctx.stats[f"{path}:vcards"] = cards

                self.ctx.stats[f"{path}:rows"] = db.row_count
                databases.append(db)

            self.log.info("Pipeline completed (%d error(s))", len(self.ctx.errors))
            return databases

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise ParseExecutionError(str(exc)) from exc

        finally:
            if vcard_file is not None:
                vcard_file.close()

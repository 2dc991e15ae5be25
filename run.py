#!/usr/bin/env python3
"""Run the ``mork`` command from a source checkout: python run.py abook.mab"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from mork_parser.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())

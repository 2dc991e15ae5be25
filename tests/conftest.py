import logging
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from mork_parser.core.context import Diagnostics  # noqa: E402
from mork_parser.utils import mock_file_path  # noqa: E402

HEADER = b'// <!-- <mdb:mork:z v="1.4"/> -->\n'


def mork_bytes(body: bytes) -> bytes:
    """Prefix ``body`` with the Mork 1.4 magic header."""
    return HEADER + body


@pytest.fixture
def abook_path() -> Path:
    return mock_file_path("abook.mab")


@pytest.fixture
def diagnostics() -> Diagnostics:
    """
    Diagnostics on plain loggers that propagate to the root logger,
    so ``caplog`` sees both channels.
    """
    return Diagnostics(
        trace=logging.getLogger("tests.mork.trace"),
        errors=logging.getLogger("tests.mork.errors"),
    )

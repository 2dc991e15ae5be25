"""
CLI package for mork_parser.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from mork_parser.cli.app import app, main

__all__ = [
    "app",
    "main",
]

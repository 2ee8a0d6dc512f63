"""CLI module for coordinate tools.

Provides the `geoc` command-line interface for formatting, parsing and
measuring between coordinates.
"""

from geocoords.cli.main import app

__all__ = ["app"]

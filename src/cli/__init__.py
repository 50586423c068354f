"""Command-line interface for Wiki.js.

This package provides the `wikijs` CLI tool: a Typer application over the
page, asset and system operations, with Rich terminal output and helpers
for formatting values in tables.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'OutputHandler',
]

"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
status messages, tables, JSON, coloured diffs and lint reports, and a
spinner for network calls. Supports verbosity levels and --no-color.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from src.content_analysis.markdown_lint import format_lint_results
from src.content_analysis.models import LintResult

from .formatting import format_json

Column = Tuple[str, Callable[[Any], Any]]

_LINT_STYLES = {
    "Errors:": "red",
    "Warnings:": "yellow",
    "No issues found": "green",
}


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        json_mode: Emit machine-readable JSON instead of tables
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page created")
        >>> with handler.spinner("Fetching pages..."):
        ...     pages = ops.list_pages()
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, json_mode: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            json_mode: Print data as JSON
        """
        self.verbosity = verbosity
        self.no_color = no_color
        self.json_mode = json_mode
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )
        self.err_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.err_console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without markup interpretation."""
        self.console.print(Text(message), soft_wrap=True)

    def print_json(self, data: Any) -> None:
        """Display data as indented JSON (plain text, no highlighting)."""
        self.console.print(Text(format_json(data)), soft_wrap=True)

    def print_data(self, data: Any, columns: Sequence[Column]) -> None:
        """Display a list as JSON or as a table, depending on json_mode."""
        if self.json_mode:
            self.print_json(data)
        else:
            self.print_table(data, columns)

    def print_table(self, rows: List[Any], columns: Sequence[Column]) -> None:
        """Display rows as a table.

        Args:
            rows: Items to display
            columns: (header, accessor) pairs; accessor maps an item to a cell
        """
        if not rows:
            self.console.print("[yellow]No results found.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        for header, _ in columns:
            table.add_column(header)
        for row in rows:
            table.add_row(*(Text(_cell(accessor(row))) for _, accessor in columns))
        self.console.print(table)

    def print_diff(self, diff_text: str) -> None:
        """Display formatted diff text, colouring added and removed lines."""
        if not diff_text:
            self.console.print("[green]No differences[/green]")
            return
        for line in diff_text.split('\n'):
            if line.startswith('+'):
                style = "green"
            elif line.startswith('-'):
                style = "red"
            else:
                style = "dim"
            self.console.print(Text(line, style=style), soft_wrap=True)

    def print_lint(self, result: LintResult) -> None:
        """Display the lint report, colouring the section headers."""
        for line in format_lint_results(result).split('\n'):
            self.console.print(Text(line, style=_LINT_STYLES.get(line, "")), soft_wrap=True)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner on stderr while a request runs.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     page = ops.get_page(12)
        """
        if self.json_mode or not self.err_console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield


def _cell(value: Optional[Any]) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    return str(value)

"""
hookguide CLI - Rich Output Helpers

Utility functions for consistent command-line output using Rich.

Functions:
    print_table    - Print a formatted table
    print_status   - Print validation checks with pass/fail indicators
    print_json     - Print JSON (plain, never wrapped)
    print_markdown - Render a Markdown document
    print_error    - Print error message
    print_success  - Print success message
    print_warning  - Print warning message
"""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

# Create console instances
console = Console()
err_console = Console(stderr=True)

# Status indicators
STATUS_PASS = "[green]PASS[/green]"
STATUS_FAIL = "[red]FAIL[/red]"


def print_table(
    title: str,
    columns: list[str],
    rows: list[list[str]],
    styles: Optional[list[str]] = None,
    show_lines: bool = False,
) -> None:
    """
    Print a rich table.

    Args:
        title: Table title
        columns: Column headers
        rows: Table rows (list of lists)
        styles: Optional column styles
        show_lines: Whether to show row separator lines
    """
    table = Table(title=title, show_lines=show_lines)

    for i, col in enumerate(columns):
        style = styles[i] if styles and i < len(styles) else None
        table.add_column(col, style=style)

    for row in rows:
        padded_row = [escape(str(cell)) for cell in row] + [""] * (len(columns) - len(row))
        table.add_row(*padded_row[:len(columns)])

    console.print(table)


def print_status(
    checks: list[tuple[str, bool, str]],
    title: Optional[str] = None,
) -> None:
    """
    Print checks with pass/fail indicators.

    Args:
        checks: List of (name, passed, message) tuples
        title: Optional title for the status list
    """
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")
        console.print()

    for name, passed, message in checks:
        icon = STATUS_PASS if passed else STATUS_FAIL
        color = "green" if passed else "red"
        console.print(
            f"  {icon} [cyan]{escape(name)}[/cyan]: [{color}]{escape(message)}[/{color}]",
            soft_wrap=True,
        )


def print_json(data: Any, indent: int = 2, sort_keys: bool = False) -> None:
    """
    Print JSON without markup, highlighting or line wrapping.

    Output stays parseable when piped to other tools.

    Args:
        data: Data to print as JSON
        indent: Indentation level
        sort_keys: Whether to sort dictionary keys
    """
    json_str = json.dumps(data, indent=indent, sort_keys=sort_keys, default=str)
    console.print(json_str, markup=False, highlight=False, soft_wrap=True)


def print_markdown(text: str) -> None:
    """Render Markdown to the console."""
    console.print(Markdown(text))


def print_error(
    message: str,
    details: Optional[str] = None,
    hint: Optional[str] = None,
) -> None:
    """
    Print error message to stderr.

    Args:
        message: Error message
        details: Optional detailed error information
        hint: Optional hint for resolving the error
    """
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    if details:
        err_console.print(f"[dim]{escape(details)}[/dim]")

    if hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


def print_success(message: str, details: Optional[str] = None) -> None:
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")

    if details:
        console.print(f"[dim]{escape(details)}[/dim]")


def print_warning(message: str, details: Optional[str] = None) -> None:
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")

    if details:
        console.print(f"[dim]{escape(details)}[/dim]")

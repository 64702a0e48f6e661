"""
Console output for grafana-tfgen commands, built on rich.

Respects NO_COLOR and FORCE_COLOR. The spinner is only drawn on an
interactive terminal so captured or piped output stays plain.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.theme import Theme

TFGEN_THEME = Theme(
    {
        "info": "#88C0D0",
        "success": "#A3BE8C",
        "warning": "#EBCB8B",
        "error": "#BF616A bold",
        "muted": "#D8DEE9",
    }
)

console = Console(
    theme=TFGEN_THEME,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=os.environ.get("NO_COLOR") is not None,
)


@contextmanager
def spinner(message: str) -> Iterator[None]:
    if not console.is_terminal:
        yield
        return
    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description=message, total=None)
        yield


def _status(style: str, symbol: str, message: str) -> None:
    console.print(f"[{style}]{symbol} {escape(message)}[/{style}]")


def success(message: str) -> None:
    _status("success", "✓", message)


def error(message: str) -> None:
    _status("error", "✗", message)


def warning(message: str) -> None:
    _status("warning", "⚠", message)


def header(title: str) -> None:
    console.rule(f"[bold]{escape(title)}[/bold]", style="info")


def print_table(
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
    numeric: Sequence[str] = (),
) -> None:
    """Print a table; columns named in ``numeric`` are right-aligned."""
    table = Table(title=title, title_justify="left", header_style="bold")
    for column in columns:
        table.add_column(column, justify="right" if column in numeric else "left")
    for row in rows:
        table.add_row(*row)
    console.print(table)

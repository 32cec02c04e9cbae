"""Console helpers for the CLI.

User-facing feedback goes through these functions; diagnostics go through
the logger. Keep the two apart: messages here are already localized text,
log records carry structured ``extra`` fields.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

import typer
from tabulate import tabulate


class OutputColor(str, Enum):
    """Colors accepted by ``plain``."""

    WHITE = "WHITE"
    CYAN = "CYAN"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


def success(message: str, *, prefix: bool = True) -> None:
    """Green line, prefixed with a checkmark."""
    typer.secho(f"✅ {message}" if prefix else message, fg=typer.colors.GREEN)


def error(message: str, *, prefix: bool = True, err: bool = True) -> None:
    """Red line on stderr (pass ``err=False`` for stdout), prefixed with a cross."""
    typer.secho(f"❌ {message}" if prefix else message, fg=typer.colors.RED, err=err)


def info(message: str, *, prefix: bool = True) -> None:
    typer.secho(f"ℹ️  {message}" if prefix else message, fg=typer.colors.CYAN)


def warning(message: str, *, prefix: bool = True) -> None:
    typer.secho(f"⚠️  {message}" if prefix else message, fg=typer.colors.YELLOW)


def plain(message: str, *, color: OutputColor | None = None) -> None:
    if color:
        typer.secho(message, fg=getattr(typer.colors, color.value))
    else:
        typer.echo(message)


def table(rows: Sequence[Sequence[Any]], headers: Sequence[str], *, fmt: str = "simple") -> None:
    """Print rows as a table.

    Example:
        table([["Patna", "पटना"]], headers=["District", "Name"])
    """
    typer.echo(tabulate(rows, headers=headers, tablefmt=fmt))

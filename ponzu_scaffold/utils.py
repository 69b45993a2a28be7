"""Shared utility functions for ponzu-scaffold.

Provides async command execution with inherited streams,
file-system helpers, and Rich-based progress reporting. Every console message
the pipeline emits goes through the module-level ``console``.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(cmd: list[str], cwd: str | Path | None = None) -> int:
    """Run a command asynchronously and wait for it to exit.

    The child inherits the parent's stdout/stderr so the user sees raw
    progress from git and go.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.

    Returns:
        The process exit code.

    Raises:
        OSError: If the program cannot be started (e.g. not on ``PATH``).
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd else None,
    )
    return await process.wait()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def remove_tree(path: str | Path) -> None:
    """Recursively delete *path*, whether it is a directory, file or symlink.

    A missing path is not an error.

    Raises:
        OSError: If anything under *path* could not be removed.
    """
    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.exists():
        shutil.rmtree(target)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a cyan progress line for a pipeline step."""
    console.print(f"[cyan]{escape(message)}[/cyan]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_banner(body: str, title: str, style: str = "bright_cyan") -> None:
    """Print a bordered panel, used for start/finish banners."""
    console.print(Panel(escape(body), title=f"[bold]{title}[/bold]", border_style=style))


def print_list_table(items: list[str], title: str, column: str = "File") -> None:
    """Print a single-column table listing *items*.

    Args:
        items: Rows to print, in order.
        title: Table title.
        column: Column header.
    """
    table = Table(title=title, show_header=True, header_style="bold red")
    table.add_column(column, style="bold")

    for item in items:
        table.add_row(escape(item))

    console.print(table)
    console.print()

"""Reconciliation of user content into the vendored framework tree.

Before every build the files in ``<project>/content`` are copied over the
vendored ``content`` package. Files whose names collide with protected
framework files are never copied; every collision is collected so the user
can fix them all in one pass.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from ponzu_scaffold.config import PROTECTED_FILES
from ponzu_scaffold.errors import ReconcileError
from ponzu_scaffold.utils import console, print_error, print_list_table


@dataclass
class ReconciliationResult:
    """Outcome of a single reconcile run."""

    conflicts: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.conflicts


def reconcile(
    user_dir: Path,
    vendored_dir: Path,
    protected: Iterable[str] = PROTECTED_FILES,
) -> ReconciliationResult:
    """Copy the top-level files of *user_dir* into *vendored_dir*.

    Existing destination files are overwritten unconditionally. Names in
    *protected* are recorded as conflicts instead of copied. Subdirectories
    and dangling symlinks are skipped.

    Raises:
        ReconcileError: If either directory is missing or a copy fails.
    """
    protected_names = frozenset(protected)

    if not user_dir.is_dir():
        raise ReconcileError(f"User content directory not found: {user_dir}", path=user_dir)
    if not vendored_dir.is_dir():
        raise ReconcileError(
            f"Vendored content directory not found: {vendored_dir}. "
            "Was this project created with 'ponzu new'?",
            path=vendored_dir,
        )

    try:
        entries = sorted(user_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise ReconcileError(f"Could not list {user_dir}.\n{exc}", path=user_dir) from exc

    result = ReconciliationResult()
    for entry in entries:
        if entry.name in protected_names:
            result.conflicts.append(entry.name)
            continue

        if entry.is_dir():
            console.print(f"[dim]Skipping directory {escape(entry.name)}/ (only files are copied)[/dim]")
            result.skipped.append(entry.name)
            continue

        if entry.is_symlink() and not entry.exists():
            console.print(f"[dim]Skipping broken link {escape(entry.name)}[/dim]")
            result.skipped.append(entry.name)
            continue

        destination = vendored_dir / entry.name
        try:
            shutil.copyfile(entry, destination)
        except OSError as exc:
            raise ReconcileError(
                f"Could not copy {entry} to {destination}.\n{exc}", path=entry
            ) from exc
        result.copied.append(entry.name)

    return result


def report_conflicts(result: ReconciliationResult) -> None:
    """Print every conflicting file name and how to fix it."""
    if result.success:
        return

    print_error("Ponzu couldn't fully build your project:")
    console.print(
        "Some of your files in the content directory exist in the vendored directory.\n"
        "You must rename the following files, as they conflict with Ponzu core:"
    )
    print_list_table(result.conflicts, title="Conflicting files")
    console.print("Once the files above have been renamed, run '$ ponzu build' to retry.")

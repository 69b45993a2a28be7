"""Project path resolution inside the Go workspace.

Every project lives under ``<workspace_root>/src``. Relative paths are always
joined onto that root, never onto the current directory, and an existing
target is only destroyed after an explicit ``y``/``yes`` confirmation.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path, PurePath

from ponzu_scaffold.config import Config
from ponzu_scaffold.errors import WorkspaceError
from ponzu_scaffold.utils import console, print_warning, remove_tree

OVERWRITE_PROMPT = "Path exists, overwrite contents? (y/N): "

_AFFIRMATIVE = frozenset({"y", "yes"})
_NEGATIVE = frozenset({"", "n", "no"})


class Decision(str, Enum):
    """Outcome of the overwrite check for a project path."""

    PROCEED = "proceed"
    ABORT = "abort"
    OVERWRITE = "overwrite"


def join_under(root: Path, relative_path: str | PurePath, label: str = "Project path") -> Path:
    """Join *relative_path* onto *root* without ever leaving it.

    Leading anchors are dropped and ``.``/``..`` segments are collapsed.

    Raises:
        WorkspaceError: If the path climbs above *root* or collapses to
            *root* itself.
    """
    pure = PurePath(relative_path)
    if pure.anchor:
        pure = pure.relative_to(pure.anchor)

    parts: list[str] = []
    for part in pure.parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                raise WorkspaceError(
                    f"{label} '{relative_path}' escapes {root}",
                    path=str(relative_path),
                )
            parts.pop()
            continue
        parts.append(part)

    if not parts:
        raise WorkspaceError(
            f"{label} '{relative_path}' resolves to the workspace root itself",
            path=str(relative_path),
        )

    return root.joinpath(*parts)


def _ask_console(prompt: str) -> str:
    try:
        return console.input(prompt)
    except EOFError:
        return ""


class WorkspaceResolver:
    """Resolves project paths and guards existing ones.

    Args:
        config: Configuration holding the workspace root.
        ask: Callable used to prompt the user. Defaults to reading a line from
            the terminal through the Rich console.
    """

    def __init__(
        self,
        config: Config,
        ask: Callable[[str], str] | None = None,
    ) -> None:
        self.config = config
        self.ask = ask or _ask_console

    def resolve(self, relative_path: str | PurePath) -> Path:
        """Join *relative_path* onto ``<workspace_root>/src``.

        An absolute argument is re-anchored under the workspace rather than
        used as-is.

        Raises:
            WorkspaceError: If the path is empty or climbs out of the
                workspace ``src`` directory.
        """
        return join_under(self.config.src_root, relative_path)

    def check_overwrite(self, path: Path, answer: str | None = None) -> Decision:
        """Decide whether bootstrap may write to *path*.

        Nothing at *path* means ``PROCEED``. Otherwise the user is asked once
        (unless *answer* is given). ``y``/``yes`` destroys the existing tree and
        returns ``OVERWRITE``; an empty answer, ``n`` or ``no`` returns
        ``ABORT``; anything else is reported as unrecognised and also returns
        ``ABORT``.

        Raises:
            WorkspaceError: If the existing tree could not be removed.
        """
        if not path.exists() and not path.is_symlink():
            return Decision.PROCEED

        if answer is None:
            answer = self.ask(OVERWRITE_PROMPT)
        normalized = answer.strip().lower()

        if normalized in _AFFIRMATIVE:
            self.destroy(path)
            return Decision.OVERWRITE

        if normalized in _NEGATIVE:
            console.print("[dim]Nothing overwritten.[/dim]")
            return Decision.ABORT

        print_warning(
            "Input not recognized. No files overwritten. Answer as 'y' or 'n' only."
        )
        return Decision.ABORT

    def destroy(self, path: Path) -> None:
        """Recursively remove *path*.

        Raises:
            WorkspaceError: Chained to the underlying ``OSError``.
        """
        try:
            remove_tree(path)
        except OSError as exc:
            raise WorkspaceError(f"Failed to overwrite {path}.\n{exc}", path=path) from exc

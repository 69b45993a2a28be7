"""Exception hierarchy for ponzu-scaffold.

Every failure the bootstrap or build pipeline can surface derives from
``ScaffoldError`` so the CLI can map them to a single exit path. Underlying
``OSError`` instances are always chained (``raise ... from exc``).
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all ponzu-scaffold errors."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class ConfigError(ScaffoldError):
    """Raised when the configuration cannot be resolved (e.g. no GOPATH)."""


class WorkspaceError(ScaffoldError):
    """Raised when a project path cannot be resolved, created, or destroyed."""


class FetchError(ScaffoldError):
    """Raised when every clone attempt for the template source failed."""

    def __init__(
        self,
        message: str,
        attempted: list[str] | None = None,
        reason: str = "",
        path: str | Path | None = None,
    ) -> None:
        self.attempted = list(attempted or [])
        self.reason = reason
        super().__init__(message, path=path)


class VendorError(ScaffoldError):
    """Raised when a vendoring step fails. Nothing is rolled back."""

    def __init__(self, message: str, step: str = "", path: str | Path | None = None) -> None:
        self.step = step
        super().__init__(message, path=path)


class ReconcileError(ScaffoldError):
    """Raised when user content cannot be read or copied into the vendor tree."""


class ReconcileConflictError(ScaffoldError):
    """Raised when user files collide with protected framework files."""

    def __init__(self, conflicts: list[str], path: str | Path | None = None) -> None:
        self.conflicts = list(conflicts)
        super().__init__(
            "Ponzu has very few internal conflicts, sorry for the inconvenience. "
            f"Rename: {', '.join(self.conflicts)}",
            path=path,
        )


class BuildError(ScaffoldError):
    """Raised when the Go toolchain fails to build the project."""

"""Template source fetching.

Implements the clone policy for new projects:
1. Normal mode: clone from the local workspace copy, and if that fails,
   retry once over the network. The ``.git`` directory is removed afterwards.
2. Dev mode: clone the ``ponzu-dev`` branch (single-branch) from the local
   copy, or from a fork inside the workspace. There is no network fallback
   and the ``.git`` directory is kept.

Each mode is an explicit ``FetchPlan`` so the asymmetry is visible in one
place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Union

from rich.markup import escape

from ponzu_scaffold.bootstrap.workspace import join_under
from ponzu_scaffold.config import BuildOptions, Config
from ponzu_scaffold.errors import FetchError
from ponzu_scaffold.utils import console, print_step, print_warning, remove_tree, run_command


@dataclass(frozen=True)
class LocalSource:
    """A repository checked out on this machine."""

    path: Path
    kind: Literal["local"] = "local"

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class RemoteSource:
    """A repository reachable over the network."""

    url: str
    kind: Literal["remote"] = "remote"

    def describe(self) -> str:
        return self.url


SourceLocation = Union[LocalSource, RemoteSource]


@dataclass(frozen=True)
class CloneAttempt:
    """One ``git clone`` invocation in a fetch plan."""

    location: SourceLocation
    branch: str | None = None
    single_branch: bool = False

    def clone_args(self, destination: Path) -> list[str]:
        """Arguments following ``git`` for this attempt."""
        args = ["clone", self.location.describe()]
        if self.branch:
            args += ["--branch", self.branch]
        if self.single_branch:
            args.append("--single-branch")
        args.append(str(destination))
        return args


@dataclass
class FetchPlan:
    """Ordered clone attempts plus post-clone cleanup policy."""

    attempts: list[CloneAttempt] = field(default_factory=list)
    strip_metadata: bool = True

    @property
    def locations(self) -> list[str]:
        return [attempt.location.describe() for attempt in self.attempts]


def plan_fetch(config: Config, options: BuildOptions) -> FetchPlan:
    """Build the clone policy for *options*.

    ``options.fork`` is ignored unless ``options.dev`` is set.
    """
    local = LocalSource(config.canonical_local_source)

    if options.dev:
        if options.fork:
            local = LocalSource(join_under(config.src_root, options.fork, label="Fork path"))
        return FetchPlan(
            attempts=[
                CloneAttempt(local, branch=config.dev_branch, single_branch=True),
            ],
            strip_metadata=False,
        )

    return FetchPlan(
        attempts=[
            CloneAttempt(local),
            CloneAttempt(RemoteSource(config.repo.remote_url)),
        ],
        strip_metadata=True,
    )


async def _run_git_clone(git_binary: str, attempt: CloneAttempt, destination: Path) -> str:
    """Run one clone attempt with inherited stdio.

    Returns:
        An empty string on success, otherwise the failure text.
    """
    cmd = [git_binary] + attempt.clone_args(destination)
    try:
        returncode = await run_command(cmd)
    except OSError as exc:
        return f"could not start {git_binary}: {exc}"

    if returncode != 0:
        return f"{' '.join(cmd)} exited with status {returncode}"
    return ""


class SourceFetcher:
    """Clones the template repository into a new project directory."""

    def __init__(self, git_binary: str = "git"):
        self.git_binary = git_binary

    async def fetch(self, plan: FetchPlan, destination: Path) -> SourceLocation:
        """Run *plan* against *destination*, stopping at the first success.

        Args:
            plan: Ordered clone attempts.
            destination: Directory to clone into. Created if missing.

        Returns:
            The location the project was cloned from.

        Raises:
            FetchError: If every attempt failed. The message names every
                attempted location and the last failure.
        """
        if not plan.attempts:
            raise FetchError("No clone sources configured.", path=destination)

        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FetchError(
                f"Could not create project directory {destination}.\n{exc}",
                reason=str(exc),
                path=destination,
            ) from exc

        reason = ""
        for index, attempt in enumerate(plan.attempts):
            source = attempt.location.describe()
            print_step(f"Cloning {source} into {destination}...")

            reason = await _run_git_clone(self.git_binary, attempt, destination)
            if not reason:
                if plan.strip_metadata:
                    self._strip_metadata(destination)
                return attempt.location

            remaining = plan.attempts[index + 1:]
            if remaining:
                console.print(
                    f"[yellow]Couldn't clone from {escape(source)}. "
                    f"Trying {escape(remaining[0].location.describe())}...[/yellow]"
                )

        attempted = plan.locations
        if len(attempted) == 1:
            message = f"Failed to clone files from [{attempted[0]}].\n{reason}"
        else:
            joined = " and ".join(f"[{loc}]" for loc in attempted)
            message = f"Failed to clone files from {joined}.\n{reason}"
        raise FetchError(message, attempted=attempted, reason=reason, path=destination)

    @staticmethod
    def _strip_metadata(destination: Path) -> None:
        try:
            remove_tree(destination / ".git")
        except OSError as exc:
            print_warning(
                "Failed to remove .git directory from your project path. "
                f"Consider removing it manually. ({exc})"
            )

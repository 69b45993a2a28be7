"""ponzu-scaffold pipeline orchestrator.

Implements the two entry operations:

bootstrap        -- Resolve the project path, confirm overwrite, clone the
                    template, vendor the core packages. Run once per project.
build_and_compile -- Reconcile user content into the vendor tree, then
                    `go build` the server. Run on every build.

Usage::

    python -m ponzu_scaffold.pipeline new github.com/me/site
    python -m ponzu_scaffold.pipeline new --dev --fork github.com/me/ponzu github.com/me/site
    python -m ponzu_scaffold.pipeline build
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from ponzu_scaffold.bootstrap import (
    Decision,
    SourceFetcher,
    WorkspaceResolver,
    plan_fetch,
    vendor_core_packages,
)
from ponzu_scaffold.builder import compile_binary, reconcile, report_conflicts
from ponzu_scaffold.config import BuildOptions, Config
from ponzu_scaffold.errors import ReconcileConflictError, ScaffoldError
from ponzu_scaffold.utils import console, print_banner, print_error, print_success


async def bootstrap(
    relative_path: str,
    options: BuildOptions | None = None,
    config: Config | None = None,
    answer: str | None = None,
    resolver: WorkspaceResolver | None = None,
) -> Path | None:
    """Create a new Ponzu project at ``$GOPATH/src/<relative_path>``.

    Args:
        relative_path: Project path relative to the workspace ``src`` dir.
        options: Dev/fork options. Defaults to a normal clone.
        config: Configuration. Defaults to ``Config.from_env()``.
        answer: Pre-supplied answer to the overwrite prompt.
        resolver: Custom path resolver (mainly to inject a prompt).

    Returns:
        The project path, or ``None`` if the user declined to overwrite.

    Raises:
        ScaffoldError: Any fatal workspace, fetch or vendor failure. A
            failed vendor step leaves the partial project in place.
    """
    options = options or BuildOptions()
    config = config or Config.from_env()
    resolver = resolver or WorkspaceResolver(config)

    project_path = resolver.resolve(relative_path)
    plan = plan_fetch(config, options)
    decision = resolver.check_overwrite(project_path, answer=answer)
    if decision is Decision.ABORT:
        return None

    print_banner(
        f"Project : {project_path}\n"
        f"Mode    : {'dev (' + config.dev_branch + ')' if options.dev else 'stable'}\n"
        f"Sources : {', '.join(plan.locations)}",
        title="New Ponzu Project",
    )

    fetcher = SourceFetcher(git_binary=config.toolchain.git_binary)
    source = await fetcher.fetch(plan, project_path)

    vendor_core_packages(project_path, config)

    if options.dev:
        print_success(f"Dev build cloned from {source.describe()}:{config.dev_branch}")
    else:
        print_success(f"New ponzu project created at {project_path}")
    return project_path


async def build_and_compile(
    working_dir: str | Path,
    config: Config | None = None,
) -> Path:
    """Reconcile user content and compile the project in *working_dir*.

    Compilation is never attempted when reconciliation found conflicts.

    Returns:
        Path of the built server binary.

    Raises:
        ReconcileConflictError: If user files collide with protected names.
        ScaffoldError: Any reconcile or build failure.
    """
    project = Path(working_dir).resolve()
    config = config or Config.from_env()

    result = reconcile(
        config.user_content_path(project),
        config.vendored_content_path(project),
        protected=config.protected_files,
    )
    if not result.success:
        report_conflicts(result)
        raise ReconcileConflictError(result.conflicts, path=project)

    console.print(f"  [green]+[/green] Reconciled {len(result.copied)} content file(s)")

    artefact = await compile_binary(
        config.entry_point_paths(project),
        config.toolchain.output_name,
        cwd=project,
        go_binary=config.toolchain.go_binary,
    )
    print_success(f"Built {artefact}")
    return artefact


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``ponzu-scaffold``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="ponzu-scaffold",
        description="Create and build Ponzu CMS projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ponzu-scaffold new github.com/me/site\n"
            "  ponzu-scaffold new --dev github.com/me/site\n"
            "  ponzu-scaffold build\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    new_cmd = sub.add_parser("new", help="Create a project inside $GOPATH/src")
    new_cmd.add_argument("path", help="Project path relative to $GOPATH/src")
    new_cmd.add_argument("--dev", action="store_true", help="Clone the ponzu-dev branch")
    new_cmd.add_argument(
        "--fork",
        default="",
        help="With --dev, clone from this path relative to $GOPATH/src",
    )

    build_cmd = sub.add_parser("build", help="Reconcile content and build the server")
    build_cmd.add_argument(
        "--dir",
        default=".",
        help="Project directory (default: current directory)",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        if args.command == "new":
            options = BuildOptions(dev=args.dev, fork=args.fork)
            asyncio.run(bootstrap(args.path, options, config))
        else:
            asyncio.run(build_and_compile(args.dir, config))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

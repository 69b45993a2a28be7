"""Go toolchain invocation.

Runs ``go build -o <output> <entry points...>`` with inherited streams. A
non-zero exit and a toolchain that cannot be launched are reported the same
way, as a ``BuildError``.
"""

from __future__ import annotations

from pathlib import Path

from ponzu_scaffold.errors import BuildError
from ponzu_scaffold.utils import print_step, run_command

BUILD_FAILED = "Ponzu build step failed. Please try again."


async def compile_binary(
    entry_points: list[Path],
    output_name: str,
    cwd: Path | None = None,
    go_binary: str = "go",
) -> Path:
    """Build a binary named *output_name* from *entry_points*.

    Args:
        entry_points: Go source files passed to ``go build``.
        output_name: Artefact file name (``-o``).
        cwd: Directory to run the build in. The artefact lands here.
        go_binary: The ``go`` executable.

    Returns:
        Path of the built artefact.

    Raises:
        BuildError: If the toolchain failed or could not be started.
    """
    cmd = [go_binary, "build", "-o", output_name] + [str(p) for p in entry_points]
    print_step(f"Running {' '.join(cmd)}")

    try:
        returncode = await run_command(cmd, cwd=cwd)
    except OSError as exc:
        raise BuildError(f"{BUILD_FAILED}\n{exc}", path=cwd) from exc

    if returncode != 0:
        raise BuildError(
            f"{BUILD_FAILED}\n{' '.join(cmd)} exited with status {returncode}",
            path=cwd,
        )

    return (cwd or Path.cwd()) / output_name

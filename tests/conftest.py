"""Shared pytest fixtures for the ponzu-scaffold test suite.

Provides reusable fixtures for:
- A temporary Go workspace (``GOPATH``) and matching ``Config``
- A Ponzu-shaped template tree and an already-vendored project
- Mock subprocess helpers, including a fake ``git clone``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from ponzu_scaffold.config import Config


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------

TEMPLATE_FILES: dict[str, str] = {
    "content/item.go": "package content\n\n// Item is the framework base type.\ntype Item struct{}\n",
    "content/types.go": "package content\n\nvar Types = map[string]func() interface{}{}\n",
    "management/editor/editor.go": "package editor\n",
    "management/manager/manager.go": "package manager\n",
    "system/db/init.go": "package db\n",
    "system/admin/admin.go": "package admin\n",
    "cmd/ponzu/main.go": "package main\n\nfunc main() {}\n",
    "cmd/ponzu/options.go": "package main\n",
    "README.md": "# Ponzu\n",
}


def write_template(root: Path, with_git: bool = True) -> Path:
    """Populate *root* with a Ponzu-shaped tree and return it."""
    for rel, text in TEMPLATE_FILES.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    if with_git:
        (root / ".git").mkdir(exist_ok=True)
        (root / ".git" / "HEAD").write_text("ref: refs/heads/master\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Temporary GOPATH with an empty ``src`` directory."""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    yield root


@pytest.fixture
def config(workspace: Path) -> Config:
    """Config rooted at the temporary workspace."""
    return Config(workspace_root=workspace)


@pytest.fixture
def vendored_project(tmp_path: Path, config: Config) -> Path:
    """A project that has already been through clone + vendoring."""
    from ponzu_scaffold.bootstrap.vendor import vendor_core_packages

    project = tmp_path / "project"
    project.mkdir()
    write_template(project, with_git=False)
    vendor_core_packages(project, config)
    return project


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with a
    configurable return code.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(returncode: int = 0) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_git_clone(mock_subprocess) -> Callable[..., Any]:
    """Build a ``create_subprocess_exec`` replacement that imitates git clone.

    ``fake_git_clone(fail_sources={...})`` returns an async callable. Every
    call is recorded in its ``calls`` attribute. A clone whose source is in
    *fail_sources* exits 128; any other clone writes the template tree into
    the destination (the last argument) and exits 0.
    """
    def factory(fail_sources: set[str] | None = None, missing_binary: bool = False):
        failing = set(fail_sources or ())
        calls: list[list[str]] = []

        async def _exec(*cmd: str, **kwargs: Any):
            calls.append(list(cmd))
            if missing_binary:
                raise FileNotFoundError(2, "No such file or directory", cmd[0])
            source, destination = cmd[2], Path(cmd[-1])
            if source in failing:
                return mock_subprocess(returncode=128)
            write_template(destination)
            return mock_subprocess(returncode=0)

        _exec.calls = calls  # type: ignore[attr-defined]
        return _exec

    return factory


def tree_snapshot(root: Path) -> dict[str, bytes]:
    """Map of relative file path -> bytes for every file under *root*."""
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    return tree_snapshot


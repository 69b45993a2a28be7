"""Vendoring of the framework's core packages.

Moves the framework-owned subtrees of a freshly cloned project into
``cmd/ponzu/vendor/<host>/<owner>/<name>`` and leaves an empty ``content``
directory at the project root for user code.

Steps run strictly in order and the first failure is raised. Nothing is rolled
back; callers that want a clean slate call ``cleanup_project`` explicitly.
"""

from __future__ import annotations

from pathlib import Path

from ponzu_scaffold.config import Config
from ponzu_scaffold.errors import VendorError, WorkspaceError
from ponzu_scaffold.utils import console, print_warning, remove_tree


def vendor_core_packages(project_path: Path, config: Config) -> Path:
    """Relocate the vendor manifest subtrees and create the user content dir.

    Args:
        project_path: Root of the cloned project.
        config: Supplies the manifest, repo identity and directory names.

    Returns:
        The vendor directory the subtrees were moved into.

    Raises:
        VendorError: On the first failing step. Partial state is left as-is.
    """
    vendor_path = config.vendor_path(project_path)

    try:
        vendor_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VendorError(
            f"Could not create vendor directory {vendor_path}.\n{exc}",
            step="mkdir-vendor",
            path=vendor_path,
        ) from exc

    for name in config.vendor_manifest:
        source = project_path / name
        target = vendor_path / name
        try:
            source.rename(target)
        except OSError as exc:
            raise VendorError(
                f"Could not move {source} to {target}.\n{exc}",
                step=f"move-{name}",
                path=source,
            ) from exc
        console.print(f"  [green]+[/green] vendored [bold]{name}[/bold]")

    content_path = config.user_content_path(project_path)
    try:
        content_path.mkdir()
    except OSError as exc:
        raise VendorError(
            f"Could not create user content directory {content_path}.\n{exc}",
            step="mkdir-content",
            path=content_path,
        ) from exc

    return vendor_path


def cleanup_project(project_path: Path) -> bool:
    """Delete a (possibly half-built) project tree.

    Returns:
        ``True`` if something was removed, ``False`` if *project_path* did not
        exist.

    Raises:
        WorkspaceError: If the tree could not be fully removed.
    """
    if not project_path.exists() and not project_path.is_symlink():
        return False

    print_warning(f"Removing project at {project_path}...")
    try:
        remove_tree(project_path)
    except OSError as exc:
        raise WorkspaceError(
            f"Failed to remove {project_path}. Consider removing it manually.\n{exc}",
            path=project_path,
        ) from exc
    return True

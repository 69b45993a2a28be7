"""ponzu-scaffold bootstrap module.

Materialises a new project directory from the Ponzu template repository.

Key classes:
    WorkspaceResolver - Project path resolution and overwrite confirmation
    SourceFetcher     - Local clone -> network clone chain (dev: single attempt)
    FetchPlan         - Ordered clone policy for a mode
"""

from .fetcher import (
    CloneAttempt,
    FetchPlan,
    LocalSource,
    RemoteSource,
    SourceFetcher,
    SourceLocation,
    plan_fetch,
)
from .vendor import cleanup_project, vendor_core_packages
from .workspace import Decision, WorkspaceResolver

__all__ = [
    # Path resolution
    "WorkspaceResolver",
    "Decision",
    # Fetching
    "SourceFetcher",
    "FetchPlan",
    "CloneAttempt",
    "LocalSource",
    "RemoteSource",
    "SourceLocation",
    "plan_fetch",
    # Vendoring
    "vendor_core_packages",
    "cleanup_project",
]

"""ponzu-scaffold builder module.

Runs on every build: reconciles user content into the vendored framework
tree, then compiles the server binary.

Key pieces:
    reconcile            - Copy user files, collecting protected-name conflicts
    ReconciliationResult - Conflicts and copied files from one run
    compile_binary       - `go build` wrapper raising BuildError
"""

from .compiler import BUILD_FAILED, compile_binary
from .reconciler import ReconciliationResult, reconcile, report_conflicts

__all__ = [
    # Reconciliation
    "reconcile",
    "report_conflicts",
    "ReconciliationResult",
    # Compilation
    "compile_binary",
    "BUILD_FAILED",
]

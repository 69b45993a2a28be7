"""Unit tests for content reconciliation (ponzu_scaffold.builder.reconciler).

Tests cover:
- Non-conflicting files are copied and overwrite existing ones
- Protected names are collected as conflicts and never copied
- All conflicts are reported in one pass
- Idempotence for unchanged input
- Subdirectories are skipped
- Missing directories and copy failures raise ReconcileError
- report_conflicts output
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from ponzu_scaffold.builder.reconciler import (
    ReconciliationResult,
    reconcile,
    report_conflicts,
)
from ponzu_scaffold.errors import ReconcileError


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    user = tmp_path / "content"
    vendored = tmp_path / "vendor" / "content"
    user.mkdir()
    vendored.mkdir(parents=True)
    return user, vendored


class TestReconcile:
    @pytest.mark.unit
    def test_scenario_foo_and_item(self, dirs):
        user, vendored = dirs
        (user / "foo.txt").write_text("hello")
        (user / "item.go").write_text("package content // user item")

        result = reconcile(user, vendored)

        assert result.success is False
        assert result.conflicts == ["item.go"]
        assert (vendored / "foo.txt").read_text() == "hello"
        assert not (vendored / "item.go").exists()

    @pytest.mark.unit
    def test_protected_file_not_overwritten(self, dirs):
        user, vendored = dirs
        (vendored / "types.go").write_text("framework types")
        (user / "types.go").write_text("user types")

        result = reconcile(user, vendored)

        assert result.conflicts == ["types.go"]
        assert (vendored / "types.go").read_text() == "framework types"

    @pytest.mark.unit
    def test_all_conflicts_collected(self, dirs):
        user, vendored = dirs
        for name in ("types.go", "item.go", "song.go"):
            (user / name).write_text(name)

        result = reconcile(user, vendored)

        assert result.conflicts == ["item.go", "types.go"]
        assert result.copied == ["song.go"]

    @pytest.mark.unit
    def test_success_copies_and_overwrites(self, dirs):
        user, vendored = dirs
        (user / "song.go").write_text("new song")
        (vendored / "song.go").write_text("old song")
        (vendored / "item.go").write_text("framework item")

        result = reconcile(user, vendored)

        assert result.success is True
        assert result.copied == ["song.go"]
        assert (vendored / "song.go").read_text() == "new song"
        assert (vendored / "item.go").read_text() == "framework item"

    @pytest.mark.unit
    def test_idempotent_for_unchanged_input(self, dirs, snapshot):
        user, vendored = dirs
        (user / "song.go").write_text("package content\n")
        (user / "album.go").write_bytes(b"\x00binary\xff")

        first = reconcile(user, vendored)
        after_first = snapshot(vendored)
        second = reconcile(user, vendored)

        assert first.success and second.success
        assert first.copied == second.copied == ["album.go", "song.go"]
        assert snapshot(vendored) == after_first

    @pytest.mark.unit
    def test_empty_user_dir_is_success(self, dirs):
        user, vendored = dirs
        result = reconcile(user, vendored)
        assert result == ReconciliationResult()
        assert result.success

    @pytest.mark.unit
    def test_subdirectories_skipped(self, dirs):
        user, vendored = dirs
        (user / "nested").mkdir()
        (user / "nested" / "deep.go").write_text("x")

        result = reconcile(user, vendored)

        assert result.success
        assert result.skipped == ["nested"]
        assert not (vendored / "nested").exists()

    @pytest.mark.unit
    def test_dangling_symlink_skipped(self, dirs):
        user, vendored = dirs
        (user / "link.go").symlink_to(user / "nowhere.go")
        (user / "post.go").write_text("package content\n")

        result = reconcile(user, vendored)

        assert result.success
        assert result.skipped == ["link.go"]
        assert result.copied == ["post.go"]
        assert not (vendored / "link.go").exists()

    @pytest.mark.unit
    def test_custom_protected_set(self, dirs):
        user, vendored = dirs
        (user / "item.go").write_text("ok here")
        (user / "schema.go").write_text("reserved")

        result = reconcile(user, vendored, protected={"schema.go"})

        assert result.conflicts == ["schema.go"]
        assert (vendored / "item.go").exists()

    @pytest.mark.unit
    def test_missing_user_dir_raises(self, tmp_path: Path):
        vendored = tmp_path / "vendored"
        vendored.mkdir()
        with pytest.raises(ReconcileError, match="User content directory not found"):
            reconcile(tmp_path / "missing", vendored)

    @pytest.mark.unit
    def test_missing_vendored_dir_raises(self, tmp_path: Path):
        user = tmp_path / "content"
        user.mkdir()
        with pytest.raises(ReconcileError, match="Vendored content directory not found"):
            reconcile(user, tmp_path / "missing")

    @pytest.mark.unit
    def test_copy_failure_raises(self, dirs):
        user, vendored = dirs
        (user / "song.go").write_text("x")

        with patch(
            "ponzu_scaffold.builder.reconciler.shutil.copyfile",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(ReconcileError, match="Could not copy") as exc_info:
                reconcile(user, vendored)

        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestReportConflicts:
    @pytest.mark.unit
    def test_lists_every_conflict(self):
        result = ReconciliationResult(conflicts=["item.go", "types.go"])

        with patch("ponzu_scaffold.builder.reconciler.print_list_table") as table, \
                patch("ponzu_scaffold.builder.reconciler.console") as mock_console:
            report_conflicts(result)

        assert table.call_args.args[0] == ["item.go", "types.go"]
        printed = " ".join(str(c.args[0]) for c in mock_console.print.call_args_list)
        assert "ponzu build" in printed

    @pytest.mark.unit
    def test_silent_on_success(self):
        with patch("ponzu_scaffold.builder.reconciler.console") as mock_console:
            report_conflicts(ReconciliationResult(copied=["song.go"]))
        mock_console.print.assert_not_called()

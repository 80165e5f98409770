"""Tests for SyncOperations: atomic copy and delete."""

import os
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from filesyncer.exceptions import CopyError, DeleteError
from filesyncer.sync.models import FilePlanEntry, SyncOptions
from filesyncer.sync.operations import SyncOperations, temp_path_for
from filesyncer.sync.progress import CopyProgressEvent


def _entry(source_dir: Path, target_dir: Path, relative_path: str) -> FilePlanEntry:
    source = source_dir / relative_path
    return FilePlanEntry(
        source_path=source,
        target_path=target_dir / relative_path,
        size_bytes=source.stat().st_size,
        relative_path=relative_path,
    )


class TestTempPath:
    """Tests for temp_path_for."""

    def test_temp_path_next_to_target(self):
        target = Path("/backup/sub/report.pdf")
        assert temp_path_for(target) == Path("/backup/sub/report.pdf.tmp")


class TestCopyFile:
    """Tests for SyncOperations.copy_file."""

    @pytest.fixture
    def operations(self):
        return SyncOperations()

    def test_copy_creates_byte_identical_file(
        self, operations, source_dir, target_dir
    ):
        content = os.urandom(300 * 1024)
        (source_dir / "data.bin").write_bytes(content)

        result = operations.copy_file(
            _entry(source_dir, target_dir, "data.bin"), SyncOptions()
        )

        assert result.success
        assert result.error is None
        assert (target_dir / "data.bin").read_bytes() == content
        assert not (target_dir / "data.bin.tmp").exists()

    def test_copy_creates_missing_directories(
        self, operations, source_dir, target_dir
    ):
        (source_dir / "a" / "b").mkdir(parents=True)
        (source_dir / "a" / "b" / "deep.txt").write_text("deep")

        result = operations.copy_file(
            _entry(source_dir, target_dir, "a/b/deep.txt"), SyncOptions()
        )

        assert result.success
        assert (target_dir / "a" / "b" / "deep.txt").read_text() == "deep"

    def test_copy_overwrites_existing_target(
        self, operations, source_dir, target_dir
    ):
        (source_dir / "f.txt").write_text("new content")
        (target_dir / "f.txt").write_text("old")

        operations.copy_file(_entry(source_dir, target_dir, "f.txt"), SyncOptions())

        assert (target_dir / "f.txt").read_text() == "new content"

    def test_copy_truncates_stale_temp_file(self, operations, source_dir, target_dir):
        (source_dir / "f.txt").write_text("abc")
        (target_dir / "f.txt.tmp").write_text("stale leftover from a crash")

        operations.copy_file(_entry(source_dir, target_dir, "f.txt"), SyncOptions())

        assert (target_dir / "f.txt").read_text() == "abc"
        assert not (target_dir / "f.txt.tmp").exists()

    def test_target_only_replaced_by_rename(self, operations, source_dir, target_dir):
        """The final name is only written through os.replace of the temp file."""
        (source_dir / "f.txt").write_text("payload")
        entry = _entry(source_dir, target_dir, "f.txt")

        with patch(
            "filesyncer.sync.operations.os.replace", wraps=os.replace
        ) as mock_replace:
            operations.copy_file(entry, SyncOptions())

        mock_replace.assert_called_once_with(
            temp_path_for(entry.target_path), entry.target_path
        )

    def test_copy_replaces_directory_with_same_name(
        self, operations, source_dir, target_dir
    ):
        (source_dir / "x").write_text("file now")
        (target_dir / "x" / "nested").mkdir(parents=True)
        (target_dir / "x" / "nested" / "old.txt").write_text("old")

        result = operations.copy_file(
            _entry(source_dir, target_dir, "x"), SyncOptions()
        )

        assert result.success
        assert (target_dir / "x").is_file()
        assert (target_dir / "x").read_text() == "file now"
        assert not (target_dir / "x.tmp").exists()

    def test_dry_run_keeps_directory_with_same_name(
        self, operations, source_dir, target_dir
    ):
        (source_dir / "x").write_text("file now")
        (target_dir / "x").mkdir()

        result = operations.copy_file(
            _entry(source_dir, target_dir, "x"), SyncOptions(dry_run=True)
        )

        assert result.success
        assert (target_dir / "x").is_dir()

    def test_dry_run_touches_nothing(self, operations, source_dir, target_dir):
        (source_dir / "sub").mkdir()
        (source_dir / "sub" / "f.txt").write_text("x")

        result = operations.copy_file(
            _entry(source_dir, target_dir, "sub/f.txt"), SyncOptions(dry_run=True)
        )

        assert result.success
        assert not (target_dir / "sub").exists()

    def test_progress_events(self, operations, source_dir, target_dir):
        (source_dir / "f.bin").write_bytes(b"x" * 1000)
        events = []

        operations.copy_file(
            _entry(source_dir, target_dir, "f.bin"),
            SyncOptions(chunk_size=10),
            events.append,
        )

        progress = [e for e in events if e.event == CopyProgressEvent.FILE_PROGRESS]
        assert len(progress) == 100
        assert progress[-1].percent == 100
        assert events[-1].event == CopyProgressEvent.FILE_COMPLETE
        assert all(e.relative_path == "f.bin" for e in events)

    def test_missing_source_returns_copy_error(
        self, operations, source_dir, target_dir
    ):
        entry = FilePlanEntry(
            source_path=source_dir / "gone.txt",
            target_path=target_dir / "gone.txt",
            size_bytes=10,
            relative_path="gone.txt",
        )

        result = operations.copy_file(entry, SyncOptions())

        assert not result.success
        assert isinstance(result.error, CopyError)
        assert isinstance(result.error.__cause__, FileNotFoundError)
        assert not (target_dir / "gone.txt").exists()

    def test_failed_rename_discards_temp(self, operations, source_dir, target_dir):
        (source_dir / "f.txt").write_text("x")
        entry = _entry(source_dir, target_dir, "f.txt")

        with patch(
            "filesyncer.sync.operations.os.replace",
            side_effect=PermissionError("denied"),
        ):
            result = operations.copy_file(entry, SyncOptions())

        assert not result.success
        assert "denied" in str(result.error)
        assert not (target_dir / "f.txt.tmp").exists()
        assert not (target_dir / "f.txt").exists()

    def test_copy_timestamps(self, operations, source_dir, target_dir):
        source = source_dir / "f.txt"
        source.write_text("x")
        os.utime(source, ns=(1_500_000_000_000_000_000, 1_600_000_000_000_000_000))

        operations.copy_file(
            _entry(source_dir, target_dir, "f.txt"), SyncOptions(copy_timestamps=True)
        )

        assert (target_dir / "f.txt").stat().st_mtime_ns == 1_600_000_000_000_000_000

    def test_timestamps_not_copied_by_default(
        self, operations, source_dir, target_dir
    ):
        source = source_dir / "f.txt"
        source.write_text("x")
        os.utime(source, ns=(1_000_000_000, 1_000_000_000))

        operations.copy_file(_entry(source_dir, target_dir, "f.txt"), SyncOptions())

        assert (target_dir / "f.txt").stat().st_mtime_ns != 1_000_000_000

    def test_access_control_copied_when_enabled(self, source_dir, target_dir):
        provider = Mock()
        operations = SyncOperations(acl_provider=provider)
        (source_dir / "f.txt").write_text("x")
        entry = _entry(source_dir, target_dir, "f.txt")

        operations.copy_file(entry, SyncOptions(copy_access_control=True))

        provider.copy.assert_called_once_with(entry.source_path, entry.target_path)

    def test_access_control_not_copied_by_default(self, source_dir, target_dir):
        provider = Mock()
        operations = SyncOperations(acl_provider=provider)
        (source_dir / "f.txt").write_text("x")

        operations.copy_file(_entry(source_dir, target_dir, "f.txt"), SyncOptions())

        provider.copy.assert_not_called()

    def test_metadata_failure_is_copy_error(self, source_dir, target_dir):
        provider = Mock()
        provider.copy.side_effect = PermissionError("chown not permitted")
        operations = SyncOperations(acl_provider=provider)
        (source_dir / "f.txt").write_text("x")

        result = operations.copy_file(
            _entry(source_dir, target_dir, "f.txt"),
            SyncOptions(copy_access_control=True),
        )

        assert not result.success
        assert isinstance(result.error, CopyError)
        # Content was already published before the metadata step
        assert (target_dir / "f.txt").read_text() == "x"


class TestDeleteFile:
    """Tests for SyncOperations.delete_file."""

    def test_delete(self, tmp_path):
        path = tmp_path / "old.txt"
        path.write_text("old")

        result = SyncOperations().delete_file(path)

        assert result.success
        assert not path.exists()

    def test_delete_dry_run(self, tmp_path):
        path = tmp_path / "old.txt"
        path.write_text("old")

        result = SyncOperations().delete_file(path, dry_run=True)

        assert result.success
        assert path.exists()

    def test_delete_missing_file_returns_error(self, tmp_path):
        result = SyncOperations().delete_file(tmp_path / "missing.txt")

        assert not result.success
        assert isinstance(result.error, DeleteError)
        assert result.error.path == tmp_path / "missing.txt"

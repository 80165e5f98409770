"""Tests for access-control providers."""

import os
from unittest.mock import patch

import pytest

from filesyncer.sync.acl import NullAclProvider, PosixAclProvider, get_acl_provider


class TestNullAclProvider:
    """Tests for the no-op provider."""

    def test_always_equal(self, tmp_path):
        provider = NullAclProvider()
        assert provider.equal(tmp_path / "a", tmp_path / "b")

    def test_copy_does_nothing(self, tmp_path):
        source = tmp_path / "a"
        source.write_text("a")
        assert NullAclProvider().copy(source, tmp_path / "missing") is None


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
class TestPosixAclProvider:
    """Tests for the POSIX mode/ownership provider."""

    @pytest.fixture
    def files(self, tmp_path):
        source = tmp_path / "source.txt"
        target = tmp_path / "target.txt"
        source.write_text("x")
        target.write_text("x")
        return source, target

    def test_equal_modes(self, files):
        source, target = files
        source.chmod(0o640)
        target.chmod(0o640)
        assert PosixAclProvider().equal(source, target)

    def test_different_modes(self, files):
        source, target = files
        source.chmod(0o600)
        target.chmod(0o644)
        assert not PosixAclProvider().equal(source, target)

    def test_missing_file_is_not_equal(self, files, tmp_path):
        source, _ = files
        assert not PosixAclProvider().equal(source, tmp_path / "missing")

    def test_copy_applies_mode(self, files):
        source, target = files
        source.chmod(0o600)
        target.chmod(0o644)

        PosixAclProvider().copy(source, target)

        assert (target.stat().st_mode & 0o777) == 0o600

    def test_copy_skips_chown_for_same_owner(self, files):
        source, target = files
        with patch("filesyncer.sync.acl.os.chown") as mock_chown:
            PosixAclProvider().copy(source, target)
        mock_chown.assert_not_called()


class TestGetAclProvider:
    """Tests for provider selection."""

    def test_selects_provider_for_platform(self):
        provider = get_acl_provider()
        if os.name == "posix":
            assert isinstance(provider, PosixAclProvider)
        else:
            assert isinstance(provider, NullAclProvider)

    def test_null_provider_on_other_platforms(self):
        with patch("filesyncer.sync.acl.os.name", "nt"):
            assert isinstance(get_acl_provider(), NullAclProvider)

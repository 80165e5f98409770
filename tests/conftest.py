"""Shared fixtures for FileSyncer tests."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from filesyncer.output import OutputFormatter


def _write_tree(root: Path, files: dict[str, bytes]) -> None:
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


def _read_tree(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def make_tree():
    """Create files (relative path -> content) below a root."""
    return _write_tree


@pytest.fixture
def read_tree():
    """Read all files below a root as relative path -> content."""
    return _read_tree


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path):
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def console():
    """A rich console writing into memory."""
    return Console(file=io.StringIO(), width=200, highlight=False)


@pytest.fixture
def output(console):
    """An output formatter writing to the in-memory console."""
    out = OutputFormatter(console=console)
    yield out
    out.close()

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import errno
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from tests.fixtures.scandir import BrokenStatEntry, ScandirProxy, sorted_listing
from tests.fixtures.trees import TreeSpec, build_tree


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeSpec], Path]:
    """Build a directory tree under tmp_path and return its root."""

    def _make(spec: TreeSpec) -> Path:
        return build_tree(tmp_path / "tree", spec)

    return _make


@pytest.fixture
def sample_tree(make_tree: Callable[[TreeSpec], Path]) -> Path:
    """a.txt (500) + b.txt (1524) + sub/c.txt (100) = 2124 bytes."""
    return make_tree(
        {
            "a.txt": 500,
            "b.txt": 1524,
            "sub": {"c.txt": 100},
        }
    )


@pytest.fixture
def deny_listing(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Make os.scandir raise PermissionError for the given directories."""
    real_scandir = os.scandir
    denied: set[str] = set()

    def fake_scandir(path: str) -> object:
        if os.fspath(path) in denied:
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _deny(path: Path) -> None:
        denied.add(os.fspath(path))

    return _deny


@pytest.fixture
def break_stat(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Make the directory-entry metadata query fail for the given paths."""
    real_scandir = os.scandir
    broken: set[str] = set()

    def fake_scandir(path: str) -> ScandirProxy:
        with real_scandir(path) as it:
            entries = [BrokenStatEntry(entry) if entry.path in broken else entry for entry in it]
        return ScandirProxy(entries)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _break(path: Path) -> None:
        broken.add(os.fspath(path))

    return _break


@pytest.fixture
def break_listing_after(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path, int], None]:
    """Make listing a directory yield ``count`` entries, then fail with EIO.

    Entries are yielded in name order, so which ones survive is predictable.
    """
    real_scandir = os.scandir
    cutoffs: dict[str, int] = {}

    def fake_scandir(path: str) -> object:
        key = os.fspath(path)
        if key not in cutoffs:
            return real_scandir(path)
        entries = sorted_listing(real_scandir, key)[: cutoffs[key]]
        return ScandirProxy(entries, OSError(errno.EIO, "Input/output error"))

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _break(path: Path, count: int) -> None:
        cutoffs[os.fspath(path)] = count

    return _break

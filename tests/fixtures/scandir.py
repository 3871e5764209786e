"""Stand-ins for os.scandir results used to simulate filesystem failures."""

from __future__ import annotations

import errno
import os
from collections.abc import Callable, Iterable, Iterator


class ScandirProxy:
    """Context manager returned in place of os.scandir's iterator.

    Yields the given entries in order, then raises ``error`` if one is set.
    """

    def __init__(self, entries: Iterable[object], error: OSError | None = None) -> None:
        self._entries = list(entries)
        self._error = error

    def __enter__(self) -> Iterator[object]:
        return self._iterate()

    def __exit__(self, *exc_info: object) -> None:
        return None

    def _iterate(self) -> Iterator[object]:
        yield from self._entries
        if self._error is not None:
            raise self._error


class BrokenStatEntry:
    """DirEntry wrapper whose metadata query always fails."""

    def __init__(self, entry: os.DirEntry[str]) -> None:
        self.name = entry.name
        self.path = entry.path

    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result:  # pyright: ignore[reportUnusedParameter]
        raise PermissionError(errno.EACCES, "Permission denied", self.path)


class HookedStatEntry:
    """DirEntry wrapper that runs a hook before delegating the metadata query."""

    def __init__(self, entry: os.DirEntry[str], hook: Callable[[], object]) -> None:
        self.name = entry.name
        self.path = entry.path
        self._entry = entry
        self._hook = hook

    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result:
        _ = self._hook()
        return self._entry.stat(follow_symlinks=follow_symlinks)


def sorted_listing(
    scandir: Callable[[str], Iterator[os.DirEntry[str]]],
    path: str,
) -> list[os.DirEntry[str]]:
    """Directory entries of path from the given scandir, sorted by name."""
    with scandir(path) as it:  # pyright: ignore[reportGeneralTypeIssues]
        return sorted(it, key=lambda entry: entry.name)

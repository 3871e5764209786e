"""Recursive size aggregation for files and directory trees.

This module computes the total on-disk size of a filesystem entry:
- Regular files contribute their byte length
- Directories contribute the sum of everything beneath them
- Symlinks, sockets, devices and fifos contribute zero (never followed)

Error handling is asymmetric. Failing to query or open the top-level path
raises the underlying ``OSError`` unchanged. Every failure beneath that
(unreadable subdirectory, failed metadata query, a listing that breaks off
part way) is absorbed as a zero contribution and only counted in the
``SizeReport``.

Work runs on a thread pool in two kinds of units: listing one directory,
and querying metadata for one chunk of a listing's entries. A directory
with more than ``ENTRY_CHUNK_SIZE`` entries has the rest of its entries
fanned out as chunks, so siblings within one level are queried
concurrently. Each unit returns a private partial result that the
coordinating thread folds into running totals. Async wrappers offload the
whole traversal with ``asyncio.to_thread``.
"""

import asyncio
import logging
import os
from collections.abc import Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from typing import Final

from dirsize.types.models import EntryKind, SizeReport, classify
from dirsize.utils.formatting import format_human_bytes

logger = logging.getLogger(__name__)

type StrPath = str | os.PathLike[str]

# Entries queried by the listing unit itself; the remainder is split into
# chunks of this size and submitted to the pool
ENTRY_CHUNK_SIZE: Final[int] = 256


@dataclass(slots=True, frozen=True)
class _Partial:
    """Private result of one unit of work."""

    total_bytes: int = 0
    files: int = 0
    skipped_entries: int = 0
    listed_directories: int = 0
    subdirectories: tuple[str, ...] = ()
    pending_chunks: tuple[tuple[os.DirEntry[str], ...], ...] = ()


@dataclass(slots=True)
class _Totals:
    """Running totals, only touched by the coordinating thread."""

    total_bytes: int = 0
    files: int = 0
    directories: int = 0
    skipped_entries: int = 0
    unreadable_directories: int = 0

    def add(self, partial: _Partial) -> None:
        self.total_bytes += partial.total_bytes
        self.files += partial.files
        self.directories += partial.listed_directories
        self.skipped_entries += partial.skipped_entries


def _stat_entries(entries: Sequence[os.DirEntry[str]]) -> _Partial:
    """Total the regular files among entries and collect subdirectories.

    A failed metadata query counts the entry as skipped; it never raises
    ``OSError``.
    """
    total_bytes = 0
    files = 0
    skipped = 0
    subdirectories: list[str] = []

    for entry in entries:
        try:
            entry_stat = entry.stat(follow_symlinks=False)
        except OSError:
            skipped += 1
            continue

        kind = classify(entry_stat.st_mode)
        if kind is EntryKind.FILE:
            total_bytes += entry_stat.st_size
            files += 1
        elif kind is EntryKind.DIRECTORY:
            subdirectories.append(entry.path)

    return _Partial(
        total_bytes=total_bytes,
        files=files,
        skipped_entries=skipped,
        subdirectories=tuple(subdirectories),
    )


def _scan_level(path: str) -> _Partial:
    """List one directory and query the first chunk of its entries.

    Subdirectories and any further chunks are returned for the caller to
    schedule, not processed here.

    Args:
        path: Directory to list

    Returns:
        Partial result for the first chunk, carrying the remaining chunks

    Raises:
        OSError: If the directory cannot be opened for listing
    """
    entries: list[os.DirEntry[str]] = []
    broken_records = 0

    with os.scandir(path) as iterator:
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                break
            except OSError:
                # The listing broke off; entries read so far still count
                broken_records = 1
                break
            entries.append(entry)

    chunk_size = ENTRY_CHUNK_SIZE
    head = _stat_entries(entries[:chunk_size])
    rest = tuple(tuple(entries[start : start + chunk_size]) for start in range(chunk_size, len(entries), chunk_size))

    return replace(
        head,
        skipped_entries=head.skipped_entries + broken_records,
        listed_directories=1,
        pending_chunks=rest,
    )


def _submit_followups(executor: ThreadPoolExecutor, partial: _Partial) -> set[Future[_Partial]]:
    futures = {executor.submit(_scan_level, subdirectory) for subdirectory in partial.subdirectories}
    futures.update(executor.submit(_stat_entries, chunk) for chunk in partial.pending_chunks)
    return futures


def _measure_directory(path: str, *, max_workers: int | None) -> SizeReport:
    """Measure a directory tree, fanning work out on a thread pool.

    The top-level listing runs on the calling thread so its ``OSError``
    propagates. A nested listing that cannot be opened makes that
    subdirectory's result absent, which counts as zero. Workers never wait
    on other futures, so any pool width finishes a tree of any depth.
    """
    root = _scan_level(path)
    totals = _Totals()
    totals.add(root)

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dirsize") as executor:
        pending = _submit_followups(executor, root)
        del root

        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                try:
                    partial = future.result()
                except OSError:
                    totals.unreadable_directories += 1
                    continue

                totals.add(partial)
                pending |= _submit_followups(executor, partial)

    return SizeReport(
        path=path,
        kind=EntryKind.DIRECTORY,
        total_bytes=totals.total_bytes,
        files=totals.files,
        directories=totals.directories,
        skipped_entries=totals.skipped_entries,
        unreadable_directories=totals.unreadable_directories,
    )


def measure(path: StrPath, *, max_workers: int | None = None) -> SizeReport:
    """Measure a file or directory tree.

    Args:
        path: Path to measure; symbolic links are never followed
        max_workers: Thread-pool width for the directory fan-out
            (None for the ``ThreadPoolExecutor`` default)

    Returns:
        SizeReport with the total size and traversal counters

    Raises:
        OSError: If ``path`` cannot be queried (missing, permission denied)
            or, for a directory, cannot be listed

    Examples:
        >>> report = measure("/var/log")
        >>> report.total_bytes >= 0
        True
    """
    path_str = os.fspath(path)
    path_stat = os.lstat(path_str)
    kind = classify(path_stat.st_mode)

    if kind is EntryKind.FILE:
        return SizeReport(path=path_str, kind=kind, total_bytes=path_stat.st_size, files=1)

    if kind is EntryKind.OTHER:
        return SizeReport(path=path_str, kind=kind, total_bytes=0)

    logger.debug("Measuring directory tree", extra={"path": path_str})
    report = _measure_directory(path_str, max_workers=max_workers)
    logger.debug(
        "Directory tree measured",
        extra={
            "path": path_str,
            "total_bytes": report.total_bytes,
            "directories": report.directories,
        },
    )
    return report


def size_in_bytes(path: StrPath, *, max_workers: int | None = None) -> int:
    """Get the size of a file, or of a directory tree recursively, in bytes.

    Raises:
        OSError: If ``path`` does not exist or cannot be queried
    """
    return measure(path, max_workers=max_workers).total_bytes


def size_in_human_bytes(path: StrPath, *, max_workers: int | None = None) -> str:
    """Get the size of a path as a human-readable string, e.g. ``2 KiB``.

    Raises:
        OSError: If ``path`` does not exist or cannot be queried
    """
    return format_human_bytes(size_in_bytes(path, max_workers=max_workers))


def size_in_abbreviated_human_bytes(path: StrPath, *, max_workers: int | None = None) -> str:
    """Get the size of a path as an abbreviated string, e.g. ``2 K``.

    Raises:
        OSError: If ``path`` does not exist or cannot be queried
    """
    return format_human_bytes(size_in_bytes(path, max_workers=max_workers), abbreviated=True)


async def measure_async(path: StrPath, *, max_workers: int | None = None) -> SizeReport:
    """Async wrapper for ``measure`` using asyncio.to_thread.

    Offloads the blocking traversal so the event loop stays responsive.
    Context variables are copied into the worker thread by asyncio.to_thread.
    """
    return await asyncio.to_thread(measure, path, max_workers=max_workers)


async def size_in_bytes_async(path: StrPath, *, max_workers: int | None = None) -> int:
    """Async wrapper for ``size_in_bytes``."""
    report = await measure_async(path, max_workers=max_workers)
    return report.total_bytes


async def size_in_human_bytes_async(path: StrPath, *, max_workers: int | None = None) -> str:
    """Async wrapper for ``size_in_human_bytes``."""
    return format_human_bytes(await size_in_bytes_async(path, max_workers=max_workers))


async def size_in_abbreviated_human_bytes_async(
    path: StrPath,
    *,
    max_workers: int | None = None,
) -> str:
    """Async wrapper for ``size_in_abbreviated_human_bytes``."""
    size = await size_in_bytes_async(path, max_workers=max_workers)
    return format_human_bytes(size, abbreviated=True)

"""Data models for dirsize.

This module defines the entry classification and the immutable measurement
result passed from the aggregator to its callers.
"""

import stat
from dataclasses import dataclass
from enum import StrEnum

from dirsize.utils.formatting import format_human_bytes


class EntryKind(StrEnum):
    """Classification of a filesystem entry, determined without following symlinks."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"  # symlinks, sockets, devices, fifos


def classify(mode: int) -> EntryKind:
    """Classify an entry from its ``st_mode``.

    Args:
        mode: Mode bits from an ``lstat``-style query

    Returns:
        The entry kind
    """
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


@dataclass(slots=True, frozen=True)
class SizeReport:
    """Immutable result of measuring one top-level path.

    ``skipped_entries`` and ``unreadable_directories`` count the failures
    absorbed beneath the top-level path. Each of them contributed zero
    bytes to ``total_bytes``.
    """

    path: str
    kind: EntryKind
    total_bytes: int
    files: int = 0
    directories: int = 0
    skipped_entries: int = 0
    unreadable_directories: int = 0

    @property
    def complete(self) -> bool:
        """True when no entry beneath the path had to be skipped."""
        return self.skipped_entries == 0 and self.unreadable_directories == 0

    def human(self, abbreviated: bool = False) -> str:
        """Format ``total_bytes`` as a human-readable string."""
        return format_human_bytes(self.total_bytes, abbreviated)

"""Type definitions for dirsize."""

from dirsize.types.models import EntryKind, SizeReport, classify

__all__ = [
    "EntryKind",
    "SizeReport",
    "classify",
]

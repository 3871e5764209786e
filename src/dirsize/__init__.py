"""dirsize - Total on-disk size of files and directory trees.

This package measures a single file or, recursively and in parallel, an
entire directory tree, and renders the result with binary (1024-based)
unit prefixes.
"""

from dirsize.core.aggregator import (
    measure,
    measure_async,
    size_in_abbreviated_human_bytes,
    size_in_abbreviated_human_bytes_async,
    size_in_bytes,
    size_in_bytes_async,
    size_in_human_bytes,
    size_in_human_bytes_async,
)
from dirsize.types.models import EntryKind, SizeReport
from dirsize.utils.formatting import format_human_bytes

__all__ = [
    "EntryKind",
    "SizeReport",
    "format_human_bytes",
    "measure",
    "measure_async",
    "size_in_abbreviated_human_bytes",
    "size_in_abbreviated_human_bytes_async",
    "size_in_bytes",
    "size_in_bytes_async",
    "size_in_human_bytes",
    "size_in_human_bytes_async",
]

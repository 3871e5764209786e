"""Shared utility modules.

This package provides pure byte-count formatting and logging setup.
"""

from dirsize.utils.formatting import (
    EXBIBYTE_UNIT,
    UNIT_TABLE,
    ByteUnit,
    format_human_bytes,
    select_unit,
)

__all__ = [
    "EXBIBYTE_UNIT",
    "UNIT_TABLE",
    "ByteUnit",
    "format_human_bytes",
    "select_unit",
]

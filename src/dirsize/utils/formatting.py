"""Pure formatting utilities for human-readable byte counts.

This module converts raw byte counts into unit-scaled strings using binary
(1024-based) prefixes. All functions are pure with no side effects.

The unit ranges are kept as a declarative table so that every label
transition happens exactly at a power of 1024.
"""

from dataclasses import dataclass
from typing import Final

# Binary unit constants (1024-based)
KIBIBYTE: Final[int] = 1 << 10
MEBIBYTE: Final[int] = 1 << 20
GIBIBYTE: Final[int] = 1 << 30
TEBIBYTE: Final[int] = 1 << 40
PEBIBYTE: Final[int] = 1 << 50
EXBIBYTE: Final[int] = 1 << 60


@dataclass(slots=True, frozen=True)
class ByteUnit:
    """One row of the unit table.

    A size in ``[lower, upper)`` is divided by ``lower`` and labelled with
    either the abbreviated or the full label.
    """

    lower: int
    upper: int
    abbreviated: str
    full: str

    def label(self, *, abbreviated: bool) -> str:
        """Return the label for the requested form."""
        return self.abbreviated if abbreviated else self.full


UNIT_TABLE: Final[tuple[ByteUnit, ...]] = (
    ByteUnit(1, KIBIBYTE, "B", "Bytes"),
    ByteUnit(KIBIBYTE, MEBIBYTE, "K", "KiB"),
    ByteUnit(MEBIBYTE, GIBIBYTE, "M", "MiB"),
    ByteUnit(GIBIBYTE, TEBIBYTE, "G", "GiB"),
    ByteUnit(TEBIBYTE, PEBIBYTE, "T", "TiB"),
    ByteUnit(PEBIBYTE, EXBIBYTE, "P", "PiB"),
)

# Anything at or above 1 EiB; there is no larger unit.
EXBIBYTE_UNIT: Final[ByteUnit] = ByteUnit(EXBIBYTE, EXBIBYTE, "E", "EiB")


def select_unit(size: int) -> ByteUnit:
    """Return the unit a size is labelled with.

    Args:
        size: Non-negative byte count

    Returns:
        First table row whose upper bound exceeds ``size``, or the EiB unit
    """
    for unit in UNIT_TABLE:
        if size < unit.upper:
            return unit
    return EXBIBYTE_UNIT


def format_human_bytes(size: int, abbreviated: bool = False) -> str:
    """Convert a byte count to a human-readable size string.

    The quotient is truncated toward zero, so no fractional values are ever
    produced: any size in ``[1 MiB, 2 MiB)`` formats as ``1 MiB``.

    Args:
        size: Number of bytes to format (must be non-negative)
        abbreviated: Use single-letter labels (``K``, ``M``, ...) instead of
            ``KiB``, ``MiB``, ...

    Returns:
        ``"<integer> <label>"`` with a single space between the two parts.

    Raises:
        ValueError: If ``size`` is negative

    Examples:
        >>> format_human_bytes(1023)
        '1023 Bytes'
        >>> format_human_bytes(1024)
        '1 KiB'
        >>> format_human_bytes(1048575, abbreviated=True)
        '1023 K'
        >>> format_human_bytes(3 * 1024**6)
        '3 EiB'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    unit = select_unit(size)
    return f"{size // unit.lower} {unit.label(abbreviated=abbreviated)}"

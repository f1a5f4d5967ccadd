"""Locale-independent byte classification.

Printability is decided by a fixed ASCII table rather than the C library's
locale-aware ``isprint``, so a given input always encodes the same way.
"""

from typing import Tuple

# Visible ASCII characters, space included
PRINTABLE_START = 0x20
PRINTABLE_END = 0x7E

LINE_FEED = 0x0A

PRINTABLE_TABLE: Tuple[bool, ...] = tuple(
    PRINTABLE_START <= code <= PRINTABLE_END for code in range(256)
)


def is_printable(byte: int) -> bool:
    """Check if a byte value is a printable ASCII character.

    Control characters, DEL and every byte >= 0x80 are non-printable.

    Args:
        byte: Byte value in 0..255

    Returns:
        True if the byte is in the visible ASCII range
    """
    return PRINTABLE_TABLE[byte]

"""
Tape Checksum Calculation
=========================

This module computes the 16-bit checksum stored in the footer of a
Radio-86RK tape container (.rk file).

Algorithm
---------
The checksum is the one the monitor ROM's tape loader verifies, so its
layout is fixed by existing hardware and emulators:

- Start with a 16-bit accumulator of 0; all arithmetic wraps at 0x10000
- Every byte except the last is added twice: once as-is and once
  shifted left by 8, so it feeds both halves of the sum
- The last byte is added to the low half only; the high byte of the
  accumulator is left as it was

    >>> hex(calculate_tape_checksum(bytes([0x01, 0x02, 0x03])))
    '0x306'

The last-byte asymmetry is part of the format and must be kept.

An empty payload has no last byte and is rejected with InvalidInputError.
"""

import logging
from typing import Final

from rkdisk.errors import InvalidInputError

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

CHECKSUM_INITIAL: Final[int] = 0x0000
CHECKSUM_MASK: Final[int] = 0xFFFF


# =============================================================================
# Checksum Functions
# =============================================================================

def add_to_checksum(checksum: int, data: bytes) -> int:
    """
    Add bytes to a running checksum using the non-final byte rule.

    Each byte contributes to both the low and the high half of the sum.
    Use finish_checksum() to fold in the last byte of a payload.

    Args:
        checksum: Current 16-bit accumulator value
        data: Bytes to add (none of them may be the payload's last byte)

    Returns:
        Updated 16-bit accumulator
    """
    for byte in data:
        checksum = (checksum + byte + (byte << 8)) & CHECKSUM_MASK
    return checksum


def finish_checksum(checksum: int, last_byte: int) -> int:
    """Fold the payload's last byte into the low half of the accumulator."""
    return (checksum & 0xFF00) | ((checksum + last_byte) & 0xFF)


def calculate_tape_checksum(payload: bytes) -> int:
    """
    Calculate the tape container checksum of a payload.

    Args:
        payload: The file body that will sit between header and footer

    Returns:
        16-bit checksum value (0x0000 - 0xFFFF)

    Raises:
        InvalidInputError: If the payload is empty

    Example:
        >>> checksum = calculate_tape_checksum(Path("game.bin").read_bytes())
        >>> print(f"Checksum: {checksum:04X}")
    """
    if len(payload) == 0:
        raise InvalidInputError("cannot checksum an empty payload")

    checksum = add_to_checksum(CHECKSUM_INITIAL, payload[:-1])
    checksum = finish_checksum(checksum, payload[-1])
    logger.debug("Tape checksum of %d bytes: %04X", len(payload), checksum)
    return checksum


# =============================================================================
# Incremental Accumulator
# =============================================================================

class TapeChecksum:
    """
    Incremental tape checksum for payloads that arrive in chunks.

    The last byte seen is always held back, because it is only known to
    be the final byte once digest() is called.

    Example:
        >>> acc = TapeChecksum()
        >>> acc.update(b"\\x01\\x02")
        >>> acc.update(b"\\x03")
        >>> hex(acc.digest())
        '0x306'
    """

    def __init__(self) -> None:
        self._checksum = CHECKSUM_INITIAL
        self._pending: int | None = None
        self._length = 0

    @property
    def length(self) -> int:
        """Number of bytes fed so far."""
        return self._length

    def update(self, data: bytes) -> None:
        """Feed the next chunk of the payload."""
        if not data:
            return
        if self._pending is not None:
            self._checksum = add_to_checksum(self._checksum, bytes([self._pending]))
        self._checksum = add_to_checksum(self._checksum, data[:-1])
        self._pending = data[-1]
        self._length += len(data)

    def digest(self) -> int:
        """
        Return the checksum of everything fed so far.

        Raises:
            InvalidInputError: If no bytes have been fed
        """
        if self._pending is None:
            raise InvalidInputError("cannot checksum an empty payload")
        return finish_checksum(self._checksum, self._pending)

"""
rkdisk Error Hierarchy
======================

This module defines the exception hierarchy for the rkdisk tools.
All exceptions inherit from RkDiskError, allowing callers to catch all
tool-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
RkDiskError (base)
├── InvalidInputError - payload, address or option value rejected
└── TapeWriteError - output file could not be written

Both concrete errors also derive from the matching builtin (ValueError,
OSError) so code that does not know about rkdisk still handles them
sensibly.

The text transcoder never raises: it is defined for every byte value.
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# Base Exception Class
# =============================================================================

class RkDiskError(Exception):
    """
    Base exception for all rkdisk errors.

        try:
            write_tape_file("game.rk", payload, 0x0000)
        except RkDiskError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Input Validation
# =============================================================================

class InvalidInputError(RkDiskError, ValueError):
    """
    Input rejected before any work was done.

    Raised when:
    - An empty payload is checksummed or wrapped into a tape container
    - A load address is not a 16-bit value
    - A code page or line ending name is not recognised

    This is a local condition. The caller should report it to the user
    and not retry.
    """
    pass


# =============================================================================
# Output Errors
# =============================================================================

class TapeWriteError(RkDiskError, OSError):
    """
    Output file could not be opened or fully written.

    The destination is never left holding a partial file: the write goes
    to a temporary file which is only renamed over the target once it is
    complete.

    Attributes:
        path: The destination that was being written
        reason: Description of the underlying failure
    """

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"cannot write '{self.path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]

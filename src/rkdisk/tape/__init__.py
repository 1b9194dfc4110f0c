"""
Tape Container Handling for Radio-86RK
======================================

This module turns raw file bodies into tape containers (.rk files), the
format read by the Radio-86RK monitor's tape loader and by emulators.

This module provides:
- **calculate_tape_checksum**: The loader's 16-bit checksum
- **TapeChecksum**: Incremental form of the same checksum
- **encode_tape**: Header + payload + footer framing
- **write_tape_file**: Encode and write atomically to disk

Quick Start
-----------
    >>> from rkdisk.tape import encode_tape
    >>> rk_data = encode_tape(body, load_address=0x0000)

Only encoding is supported; reading .rk files back is not.
"""

# =============================================================================
# Public API Exports
# =============================================================================

from rkdisk.tape.checksum import (
    CHECKSUM_INITIAL,
    CHECKSUM_MASK,
    TapeChecksum,
    add_to_checksum,
    calculate_tape_checksum,
    finish_checksum,
)

from rkdisk.tape.encoder import (
    MAX_PAYLOAD_SIZE,
    TAPE_FOOTER_SIZE,
    TAPE_HEADER_SIZE,
    TAPE_OVERHEAD,
    TAPE_SYNC_BYTE,
    TapeContainer,
    TapeFooter,
    TapeHeader,
    build_tape,
    default_file_mode,
    encode_tape,
    validate_load_address,
    write_atomic,
    write_stream,
    write_tape_file,
)

__all__ = [
    # Checksum
    "CHECKSUM_INITIAL",
    "CHECKSUM_MASK",
    "TapeChecksum",
    "add_to_checksum",
    "calculate_tape_checksum",
    "finish_checksum",
    # Encoder
    "MAX_PAYLOAD_SIZE",
    "TAPE_FOOTER_SIZE",
    "TAPE_HEADER_SIZE",
    "TAPE_OVERHEAD",
    "TAPE_SYNC_BYTE",
    "TapeContainer",
    "TapeFooter",
    "TapeHeader",
    "build_tape",
    "default_file_mode",
    "encode_tape",
    "validate_load_address",
    "write_atomic",
    "write_stream",
    "write_tape_file",
]

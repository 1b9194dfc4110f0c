"""
rkdisk - File Conversion Tools for Radio-86RK Disk Images
=========================================================

This package provides the conversions applied to files moving between a
host computer and a Radio-86RK (RK-DOS) disk image.

Main Components
---------------
- **tape**: Tape container encoding (.rk files)
    Wraps a raw file body with load/end address header and checksum footer

- **text**: Native text conversion
    Converts the machine's 7-bit Cyrillic character set to KOI8-R,
    Windows-1251 or UTF-8

- **names**: Host name and address helpers
    Disk-safe file names and hexadecimal load addresses

Quick Start
-----------
Create a tape file:
    >>> from rkdisk.tape import write_tape_file
    >>> write_tape_file("game.rk", Path("game.bin").read_bytes(), 0x0000)

Convert a text file:
    >>> from rkdisk.text import transcode, CodePage, LineEnding
    >>> text = transcode(native_bytes, CodePage.UTF8, LineEnding.LF)

Or use the command-line tool:
    $ rktool tape game.bin -a 0000
    $ rktool text readme.doc -c utf-8

Disk image access itself (directories, sectors, free space) lives outside
this package.
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from rkdisk.errors import (
    RkDiskError,
    InvalidInputError,
    TapeWriteError,
)

from rkdisk.tape import (
    TapeChecksum,
    TapeContainer,
    TapeFooter,
    TapeHeader,
    build_tape,
    calculate_tape_checksum,
    encode_tape,
    write_atomic,
    write_tape_file,
)

from rkdisk.text import (
    CodePage,
    LineEnding,
    transcode,
)

from rkdisk.names import (
    make_rk_filename,
    parse_load_address,
)

from rkdisk.config import RkConfig

__all__ = [
    "__version__",
    # Errors
    "RkDiskError",
    "InvalidInputError",
    "TapeWriteError",
    # Tape
    "TapeChecksum",
    "TapeContainer",
    "TapeFooter",
    "TapeHeader",
    "build_tape",
    "calculate_tape_checksum",
    "encode_tape",
    "write_atomic",
    "write_tape_file",
    # Text
    "CodePage",
    "LineEnding",
    "transcode",
    # Names
    "make_rk_filename",
    "parse_load_address",
    # Configuration
    "RkConfig",
]

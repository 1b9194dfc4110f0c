"""
Tape Container Encoder
======================

This module wraps a raw payload into a Radio-86RK tape container, the
format loaded by the monitor's tape reader and by emulators (.rk files).

Container Layout
----------------
All multi-byte fields are big-endian (high byte first):

    Offset  Size  Field
    ------  ----  -----
    0       2     Load address
    2       2     End address (load + length - 1, wraps at 0x10000)
    4       N     Payload
    4+N     2     0x00 0x00
    6+N     1     Sync byte 0xE6
    7+N     2     Checksum (see rkdisk.tape.checksum)

Total size is N + 9 bytes. There is no padding or alignment.

If the payload runs past 0xFFFF the end address silently wraps. Existing
loaders expect exactly that, so it is not treated as an error.

Writing
-------
write_tape_file() never leaves a truncated container behind. Data goes to
a temporary file in the destination directory and is renamed over the
target only after it has been fully written and flushed. An already open
binary stream is written directly; the caller owns it and its cleanup.

Usage
-----
    >>> from rkdisk.tape import encode_tape, write_tape_file
    >>> data = encode_tape(Path("game.bin").read_bytes(), 0x0000)
    >>> write_tape_file("game.rk", Path("game.bin").read_bytes(), 0x0000)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Final, Union
import logging
import os
import struct
import tempfile

from rkdisk.errors import InvalidInputError, TapeWriteError
from rkdisk.tape.checksum import calculate_tape_checksum

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

TAPE_HEADER_SIZE: Final[int] = 4
TAPE_FOOTER_SIZE: Final[int] = 5
TAPE_OVERHEAD: Final[int] = TAPE_HEADER_SIZE + TAPE_FOOTER_SIZE

TAPE_SYNC_BYTE: Final[int] = 0xE6

ADDRESS_MASK: Final[int] = 0xFFFF
MAX_PAYLOAD_SIZE: Final[int] = 0x10000 - 1


# =============================================================================
# Header and Footer Records
# =============================================================================

@dataclass(frozen=True)
class TapeHeader:
    """
    The 4-byte container header.

    Attributes:
        load_address: Where the monitor loads the first payload byte
        end_address: Address of the last payload byte (16-bit wrapped)
    """
    load_address: int
    end_address: int

    @classmethod
    def for_payload(cls, load_address: int, length: int) -> "TapeHeader":
        """Build the header for a payload of `length` bytes at `load_address`."""
        end_address = (load_address + length - 1) & ADDRESS_MASK
        return cls(load_address=load_address, end_address=end_address)

    def to_bytes(self) -> bytes:
        """Serialize as load address then end address, big-endian."""
        return struct.pack(">HH", self.load_address, self.end_address)


@dataclass(frozen=True)
class TapeFooter:
    """
    The 5-byte container footer: two zero bytes, sync byte, checksum.

    Attributes:
        checksum: 16-bit tape checksum of the payload
    """
    checksum: int

    def to_bytes(self) -> bytes:
        """Serialize as 00 00 E6 followed by the big-endian checksum."""
        return struct.pack(">BBBH", 0x00, 0x00, TAPE_SYNC_BYTE, self.checksum)


# =============================================================================
# Encoding
# =============================================================================

def validate_load_address(load_address: int) -> int:
    """
    Check that a load address fits in 16 bits.

    Raises:
        InvalidInputError: If the address is negative or above 0xFFFF
    """
    if not 0 <= load_address <= ADDRESS_MASK:
        raise InvalidInputError(
            f"load address {load_address:#x} is outside 0x0000-0xFFFF"
        )
    return load_address


@dataclass(frozen=True)
class TapeContainer:
    """
    A complete tape container: header, payload and footer.

    Attributes:
        header: Load and end addresses
        payload: The file body
        footer: Sync byte and checksum
    """
    header: TapeHeader
    payload: bytes
    footer: TapeFooter

    def to_bytes(self) -> bytes:
        """Serialize as header + payload + footer."""
        result = bytearray()
        result.extend(self.header.to_bytes())
        result.extend(self.payload)
        result.extend(self.footer.to_bytes())
        return bytes(result)


def build_tape(payload: bytes, load_address: int) -> TapeContainer:
    """
    Validate a payload and build its tape container.

    Args:
        payload: Raw file body (1 to 65535 bytes)
        load_address: 16-bit address the payload is loaded at

    Returns:
        TapeContainer holding the header and footer for the payload

    Raises:
        InvalidInputError: If the payload is empty or too large, or the
            load address does not fit in 16 bits
    """
    if len(payload) == 0:
        raise InvalidInputError("cannot create a tape file from an empty payload")
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise InvalidInputError(
            f"payload of {len(payload)} bytes exceeds {MAX_PAYLOAD_SIZE} bytes"
        )
    validate_load_address(load_address)

    header = TapeHeader.for_payload(load_address, len(payload))
    footer = TapeFooter(checksum=calculate_tape_checksum(payload))

    logger.debug(
        "Tape container: load=%04X end=%04X size=%d checksum=%04X",
        header.load_address, header.end_address, len(payload), footer.checksum,
    )
    return TapeContainer(header=header, payload=bytes(payload), footer=footer)


def encode_tape(payload: bytes, load_address: int) -> bytes:
    """
    Wrap a payload into a tape container.

    Args:
        payload: Raw file body (1 to 65535 bytes)
        load_address: 16-bit address the payload is loaded at

    Returns:
        Header + payload + footer, len(payload) + 9 bytes

    Raises:
        InvalidInputError: If the payload is empty or too large, or the
            load address does not fit in 16 bits

    Example:
        >>> encode_tape(bytes([0x01, 0x02, 0x03]), 0x0000).hex(" ")
        '00 00 00 02 01 02 03 00 00 e6 03 06'
    """
    return build_tape(payload, load_address).to_bytes()


# =============================================================================
# File Output
# =============================================================================

def default_file_mode() -> int:
    """Mode for newly created files: 0666 less the process umask."""
    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(filepath: Union[str, Path], data: bytes) -> int:
    """
    Write bytes to a file so that readers see either the old file or the
    complete new one, never a partial write.

    A new file gets the usual umask-derived mode; an existing file keeps
    its mode.

    Args:
        filepath: Destination path
        data: Complete file contents

    Returns:
        Number of bytes written

    Raises:
        TapeWriteError: If the temporary file cannot be created, written
            or renamed. The destination is left untouched.
    """
    filepath = Path(filepath)
    directory = filepath.parent

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{filepath.name}.", suffix=".tmp", dir=directory
        )
    except OSError as e:
        raise TapeWriteError(filepath, e.strerror or str(e)) from e

    tmp_path = Path(tmp_name)
    logger.debug("Writing %d bytes to %s via %s", len(data), filepath, tmp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600 files
        if filepath.exists():
            mode = filepath.stat().st_mode & 0o777
        else:
            mode = default_file_mode()
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, filepath)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise TapeWriteError(filepath, e.strerror or str(e)) from e

    return len(data)


def write_stream(stream: BinaryIO, data: bytes) -> int:
    """
    Write bytes to an already open binary stream.

    Streams cannot be published atomically; the caller owns the stream
    and decides what to do with it after a failure.

    Raises:
        TapeWriteError: If the stream raises or accepts fewer bytes than given
    """
    name = getattr(stream, "name", "<stream>")
    try:
        written = stream.write(data)
        stream.flush()
    except OSError as e:
        raise TapeWriteError(str(name), e.strerror or str(e)) from e

    # Raw streams may report a short write; buffered ones return None or len
    if written is not None and written != len(data):
        raise TapeWriteError(
            str(name), f"short write ({written} of {len(data)} bytes)"
        )
    return len(data)


def write_tape_file(
    sink: Union[str, Path, BinaryIO],
    payload: bytes,
    load_address: int,
) -> int:
    """
    Encode a payload and write the tape container to a file or stream.

    The payload is validated before anything is written, so an empty
    payload never creates, replaces or writes to anything. Paths are
    written atomically; open binary streams are written directly.

    Args:
        sink: Output .rk path, or a binary stream opened for writing
        payload: Raw file body
        load_address: 16-bit load address

    Returns:
        Number of bytes written

    Raises:
        InvalidInputError: If the payload or address is rejected
        TapeWriteError: If the output cannot be written

    Example:
        >>> bytes_written = write_tape_file("game.rk", body, 0x0000)
        >>> print(f"Wrote {bytes_written} bytes")
    """
    data = encode_tape(payload, load_address)
    if isinstance(sink, (str, Path)):
        return write_atomic(sink, data)
    return write_stream(sink, data)

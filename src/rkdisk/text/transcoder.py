"""
Native Text Transcoder
======================

Converts text files stored in the Radio-86RK character set into a host
encoding when they are extracted from a disk image.

Byte Rules
----------
Each input byte produces zero, one or two output bytes, in input order:

    Input           Output
    -----           ------
    0x0D            line ending (LF or CR LF)
    0xFF            dropped (end-of-file filler)
    0x60-0x7E       Cyrillic letter in the target code page
    anything else   copied unchanged

The transcoder is defined for every byte value and never raises.

Usage
-----
    >>> from rkdisk.text import transcode, CodePage, LineEnding
    >>> transcode(b"\\x70\\x71\\r", CodePage.UTF8, LineEnding.LF).decode("utf-8")
    'ПЯ\\n'
"""

import logging
from typing import Final

from rkdisk.text.codepage import CodePage, LineEnding, translate_koi8

logger = logging.getLogger(__name__)


NATIVE_CR: Final[int] = 0x0D
NATIVE_FILLER: Final[int] = 0xFF

# Native Cyrillic band and the offset that maps it onto KOI8-R
CYRILLIC_FIRST: Final[int] = 0x60
CYRILLIC_LAST: Final[int] = 0x7E
KOI8_SHIFT: Final[int] = 0x80


def _build_byte_map(target: CodePage, line_ending: LineEnding) -> tuple[bytes, ...]:
    """Output bytes for every possible input byte."""
    byte_map = []
    for byte in range(256):
        if byte == NATIVE_CR:
            byte_map.append(line_ending.value)
        elif byte == NATIVE_FILLER:
            byte_map.append(b"")
        elif CYRILLIC_FIRST <= byte <= CYRILLIC_LAST:
            byte_map.append(translate_koi8(byte + KOI8_SHIFT, target))
        else:
            byte_map.append(bytes([byte]))
    return tuple(byte_map)


_BYTE_MAPS: Final[dict[tuple[CodePage, LineEnding], tuple[bytes, ...]]] = {
    (target, line_ending): _build_byte_map(target, line_ending)
    for target in CodePage
    for line_ending in LineEnding
}


def transcode(source: bytes, target: CodePage, line_ending: LineEnding) -> bytes:
    """
    Convert native text to the target code page.

    Args:
        source: Text in the Radio-86RK character set
        target: Output code page
        line_ending: What to emit for each native carriage return (0x0D)

    Returns:
        Converted text. The output is never more than twice the input
        length, and is shorter only where 0xFF filler bytes were dropped.

    Example:
        >>> transcode(b"\\x61", CodePage.KOI8, LineEnding.LF)
        b'\\xe1'
    """
    byte_map = _BYTE_MAPS[(target, line_ending)]
    result = b"".join(byte_map[byte] for byte in source)
    logger.debug(
        "Transcoded %d bytes to %d bytes (%s, %s)",
        len(source), len(result), target.name, line_ending.name,
    )
    return result

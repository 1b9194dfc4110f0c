"""
Code Pages and Translation Tables
=================================

The Radio-86RK stores text in a 7-bit character set. Codes below 0x60
are ASCII (upper case Latin, digits, punctuation); codes 0x60-0x7E hold
the 31 upper case Cyrillic letters in KOI-7 N2 order. Adding 0x80 to
such a code gives the KOI8-R byte for the same letter, which is also
the index base for the tables below.

Output Code Pages
-----------------
- **KOI8**: KOI8-R, shift only, no table
- **WIN1251**: Windows-1251, one byte per letter
- **UTF8**: UTF-8, two bytes per letter (all are in U+0410-U+042F)

The tables are indexed by ``koi8_byte - 0xE0`` for KOI8-R bytes 0xE0-0xFE.
They are module-level tuples and never change.
"""

import os
from enum import Enum
from typing import Final

from rkdisk.errors import InvalidInputError


# =============================================================================
# Enums
# =============================================================================

class CodePage(Enum):
    """
    Output text encodings for extracted text files.

    Names are matched case-insensitively by from_name(), which accepts the
    spellings used by the original command line (KOI8-R, CP1251, UTF-8)
    as well as common aliases.
    """
    KOI8 = "koi8-r"
    WIN1251 = "cp1251"
    UTF8 = "utf-8"

    @property
    def python_codec(self) -> str:
        """Name of the equivalent Python codec."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "CodePage":
        """
        Look up a code page by name, ignoring case.

        Raises:
            InvalidInputError: If the name is not recognised
        """
        key = name.strip().lower()
        if key in _CODEPAGE_ALIASES:
            return _CODEPAGE_ALIASES[key]
        raise InvalidInputError(
            f"unknown code page '{name}'. "
            f"Choose from: {', '.join(CODEPAGE_NAMES)}"
        )


class LineEnding(Enum):
    """Line terminator written for each native carriage return."""
    LF = b"\n"
    CRLF = b"\r\n"

    @classmethod
    def from_name(cls, name: str) -> "LineEnding":
        """
        Look up a line ending by name (lf or crlf), ignoring case.

        Raises:
            InvalidInputError: If the name is not recognised
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InvalidInputError(
                f"unknown line ending '{name}'. Choose from: lf, crlf"
            ) from None

    @classmethod
    def native(cls) -> "LineEnding":
        """The host platform's convention."""
        return cls.CRLF if os.name == "nt" else cls.LF


# Names shown in help text, in the original tool's spelling
CODEPAGE_NAMES: Final[tuple[str, ...]] = ("KOI8-R", "CP1251", "UTF-8")

_CODEPAGE_ALIASES: Final[dict[str, CodePage]] = {
    "koi8-r": CodePage.KOI8,
    "koi8r": CodePage.KOI8,
    "koi8": CodePage.KOI8,
    "cp1251": CodePage.WIN1251,
    "win1251": CodePage.WIN1251,
    "windows-1251": CodePage.WIN1251,
    "utf-8": CodePage.UTF8,
    "utf8": CodePage.UTF8,
}


# =============================================================================
# Translation Tables
# =============================================================================

# First KOI8-R byte covered by the tables, and number of entries
TABLE_BASE: Final[int] = 0xE0
TABLE_SIZE: Final[int] = 31

# KOI8-R 0xE0-0xFE -> Windows-1251
KOI8_TO_WIN1251: Final[tuple[int, ...]] = (
    0xDE, 0xC0, 0xC1, 0xD6, 0xC4, 0xC5, 0xD4, 0xC3,   # Ю А Б Ц Д Е Ф Г
    0xD5, 0xC8, 0xC9, 0xCA, 0xCB, 0xCC, 0xCD, 0xCE,   # Х И Й К Л М Н О
    0xCF, 0xDF, 0xD0, 0xD1, 0xD2, 0xD3, 0xC6, 0xC2,   # П Я Р С Т У Ж В
    0xDC, 0xDB, 0xC7, 0xD8, 0xDD, 0xD9, 0xD7,         # Ь Ы З Ш Э Щ Ч
)

# KOI8-R 0xE0-0xFE -> UTF-8, two bytes packed high byte first
KOI8_TO_UTF8: Final[tuple[int, ...]] = (
    0xD0AE, 0xD090, 0xD091, 0xD0A6, 0xD094, 0xD095, 0xD0A4, 0xD093,
    0xD0A5, 0xD098, 0xD099, 0xD09A, 0xD09B, 0xD09C, 0xD09D, 0xD09E,
    0xD09F, 0xD0AF, 0xD0A0, 0xD0A1, 0xD0A2, 0xD0A3, 0xD096, 0xD092,
    0xD0AC, 0xD0AB, 0xD097, 0xD0A8, 0xD0AD, 0xD0A9, 0xD0A7,
)

assert len(KOI8_TO_WIN1251) == TABLE_SIZE
assert len(KOI8_TO_UTF8) == TABLE_SIZE


def _unpack_utf8(value: int) -> bytes:
    if value & 0xFF00:
        return bytes([value >> 8, value & 0xFF])
    return bytes([value])


# Per-code-page byte strings, built once from the tables above
TRANSLATIONS: Final[dict[CodePage, tuple[bytes, ...]]] = {
    CodePage.KOI8: tuple(bytes([TABLE_BASE + i]) for i in range(TABLE_SIZE)),
    CodePage.WIN1251: tuple(bytes([b]) for b in KOI8_TO_WIN1251),
    CodePage.UTF8: tuple(_unpack_utf8(v) for v in KOI8_TO_UTF8),
}


def translate_koi8(koi8_byte: int, target: CodePage) -> bytes:
    """
    Translate one KOI8-R Cyrillic byte (0xE0-0xFE) into the target code page.

    Passing a byte outside 0xE0-0xFE is a programming error.
    """
    index = koi8_byte - TABLE_BASE
    assert 0 <= index < TABLE_SIZE, f"byte {koi8_byte:#04x} outside translation table"
    return TRANSLATIONS[target][index]

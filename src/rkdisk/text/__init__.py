"""
Native Text Conversion
======================

Converts Radio-86RK text files into host encodings (KOI8-R, Windows-1251
or UTF-8) with an explicit choice of line ending.

    >>> from rkdisk.text import transcode, CodePage, LineEnding
    >>> host_text = transcode(native_text, CodePage.UTF8, LineEnding.LF)
"""

from rkdisk.text.codepage import (
    CODEPAGE_NAMES,
    KOI8_TO_UTF8,
    KOI8_TO_WIN1251,
    TABLE_BASE,
    TABLE_SIZE,
    CodePage,
    LineEnding,
    translate_koi8,
)
from rkdisk.text.transcoder import transcode

__all__ = [
    "CODEPAGE_NAMES",
    "KOI8_TO_UTF8",
    "KOI8_TO_WIN1251",
    "TABLE_BASE",
    "TABLE_SIZE",
    "CodePage",
    "LineEnding",
    "translate_koi8",
    "transcode",
]

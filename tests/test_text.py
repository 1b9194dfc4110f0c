"""
Text Module Unit Tests
======================

Tests for native text conversion.

Test Categories
---------------
1. Tables: Size and agreement with Python's own codecs
2. Transcoder: Per-byte rules for every code page
3. Names: Code page and line ending lookup
"""

import pytest

from rkdisk.errors import InvalidInputError
from rkdisk.text import (
    KOI8_TO_UTF8,
    KOI8_TO_WIN1251,
    TABLE_SIZE,
    CodePage,
    LineEnding,
    transcode,
    translate_koi8,
)


CYRILLIC_BAND = range(0x60, 0x7F)
PASSTHROUGH_BYTES = [b for b in range(256) if b not in CYRILLIC_BAND and b not in (0x0D, 0xFF)]


# =============================================================================
# Table Tests
# =============================================================================

class TestTranslationTables:
    """Tests for the KOI8-R translation tables."""

    def test_tables_cover_31_letters(self):
        assert TABLE_SIZE == 31
        assert len(KOI8_TO_WIN1251) == 31
        assert len(KOI8_TO_UTF8) == 31

    def test_win1251_table_matches_codec(self):
        for index, value in enumerate(KOI8_TO_WIN1251):
            letter = bytes([0xE0 + index]).decode("koi8-r")
            assert bytes([value]) == letter.encode("cp1251"), letter

    def test_utf8_table_matches_codec(self):
        for index, value in enumerate(KOI8_TO_UTF8):
            letter = bytes([0xE0 + index]).decode("koi8-r")
            assert value.to_bytes(2, "big") == letter.encode("utf-8"), letter

    def test_translate_koi8(self):
        assert translate_koi8(0xE1, CodePage.KOI8) == b"\xe1"
        assert translate_koi8(0xE1, CodePage.WIN1251) == b"\xc0"
        assert translate_koi8(0xE1, CodePage.UTF8) == "А".encode("utf-8")

    @pytest.mark.parametrize("byte", [0xDF, 0xFF])
    def test_translate_outside_table_is_a_bug(self, byte):
        with pytest.raises(AssertionError):
            translate_koi8(byte, CodePage.UTF8)


# =============================================================================
# Transcoder Tests
# =============================================================================

class TestTranscode:
    """Tests for transcode()."""

    def test_koi8_ascii_unchanged(self):
        assert transcode(b"\x41", CodePage.KOI8, LineEnding.LF) == b"\x41"

    def test_koi8_shift_only(self):
        assert transcode(b"\x61", CodePage.KOI8, LineEnding.LF) == b"\xe1"

    @pytest.mark.parametrize("byte", CYRILLIC_BAND)
    def test_cyrillic_band(self, byte):
        """Every native letter agrees with the KOI8-R reading of byte + 0x80."""
        koi8 = bytes([byte + 0x80])
        letter = koi8.decode("koi8-r")
        source = bytes([byte])

        assert transcode(source, CodePage.KOI8, LineEnding.LF) == koi8
        assert transcode(source, CodePage.WIN1251, LineEnding.LF) == letter.encode("cp1251")
        assert transcode(source, CodePage.UTF8, LineEnding.LF) == letter.encode("utf-8")

    def test_utf8_output_is_two_bytes_high_first(self):
        """0x61 shifts to E1 (index 1), the letter А, U+0410 = D0 90."""
        assert transcode(b"\x61", CodePage.UTF8, LineEnding.LF) == b"\xd0\x90"

    def test_line_ending_lf(self):
        assert transcode(b"\x0d", CodePage.UTF8, LineEnding.LF) == b"\x0a"

    def test_line_ending_crlf(self):
        assert transcode(b"\x0d", CodePage.UTF8, LineEnding.CRLF) == b"\x0d\x0a"

    def test_native_lf_passes_through(self):
        """Only CR is a native line terminator; LF is copied as-is."""
        assert transcode(b"\x0a", CodePage.UTF8, LineEnding.CRLF) == b"\x0a"

    @pytest.mark.parametrize("target", list(CodePage))
    def test_filler_dropped(self, target):
        assert transcode(b"\xff", target, LineEnding.LF) == b""

    @pytest.mark.parametrize("target", list(CodePage))
    def test_passthrough_bytes(self, target):
        source = bytes(PASSTHROUGH_BYTES)
        assert transcode(source, target, LineEnding.LF) == source

    def test_delete_char_unchanged(self):
        assert transcode(b"\x7f", CodePage.UTF8, LineEnding.LF) == b"\x7f"

    def test_empty_input(self):
        assert transcode(b"", CodePage.UTF8, LineEnding.CRLF) == b""

    def test_mixed_text(self):
        source = b"RK-86 \x70\x71\x74\x75\x6c\x73\x61\r\xff\xff"
        result = transcode(source, CodePage.UTF8, LineEnding.LF)
        assert result.decode("utf-8") == "RK-86 ПЯТУЛСА\n"

    def test_windows_text(self):
        source = b"\x6d\x69\x68\r"
        result = transcode(source, CodePage.WIN1251, LineEnding.CRLF)
        assert result.decode("cp1251") == "МИХ\r\n"

    @pytest.mark.parametrize("target", list(CodePage))
    @pytest.mark.parametrize("line_ending", list(LineEnding))
    def test_output_at_most_double(self, target, line_ending):
        source = bytes(range(256)) * 2
        assert len(transcode(source, target, line_ending)) <= 2 * len(source)

    def test_order_preserved(self):
        result = transcode(b"A\x61B\rC", CodePage.UTF8, LineEnding.CRLF)
        assert result == b"A\xd0\x90B\r\nC"

    def test_accepts_bytearray(self):
        assert transcode(bytearray(b"\x61"), CodePage.KOI8, LineEnding.LF) == b"\xe1"

    def test_source_not_mutated(self):
        source = bytearray(b"\x61\r\xff")
        transcode(source, CodePage.UTF8, LineEnding.CRLF)
        assert source == bytearray(b"\x61\r\xff")


# =============================================================================
# Name Lookup Tests
# =============================================================================

class TestCodePageNames:
    """Tests for CodePage.from_name() and LineEnding.from_name()."""

    @pytest.mark.parametrize("name,expected", [
        ("KOI8-R", CodePage.KOI8),
        ("koi8-r", CodePage.KOI8),
        ("koi8", CodePage.KOI8),
        ("CP1251", CodePage.WIN1251),
        ("cp1251", CodePage.WIN1251),
        ("Windows-1251", CodePage.WIN1251),
        ("win1251", CodePage.WIN1251),
        ("UTF-8", CodePage.UTF8),
        ("utf8", CodePage.UTF8),
        (" Utf-8 ", CodePage.UTF8),
    ])
    def test_codepage_names(self, name, expected):
        assert CodePage.from_name(name) is expected

    @pytest.mark.parametrize("name", ["cp866", "latin1", ""])
    def test_unknown_codepage(self, name):
        with pytest.raises(InvalidInputError, match="unknown code page"):
            CodePage.from_name(name)

    def test_exactly_three_codepages(self):
        assert {cp.name for cp in CodePage} == {"KOI8", "WIN1251", "UTF8"}

    def test_python_codec_names(self):
        for codepage in CodePage:
            "test".encode(codepage.python_codec)

    @pytest.mark.parametrize("name,expected", [
        ("lf", LineEnding.LF),
        ("LF", LineEnding.LF),
        ("crlf", LineEnding.CRLF),
        ("CrLf", LineEnding.CRLF),
    ])
    def test_line_ending_names(self, name, expected):
        assert LineEnding.from_name(name) is expected

    def test_unknown_line_ending(self):
        with pytest.raises(InvalidInputError, match="unknown line ending"):
            LineEnding.from_name("cr")

    def test_native_line_ending(self, monkeypatch):
        import rkdisk.text.codepage as codepage_module
        monkeypatch.setattr(codepage_module.os, "name", "nt")
        assert LineEnding.native() is LineEnding.CRLF
        monkeypatch.setattr(codepage_module.os, "name", "posix")
        assert LineEnding.native() is LineEnding.LF

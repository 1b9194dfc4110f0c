"""
Tests for RkConfig defaults and environment overrides.
"""

import logging

import pytest

from rkdisk.config import RkConfig
from rkdisk.text import CodePage, LineEnding


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any RKDISK_* settings from the environment."""
    for name in ("RKDISK_CODEPAGE", "RKDISK_LINE_ENDING", "RKDISK_LOAD_ADDRESS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestRkConfig:

    def test_defaults(self, clean_env):
        config = RkConfig.from_env()
        assert config.codepage is CodePage.UTF8
        assert config.line_ending is LineEnding.native()
        assert config.load_address == 0x0000
        assert config.tape_suffix == ".rk"
        assert config.text_suffix == ".txt"

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("RKDISK_CODEPAGE", "cp1251")
        clean_env.setenv("RKDISK_LINE_ENDING", "crlf")
        clean_env.setenv("RKDISK_LOAD_ADDRESS", "3000")

        config = RkConfig.from_env()
        assert config.codepage is CodePage.WIN1251
        assert config.line_ending is LineEnding.CRLF
        assert config.load_address == 0x3000

    def test_invalid_values_ignored(self, clean_env, caplog):
        clean_env.setenv("RKDISK_CODEPAGE", "ebcdic")
        clean_env.setenv("RKDISK_LINE_ENDING", "cr")
        clean_env.setenv("RKDISK_LOAD_ADDRESS", "zz")

        with caplog.at_level(logging.WARNING, logger="rkdisk.config"):
            config = RkConfig.from_env()

        assert config == RkConfig()
        assert "RKDISK_CODEPAGE" in caplog.text
        assert "RKDISK_LINE_ENDING" in caplog.text
        assert "RKDISK_LOAD_ADDRESS" in caplog.text

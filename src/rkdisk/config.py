"""
rkdisk Configuration
====================

Defaults used by the command-line tools. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of these)

Environment variables (all optional):
    RKDISK_CODEPAGE: Text output code page (KOI8-R, CP1251, UTF-8)
    RKDISK_LINE_ENDING: Text output line ending (lf, crlf)
    RKDISK_LOAD_ADDRESS: Default load address for tape files (hex)
"""

from dataclasses import dataclass, field
import logging
import os

from rkdisk.errors import InvalidInputError
from rkdisk.names import parse_load_address
from rkdisk.text import CodePage, LineEnding

logger = logging.getLogger(__name__)


@dataclass
class RkConfig:
    """
    Settings for tape and text conversion.

    Attributes:
        codepage: Code page for extracted text (default: UTF-8)
        line_ending: Line ending for extracted text (default: host's)
        load_address: Load address for new tape files (default: 0000)
        tape_suffix: Suffix for tape files when no output is given
        text_suffix: Suffix for text files when no output is given
    """
    codepage: CodePage = CodePage.UTF8
    line_ending: LineEnding = field(default_factory=LineEnding.native)
    load_address: int = 0x0000
    tape_suffix: str = ".rk"
    text_suffix: str = ".txt"

    @classmethod
    def from_env(cls) -> "RkConfig":
        """
        Create RkConfig from environment variables.

        Invalid values are reported as warnings and the default is kept.

        Returns:
            RkConfig with values from environment variables
        """
        config = cls()

        if codepage := os.environ.get("RKDISK_CODEPAGE"):
            try:
                config.codepage = CodePage.from_name(codepage)
            except InvalidInputError as e:
                logger.warning("Ignoring RKDISK_CODEPAGE: %s", e)

        if line_ending := os.environ.get("RKDISK_LINE_ENDING"):
            try:
                config.line_ending = LineEnding.from_name(line_ending)
            except InvalidInputError as e:
                logger.warning("Ignoring RKDISK_LINE_ENDING: %s", e)

        if address := os.environ.get("RKDISK_LOAD_ADDRESS"):
            try:
                config.load_address = parse_load_address(address)
            except InvalidInputError as e:
                logger.warning("Ignoring RKDISK_LOAD_ADDRESS: %s", e)

        return config

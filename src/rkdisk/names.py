"""
Host Name and Address Helpers
=============================

Helpers applied around the transforms when files move between the host
and a disk image: turning a host file name into one the RK-DOS directory
accepts, and parsing hexadecimal load addresses typed on the command line.
"""

import re
from typing import Final

from rkdisk.errors import InvalidInputError


# Disk names: up to 10 characters, a dot, up to 3 characters of extension
MAX_STEM_LENGTH: Final[int] = 10
MAX_EXTENSION_LENGTH: Final[int] = 3

UNSAFE_CHARS: Final[re.Pattern[str]] = re.compile(r"[^0-9A-Za-z .]")
PATH_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[/\\:]")

HEX_ADDRESS: Final[re.Pattern[str]] = re.compile(
    r"^(?:0x|\$)?([0-9A-F]+)H?$", re.IGNORECASE
)


def strip_host_path(host_name: str) -> str:
    """Drop any directory or drive prefix (/, \\ or :) from a host name."""
    return PATH_SEPARATORS.split(host_name)[-1]


def make_rk_filename(host_name: str) -> str:
    """
    Convert a host file name to a name valid on an RK-DOS disk.

    The stem is cut to 10 characters and the extension to 3; characters
    other than letters, digits, space and dot become underscores.

    Args:
        host_name: Host file name, optionally with a directory prefix

    Returns:
        Name to store the file under

    Example:
        >>> make_rk_filename("games/super-tetris.bin")
        'super_tetr.bin'
    """
    name = strip_host_path(host_name)
    stem, dot, extension = name.rpartition(".")
    if not dot:
        stem, extension = name, ""

    rk_name = stem[:MAX_STEM_LENGTH]
    extension = extension[:MAX_EXTENSION_LENGTH]
    if extension:
        rk_name = f"{rk_name}.{extension}"

    return UNSAFE_CHARS.sub("_", rk_name)


def parse_load_address(text: str) -> int:
    """
    Parse a hexadecimal load address.

    Accepts plain hex digits plus the usual 0x, $ and trailing h forms.

    Raises:
        InvalidInputError: If the text is not hex or exceeds 0xFFFF

    Example:
        >>> parse_load_address("3000")
        12288
        >>> parse_load_address("$FF00")
        65280
    """
    match = HEX_ADDRESS.match(text.strip())
    if not match:
        raise InvalidInputError(f"invalid starting address '{text}'")

    address = int(match.group(1), 16)
    if address > 0xFFFF:
        raise InvalidInputError(f"starting address '{text}' exceeds FFFF")
    return address

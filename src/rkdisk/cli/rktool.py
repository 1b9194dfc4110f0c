"""
rktool - Radio-86RK File Conversion Command-Line Interface
==========================================================

This module implements the command-line interface for converting host
files to and from the forms used on Radio-86RK disk images.

Commands
--------
- **tape**: Wrap a raw binary into a tape container (.rk)
- **text**: Convert a native text file to KOI8-R, CP1251 or UTF-8
- **checksum**: Print the tape checksum of a raw binary
- **name**: Show the disk name a host file would be stored under

Usage Examples
--------------
Create a tape file loading at 0000:
    $ rktool tape game.bin

Create a tape file at a given address:
    $ rktool tape -a 3000 -o monitor.rk monitor.bin

Convert a text file to UTF-8 with CRLF line endings:
    $ rktool text -c utf-8 --line-ending crlf readme.txt -o readme.utf8.txt

Print a text file to the terminal:
    $ rktool text readme.txt -o -

Exit Codes
----------
0 - Success
1 - Output could not be written
2 - Invalid arguments or input
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from rkdisk import __version__
from rkdisk.cli.errors import handle_cli_exception
from rkdisk.config import RkConfig
from rkdisk.errors import InvalidInputError
from rkdisk.names import make_rk_filename, parse_load_address
from rkdisk.tape import build_tape, calculate_tape_checksum, write_atomic
from rkdisk.text import CODEPAGE_NAMES, CodePage, LineEnding, transcode

logger = logging.getLogger(__name__)


# =============================================================================
# Parameter Types
# =============================================================================

class CodePageChoice(click.ParamType):
    """
    Click parameter type for code page selection.

    Accepts: KOI8-R, CP1251, UTF-8 and common aliases (case-insensitive)
    """
    name = "codepage"

    def convert(self, value: str, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> CodePage:
        """Convert string to CodePage."""
        if isinstance(value, CodePage):
            return value
        try:
            return CodePage.from_name(value)
        except InvalidInputError as e:
            self.fail(str(e), param, ctx)


class HexAddress(click.ParamType):
    """Click parameter type for a 16-bit hexadecimal address."""
    name = "address"

    def convert(self, value: str, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert hex string to int."""
        if isinstance(value, int):
            return value
        try:
            return parse_load_address(value)
        except InvalidInputError as e:
            self.fail(str(e), param, ctx)


CODEPAGE = CodePageChoice()
HEX_ADDRESS = HexAddress()


# =============================================================================
# CLI Context
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores verbosity and the configuration loaded from the environment.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: RkConfig = RkConfig()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def resolve_output(input_file: Path, output: Optional[Path], suffix: str) -> Path:
    """
    Pick the output path for a conversion and refuse to overwrite the input.

    Args:
        input_file: File being converted
        output: Path given with -o, or None for the default
        suffix: Suffix that replaces the input's suffix by default

    Returns:
        The output path

    Raises:
        InvalidInputError: If the output would replace the input file
    """
    if output is None:
        output = input_file.with_suffix(suffix)
    if output.resolve() == input_file.resolve():
        raise InvalidInputError(
            f"output file '{output}' would overwrite the input; use -o to choose another"
        )
    return output


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="rktool")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    File conversion tools for Radio-86RK disk images.

    \b
    Commands:
      tape      Wrap a binary into a tape container (.rk)
      text      Convert native text to KOI8-R, CP1251 or UTF-8
      checksum  Print the tape checksum of a binary
      name      Show the disk name for a host file

    \b
    Defaults can be set with RKDISK_CODEPAGE, RKDISK_LINE_ENDING
    and RKDISK_LOAD_ADDRESS.
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    ctx.config = RkConfig.from_env()


# =============================================================================
# Tape Command
# =============================================================================

@main.command("tape")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output .rk file (default: INPUT_FILE with .rk suffix)",
)
@click.option(
    "-a", "--address",
    type=HEX_ADDRESS,
    default=None,
    help="Load address in hex (default: 0000)",
)
@pass_context
def cmd_tape(
    ctx: Context,
    input_file: Path,
    output: Optional[Path],
    address: Optional[int],
) -> None:
    """
    Wrap a raw binary into a tape container.

    The container holds the load and end addresses, the file body, and
    the checksum the monitor's tape loader verifies.

    \b
    Examples:
      rktool tape game.bin
      rktool tape -a 3000 -o monitor.rk monitor.bin
    """
    try:
        if address is None:
            address = ctx.config.load_address
        output = resolve_output(input_file, output, ctx.config.tape_suffix)

        payload = input_file.read_bytes()
        logger.debug("Read %d bytes from %s", len(payload), input_file)

        container = build_tape(payload, address)
        bytes_written = write_atomic(output, container.to_bytes())

        header = container.header
        checksum = container.footer.checksum
        click.echo(
            f"Created {output} ({bytes_written} bytes, "
            f"{header.load_address:04X}-{header.end_address:04X}, "
            f"checksum {checksum:04X})"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Text Command
# =============================================================================

@main.command("text")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    default=None,
    help="Output file, or - for stdout (default: INPUT_FILE with .txt suffix)",
)
@click.option(
    "-c", "--codepage",
    type=CODEPAGE,
    default=None,
    help=f"Output code page: {', '.join(CODEPAGE_NAMES)} (default: UTF-8)",
)
@click.option(
    "-l", "--line-ending",
    type=click.Choice(["lf", "crlf"], case_sensitive=False),
    default=None,
    help="Output line ending (default: host convention)",
)
@pass_context
def cmd_text(
    ctx: Context,
    input_file: Path,
    output: Optional[Path],
    codepage: Optional[CodePage],
    line_ending: Optional[str],
) -> None:
    """
    Convert a native text file to a host encoding.

    Carriage returns become host line endings, 0xFF filler bytes are
    dropped, and Cyrillic letters are re-encoded.

    \b
    Examples:
      rktool text readme.txt -o readme.utf8
      rktool text -c cp1251 -l crlf readme.txt -o readme.win
      rktool text readme.txt -o -
    """
    try:
        if codepage is None:
            codepage = ctx.config.codepage
        ending = (
            LineEnding.from_name(line_ending) if line_ending
            else ctx.config.line_ending
        )

        source = input_file.read_bytes()
        converted = transcode(source, codepage, ending)

        if output is not None and str(output) == "-":
            click.get_binary_stream("stdout").write(converted)
            return

        output = resolve_output(input_file, output, ctx.config.text_suffix)
        bytes_written = write_atomic(output, converted)
        click.echo(
            f"Created {output} ({bytes_written} bytes, {codepage.python_codec}, "
            f"{ending.name})"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Checksum Command
# =============================================================================

@main.command("checksum")
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_checksum(ctx: Context, input_file: Path) -> None:
    """
    Print the tape checksum of a raw binary as four hex digits.

    \b
    Example:
      rktool checksum game.bin
    """
    try:
        checksum = calculate_tape_checksum(input_file.read_bytes())
        click.echo(f"{checksum:04X}")
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Name Command
# =============================================================================

@main.command("name")
@click.argument("filename")
@pass_context
def cmd_name(ctx: Context, filename: str) -> None:
    """
    Show the name a host file would be stored under on disk.

    Disk names have up to 10 characters, a dot and up to 3 characters of
    extension; other characters than letters, digits and spaces become
    underscores. A name without an extension is cut to 10 characters
    and gets no extension.

    \b
    Examples:
      rktool name games/super-tetris.bin
      rktool name longfilename
    """
    rk_name = make_rk_filename(filename)
    logger.debug("Disk name for %s: %s", filename, rk_name)
    click.echo(rk_name)


if __name__ == "__main__":
    main()

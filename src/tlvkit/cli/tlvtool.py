"""
tlvtool - TLV File Command-Line Interface
=========================================

This module implements the command-line interface for inspecting and
editing TLV files.

Commands
--------
- **list**: List the records of a file
- **get**: Print the value of a tag
- **add**: Append a record to a file
- **remove**: Remove records by tag or by full record
- **info**: Show summary information
- **validate**: Check that a file decodes cleanly

Tags may be written in decimal or hex (``0x`` prefix). Negative tags
need ``--`` before them so they are not taken for options.

Usage Examples
--------------
List a file:
    $ tlvtool list data.tlv

Print a value as hex, or raw to a file:
    $ tlvtool get data.tlv 0x10
    $ tlvtool get data.tlv 16 --raw -o value.bin

Append a text record, creating the file if needed:
    $ tlvtool add data.tlv 3 --text "hello" --create

Remove every record with tag 3:
    $ tlvtool remove data.tlv 3

Check a file:
    $ tlvtool validate data.tlv
"""

import logging
from pathlib import Path
from typing import Optional

import click

from tlvkit import __version__
from tlvkit.cli.errors import ExitCode, handle_cli_exception
from tlvkit.config import CodecConfig
from tlvkit.records import TAG_MAX, TAG_MIN, Record
from tlvkit.tlvlist import RecordList

logger = logging.getLogger(__name__)


# =============================================================================
# Parameter Types
# =============================================================================

class TagType(click.ParamType):
    """
    Click parameter type for record tags.

    Accepts decimal or 0x-prefixed hex within the signed 32-bit range.
    """
    name = "tag"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        """Convert string to an integer tag."""
        if isinstance(value, int):
            tag = value
        else:
            try:
                tag = int(value, 0)
            except ValueError:
                self.fail(f"Invalid tag '{value}'. Use decimal or 0x-prefixed hex", param, ctx)

        if not TAG_MIN <= tag <= TAG_MAX:
            self.fail(f"Tag {tag} does not fit in 32 bits (signed)", param, ctx)
        return tag


class HexBytesType(click.ParamType):
    """Click parameter type for hex-encoded bytes (spaces allowed)."""
    name = "hex"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> bytes:
        """Convert a hex string to bytes."""
        if isinstance(value, bytes):
            return value
        try:
            return bytes.fromhex(value)
        except ValueError:
            self.fail(f"Invalid hex data '{value}'", param, ctx)


TAG = TagType()
HEX_BYTES = HexBytesType()


# =============================================================================
# CLI Context
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the verbosity and the decoder settings.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: CodecConfig = CodecConfig()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s" if self.verbose else "%(levelname)s: %(message)s",
        )

    def load(self, path: Path) -> RecordList:
        """Read a TLV file with the configured decoder settings."""
        logger.debug("Reading %s", path)
        return RecordList.read_file(path, self.config)


pass_context = click.make_pass_decorator(Context, ensure=True)


def format_value(value: bytes, preview: Optional[int] = None) -> str:
    """Format a value as spaced hex, optionally cut after ``preview`` bytes."""
    shown = value if preview is None else value[:preview]
    text = shown.hex(" ")
    if preview is not None and len(value) > preview:
        text += " ..."
    return text


def format_tag(tag: int) -> str:
    """Format a tag as decimal plus hex."""
    if tag < 0:
        return f"{tag}"
    return f"{tag} (0x{tag:X})"


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="tlvtool")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject files that stop inside the last record header",
)
@pass_context
def main(ctx: Context, verbose: bool, strict: bool) -> None:
    """
    Inspect and edit Tag-Length-Value (TLV) files.

    Each record is a 4-byte tag, a 4-byte length (both signed
    little-endian) and the value bytes.

    \b
    Commands:
      list      List records
      get       Print the value of a tag
      add       Append a record
      remove    Remove records
      info      Show summary information
      validate  Check that a file decodes cleanly

    \b
    Examples:
      tlvtool list data.tlv
      tlvtool get data.tlv 0x10
      tlvtool add data.tlv 3 --text hello --create
    """
    ctx.verbose = verbose
    ctx.config = CodecConfig.from_env()
    if strict:
        ctx.config.strict_eof = True
    ctx.setup_logging()


# =============================================================================
# List Command
# =============================================================================

@main.command("list")
@click.argument(
    "tlv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-w", "--width",
    type=click.IntRange(min=1),
    default=16,
    help="Number of value bytes to preview (default: 16)",
)
@pass_context
def cmd_list(ctx: Context, tlv_file: Path, width: int) -> None:
    """
    List the records of a TLV file.

    \b
    Output format:
      #     Tag              Length  Value
      0     1 (0x1)               5  68 65 6c 6c 6f
    """
    try:
        records = ctx.load(tlv_file)

        click.echo(f"{'#':<5} {'Tag':<16} {'Length':>7}  Value")
        click.echo("-" * 60)
        for index, record in enumerate(records):
            click.echo(
                f"{index:<5} {format_tag(record.tag):<16} {record.length:>7}  "
                f"{format_value(record.value, width)}"
            )

        if ctx.verbose:
            click.echo("-" * 60)
            click.echo(f"Total: {len(records)} records")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Get Command
# =============================================================================

@main.command("get")
@click.argument(
    "tlv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("tag", type=TAG)
@click.option(
    "-a", "--all", "all_matches",
    is_flag=True,
    help="Print every record with the tag, not just the first",
)
@click.option(
    "-r", "--raw",
    is_flag=True,
    help="Write raw value bytes instead of hex",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the raw value bytes to this file",
)
@pass_context
def cmd_get(
    ctx: Context,
    tlv_file: Path,
    tag: int,
    all_matches: bool,
    raw: bool,
    output: Optional[Path],
) -> None:
    """
    Print the value of the first record with TAG.

    Exits with status 1 when no record has the tag. With --all every
    matching record is printed, one per line, and a missing tag
    prints nothing.

    \b
    Examples:
      tlvtool get data.tlv 16
      tlvtool get data.tlv 0x10 --all
      tlvtool get data.tlv 16 -o value.bin
    """
    try:
        records = ctx.load(tlv_file)

        if all_matches:
            matches = records.get_all(tag)
        else:
            matches = [records.get(tag)]

        if output is not None:
            output.write_bytes(b"".join(record.value for record in matches))
            if ctx.verbose:
                click.echo(f"Wrote {len(matches)} value(s) to {output}")
        elif raw:
            stdout = click.get_binary_stream("stdout")
            for record in matches:
                stdout.write(record.value)
            stdout.flush()
        else:
            for record in matches:
                click.echo(format_value(record.value))

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Add Command
# =============================================================================

@main.command("add")
@click.argument(
    "tlv_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument("tag", type=TAG)
@click.option("-t", "--text", help="Value as UTF-8 text")
@click.option("-x", "--hex", "hex_value", type=HEX_BYTES, help="Value as hex bytes")
@click.option(
    "-f", "--from-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the value from a file",
)
@click.option(
    "-c", "--create",
    is_flag=True,
    help="Create the TLV file if it does not exist",
)
@pass_context
def cmd_add(
    ctx: Context,
    tlv_file: Path,
    tag: int,
    text: Optional[str],
    hex_value: Optional[bytes],
    from_file: Optional[Path],
    create: bool,
) -> None:
    """
    Append a record with TAG to a TLV file.

    Exactly one of --text, --hex or --from-file gives the value.

    \b
    Examples:
      tlvtool add data.tlv 3 --text hello
      tlvtool add data.tlv 0x20 --hex "de ad be ef"
      tlvtool add data.tlv 4 --from-file blob.bin --create
    """
    sources = [s for s in (text, hex_value, from_file) if s is not None]
    if len(sources) != 1:
        click.echo("Error: Give exactly one of --text, --hex or --from-file", err=True)
        raise SystemExit(ExitCode.INVALID_ARGS)

    try:
        if text is not None:
            value = text.encode("utf-8")
        elif hex_value is not None:
            value = hex_value
        else:
            value = from_file.read_bytes()

        if tlv_file.exists():
            records = ctx.load(tlv_file)
        elif create:
            records = RecordList()
        else:
            raise FileNotFoundError(f"{tlv_file} does not exist (use --create)")

        record = records.add(tag, value)
        bytes_written = records.write_file(tlv_file)

        click.echo(f"Added {record.describe()} ({len(records)} records, {bytes_written} bytes)")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Remove Command
# =============================================================================

@main.command("remove")
@click.argument(
    "tlv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("tag", type=TAG)
@click.option(
    "-x", "--value-hex",
    type=HEX_BYTES,
    help="Only remove records whose value equals these hex bytes",
)
@pass_context
def cmd_remove(
    ctx: Context,
    tlv_file: Path,
    tag: int,
    value_hex: Optional[bytes],
) -> None:
    """
    Remove records with TAG from a TLV file.

    Without --value-hex every record with the tag goes; with it, only
    records matching both tag and value. The file is only rewritten
    when something was removed.

    \b
    Examples:
      tlvtool remove data.tlv 3
      tlvtool remove data.tlv 3 --value-hex 68656c6c6f
    """
    try:
        records = ctx.load(tlv_file)

        if value_hex is None:
            removed = records.remove(tag)
        else:
            removed = records.remove_record(Record(tag, value_hex))

        if removed:
            records.write_file(tlv_file)

        click.echo(f"Removed {removed} record(s), {len(records)} left")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Info Command
# =============================================================================

@main.command("info")
@click.argument(
    "tlv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_info(ctx: Context, tlv_file: Path) -> None:
    """
    Show summary information about a TLV file.

    \b
    Output includes:
      - Record count
      - Distinct tags
      - Value and encoded sizes
    """
    try:
        records = ctx.load(tlv_file)
        info = records.get_info()

        click.echo(f"TLV File Information: {tlv_file}")
        click.echo("=" * 40)
        click.echo(f"Records:      {info['record_count']}")
        tags = ", ".join(str(tag) for tag in info["distinct_tags"]) or "(none)"
        click.echo(f"Tags:         {tags}")
        click.echo(f"Value bytes:  {info['value_bytes']}")
        click.echo(f"Encoded size: {info['encoded_size']} bytes")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Validate Command
# =============================================================================

@main.command("validate")
@click.argument(
    "tlv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_validate(ctx: Context, tlv_file: Path) -> None:
    """
    Check that a TLV file decodes cleanly.

    Exits with status 0 for a valid file and 1 for a malformed one.
    """
    try:
        records = ctx.load(tlv_file)

        # Anything left over is a partial record the reader dropped
        size = tlv_file.stat().st_size
        encoded = records.get_encoded_size()
        if encoded != size:
            click.echo(
                f"Valid with trailing data: {len(records)} records, "
                f"{size - encoded} byte(s) ignored"
            )
        else:
            click.echo(f"Valid: {len(records)} records, {size} bytes")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


if __name__ == "__main__":
    main()

from typing import List, Optional

import typer

from scorelink.codec import ScalarKind, StructFormat, get_format
from scorelink.utils.exceptions import ScorelinkException, ValidationError
from ..helpers import OutputHelper, format_hex
from ..app import app


_TRUE_WORDS = {'true', 'yes', 'on'}
_FALSE_WORDS = {'false', 'no', 'off'}


def _parse_value(text: str):
    """Command-line literal -> bool, int (any base prefix) or float."""
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    try:
        return int(word, 0)
    except ValueError:
        pass
    try:
        return float(word)
    except ValueError:
        raise ValidationError(f"Cannot parse value {text!r}") from None


def _parse_kinds(text: Optional[str]) -> Optional[List[ScalarKind]]:
    if not text:
        return None
    return [ScalarKind.from_label(part) for part in text.split(',') if part.strip()]


def _parse_hex(text: str) -> bytes:
    cleaned = text.replace(':', ' ').replace('0x', '').replace('0X', '')
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise ValidationError(f"Invalid hex data {text!r}") from None


def _fail(error: ScorelinkException, title: str):
    OutputHelper.print_error(error, title=title)
    raise typer.Exit(1)


@app.command(name="pack", context_settings={"ignore_unknown_options": True})
def pack_cmd(
    fmt: str = typer.Argument(..., metavar="FORMAT", help="Format string, e.g. '<?h?hh'"),
    values: Optional[List[str]] = typer.Argument(None, metavar="VALUE...", help="Values: integers or true/false"),
):
    """
    Pack values with a format string and print the bytes as hex.
    """
    try:
        parsed = [_parse_value(v) for v in (values or [])]
        data = get_format(fmt).pack(*parsed)
    except ScorelinkException as e:
        _fail(e, "Pack Failed")

    OutputHelper.print_panel(
        f"{format_hex(data)}\n\n[dim]{len(data)} bytes[/dim]",
        title=f"pack {fmt}",
        border_style="green"
    )


@app.command(name="unpack")
def unpack_cmd(
    fmt: str = typer.Argument(..., metavar="FORMAT", help="Format string, e.g. '<?h?hh'"),
    data: str = typer.Argument(..., metavar="HEX", help="Bytes as hex, e.g. '01 2A 00'"),
    kinds: Optional[str] = typer.Option(
        None, "--kinds", "-k",
        help="Comma separated output kinds (bool,int8,uint8,int16,uint16,int32,uint32,int64,uint64)"
    ),
):
    """
    Decode hex bytes with a format string.
    """
    try:
        compiled = get_format(fmt)
        requested = compiled.resolve_kinds(_parse_kinds(kinds))
        values = compiled.unpack(_parse_hex(data), requested)
    except ScorelinkException as e:
        _fail(e, "Unpack Failed")

    table = OutputHelper.create_table(["#", "Directive", "Kind", "Value"], title=f"unpack {fmt}")
    for index, (directive_kind, kind, value) in enumerate(zip(compiled.kinds, requested, values)):
        table.add_row(str(index), directive_kind.directive, kind.label, repr(value))
    OutputHelper.print(table)


@app.command(name="calcsize")
def calcsize_cmd(
    fmt: str = typer.Argument(..., metavar="FORMAT", help="Format string"),
):
    """
    Print the byte width and value count of a format string.
    """
    try:
        compiled = StructFormat(fmt)
    except ScorelinkException as e:
        _fail(e, "Invalid Format")

    OutputHelper.print_panel(
        f"size  [green]{compiled.size}[/green] bytes\n"
        f"values [green]{compiled.count}[/green]",
        title=f"calcsize {fmt}",
        border_style="green"
    )

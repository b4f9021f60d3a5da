"""Output formatting and display utilities."""
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from scorelink.utils.exceptions import ScorelinkException
from . import get_panel_box, CONSOLE_WIDTH


def format_hex(data: bytes) -> str:
    """Space separated upper-case hex bytes."""
    return " ".join(f"{b:02X}" for b in data)


class OutputHelper:
    """Output formatting and display utilities."""

    _console = Console(width=CONSOLE_WIDTH)

    @staticmethod
    def print_panel(content: str, title: str = "", border_style: str = "blue"):
        """Print content in a rich panel box."""
        OutputHelper._console.print(Panel(content, title=title, title_align="left", border_style=border_style, box=get_panel_box(), expand=True, width=CONSOLE_WIDTH))

    @staticmethod
    def print_error(error: Exception, title: str = "Error"):
        """Print an error in a red panel. Library errors show their bare message."""
        message = error.message if isinstance(error, ScorelinkException) else str(error)
        kind = type(error).__name__
        OutputHelper.print_panel(
            f"[red]{kind}[/red]\n\n{escape(message)}",
            title=title,
            border_style="red"
        )

    @staticmethod
    def create_table(columns: Iterable[str], title: Optional[str] = None) -> Table:
        table = Table(title=title, box=get_panel_box(), width=CONSOLE_WIDTH)
        for column in columns:
            table.add_column(column)
        return table

    @staticmethod
    def print(renderable=""):
        OutputHelper._console.print(renderable)

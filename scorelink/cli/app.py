import sys
from typing import Optional

import click
import typer

from scorelink import __version__
from .helpers import OutputHelper
from .config import GLOBAL_OPTIONS
from scorelink.utils.exceptions import ScorelinkException


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    help="Binary struct codec and two-player score exchange client."
)


def _print_main_help():
    lines = []
    lines.append("[bold]Two-player score exchange over a TCP relay[/bold]")
    lines.append("[dim]Pack and inspect binary records, run the score exchange[/dim]")
    lines.append("")
    lines.append("[bold cyan]Usage:[/bold cyan]")
    lines.append("  scorelink [yellow][OPTIONS][/yellow] [green]COMMAND[/green] [[dim]ARGS[/dim]]...")
    lines.append("")
    lines.append("[bold cyan]Global Options:[/bold cyan]")
    lines.append("  [yellow]--host[/yellow] [cyan]HOST[/cyan]       Relay host [dim](default 127.0.0.1)[/dim]")
    lines.append("  [yellow]--port[/yellow] [cyan]PORT[/cyan]       Relay port [dim](default 13000)[/dim]")
    lines.append("  [yellow]--player[/yellow] [cyan]N[/cyan]        Player number [dim](1 or 2)[/dim]")

    command_groups = [
        ("Codec", [
            ("pack", "Pack values with a format string and print the bytes"),
            ("unpack", "Decode hex bytes with a format string"),
            ("calcsize", "Print the byte width of a format string"),
        ]),
        ("Relay", [
            ("exchange", "Exchange scores with the relay for a number of rounds"),
            ("config", "Show or store relay and player settings"),
        ]),
    ]

    for group_name, commands in command_groups:
        lines.append("")
        lines.append(f"[bold cyan]{group_name}:[/bold cyan]")
        for cmd, desc in commands:
            lines.append(f"  [green]{cmd:<12}[/green] {desc}")

    lines.append("")
    lines.append("[dim]Use 'scorelink COMMAND --help' for detailed help on each command.[/dim]")

    OutputHelper.print_panel(
        "\n".join(lines),
        title="scorelink",
        border_style="bright_blue"
    )


# =============================================================================
# App Callback
# =============================================================================

@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    global_host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Relay host to connect to",
        is_eager=True
    ),
    global_port: Optional[int] = typer.Option(
        None,
        "--port", "-p",
        help="Relay TCP port",
        is_eager=True
    ),
    global_player: Optional[int] = typer.Option(
        None,
        "--player",
        help="Player number (1 or 2)",
        is_eager=True
    ),
):
    """
    Binary struct codec and two-player score exchange client.
    """
    GLOBAL_OPTIONS.set(global_host, global_port, global_player)

    ctx.ensure_object(dict)
    ctx.obj['global_host'] = global_host
    ctx.obj['global_port'] = global_port
    ctx.obj['global_player'] = global_player

    if ctx.invoked_subcommand is None:
        _print_main_help()
        raise typer.Exit()


@app.command(name="version")
def version_cmd():
    """
    Show scorelink version information.
    """
    OutputHelper.print_panel(
        f"scorelink [green]{__version__}[/green]",
        title="Version",
        border_style="cyan"
    )


# =============================================================================
# Import all commands to register them with the app
# =============================================================================
from .commands import codec, exchange

# These imports are for side-effect (command registration)
_command_modules = (codec, exchange)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    if len(sys.argv) == 2 and sys.argv[1] in ('--version', '-v'):
        OutputHelper.print_panel(
            f"[bright_blue]scorelink[/bright_blue] version [bright_green]{__version__}[/bright_green]",
            title="Version",
            border_style="green"
        )
        sys.exit(0)

    try:
        rv = app(standalone_mode=False)
        exit_code = rv if isinstance(rv, int) else 0
    except ScorelinkException as e:
        OutputHelper.print_error(e)
        exit_code = 1
    except click.exceptions.ClickException as e:
        e.show()
        exit_code = e.exit_code
    except click.exceptions.Abort:
        print()
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

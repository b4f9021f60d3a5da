import os
import queue
from typing import Optional

import typer

from scorelink.protocol import ScoreExchangeSession, ScoreExchangeWorker, SharedMatchState
from scorelink.transport import create_transport
from scorelink.utils.constants import ENV_FILE_NAME
from scorelink.utils.exceptions import ScorelinkException
from ..config import ClientConfig, ConfigManager, resolve_config
from ..helpers import OutputHelper
from ..app import app


# Seconds to wait for the worker after the caller bails out early
ABORT_JOIN_TIMEOUT = 5.0


def run_exchange(config: ClientConfig, score, rounds: int, interval: float = 0.0,
                 timeout: Optional[float] = None, transport=None, on_update=None) -> SharedMatchState:
    """
    Connect to the relay and exchange scores for a number of rounds.

    on_update(snapshot) is called on the calling thread once per received
    match state, in order. If it raises, the stream is shut down so a
    stalled relay cannot block the cleanup. Raises the worker's error,
    if any, once it has stopped.
    """
    if transport is None:
        transport = create_transport(config.address, timeout=timeout)

    shared = SharedMatchState(config.player_number, local_score=score)
    session = ScoreExchangeSession(transport, config.player_number)
    updates = queue.Queue()
    worker = ScoreExchangeWorker(session, shared, rounds=rounds, interval=interval, updates=updates)
    worker.start()

    completed = False
    try:
        while True:
            snapshot = updates.get()
            if snapshot is None:
                break
            if on_update:
                on_update(snapshot)
        completed = True
    finally:
        if completed:
            worker.stop()
        else:
            worker.abort(ABORT_JOIN_TIMEOUT)

    if worker.error is not None:
        raise worker.error
    return shared


def _score_text(score) -> str:
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


@app.command(name="exchange")
def exchange_cmd(
    host: Optional[str] = typer.Option(None, "--host", help="Relay host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Relay TCP port"),
    player: Optional[int] = typer.Option(None, "--player", help="Player number (1 or 2)"),
    score: float = typer.Option(0.0, "--score", "-s", help="Score to report each round"),
    rounds: int = typer.Option(1, "--rounds", "-n", min=1, help="Number of rounds to exchange"),
    interval: float = typer.Option(0.0, "--interval", min=0.0, help="Seconds to wait between rounds"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Socket timeout in seconds (default: block)"),
):
    """
    Exchange scores with the relay for a number of rounds.
    """
    try:
        config = resolve_config(host=host, port=port, player=player)
    except ScorelinkException as e:
        OutputHelper.print_error(e, title="Invalid Configuration")
        raise typer.Exit(1)

    table = OutputHelper.create_table(
        ["Round", "P1 active", "P1 pos", "P2 active", "P2 pos", "P1 score", "P2 score"],
        title=f"Player {config.player_number} @ {config.address}"
    )

    def _add_row(snapshot):
        state = snapshot.state
        table.add_row(
            str(snapshot.revision),
            str(state.p1_active), str(state.p1_position),
            str(state.p2_active), str(state.p2_position),
            _score_text(snapshot.p1_score), _score_text(snapshot.p2_score),
        )

    try:
        run_exchange(config, score, rounds, interval=interval, timeout=timeout, on_update=_add_row)
    except ScorelinkException as e:
        if table.row_count:
            OutputHelper.print(table)
        OutputHelper.print_error(e, title="Exchange Failed")
        raise typer.Exit(1)

    OutputHelper.print(table)


@app.command(name="config")
def config_cmd(
    host: Optional[str] = typer.Option(None, "--host", help="Relay host to store"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Relay port to store"),
    player: Optional[int] = typer.Option(None, "--player", help="Player number to store"),
    save: bool = typer.Option(False, "--save", help="Write the values to ./.scorelink"),
):
    """
    Show the resolved relay settings, optionally storing new ones.
    """
    env_path = ConfigManager.find_env_file()
    try:
        if save:
            env_path = env_path or os.path.join(os.getcwd(), ENV_FILE_NAME)
            ConfigManager.update(env_path, host=host, port=port, player=player)
        config = resolve_config(host=host, port=port, player=player, env_path=env_path)
    except ScorelinkException as e:
        OutputHelper.print_error(e, title="Invalid Configuration")
        raise typer.Exit(1)

    OutputHelper.print_panel(
        f"host    [green]{config.host}[/green]\n"
        f"port    [green]{config.port}[/green]\n"
        f"player  [green]{config.player_number}[/green]\n\n"
        f"[dim]config file: {env_path or 'none'}[/dim]",
        title="Configuration",
        border_style="cyan"
    )

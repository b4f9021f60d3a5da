"""Protocol Layer - two-player score exchange through a TCP relay."""

from .messages import (
    MatchState, STATE_FORMAT, STATE_SIZE,
    encode_player_number, encode_score, validate_player_number,
)
from .state import MatchSnapshot, SharedMatchState
from .session import ScoreExchangeSession
from .worker import ScoreExchangeWorker

__all__ = [
    "MatchState",
    "STATE_FORMAT",
    "STATE_SIZE",
    "encode_player_number",
    "encode_score",
    "validate_player_number",
    # Shared state
    "MatchSnapshot",
    "SharedMatchState",
    # Session
    "ScoreExchangeSession",
    "ScoreExchangeWorker",
]

"""
Wire messages of the relay conversation.

Client -> relay:
- player number as ASCII decimal (handshake)
- own score as ASCII decimal text (every round)
- b"end" when leaving

Relay -> client:
- one reply chunk after the handshake (not interpreted)
- one MatchState record per round, STATE_FORMAT "<?h?hh" (8 bytes)
"""

import numbers
from dataclasses import dataclass

from scorelink.codec import ScalarKind, calcsize, pack_record, scalar, unpack_record
from scorelink.utils.constants import VALID_PLAYER_NUMBERS, TEXT_ENCODING
from scorelink.utils.exceptions import ProtocolError


STATE_FORMAT = "<?h?hh"
STATE_SIZE = calcsize(STATE_FORMAT)


@dataclass(frozen=True)
class MatchState:
    """Both players' lane state plus the opponent's score."""
    p1_active: bool = scalar(ScalarKind.BOOL)
    p1_position: int = scalar(ScalarKind.INT16)
    p2_active: bool = scalar(ScalarKind.BOOL)
    p2_position: int = scalar(ScalarKind.INT16)
    opponent_score: int = scalar(ScalarKind.INT16)

    def encode(self) -> bytes:
        return pack_record(STATE_FORMAT, self)

    @classmethod
    def decode(cls, data) -> "MatchState":
        return unpack_record(STATE_FORMAT, data, cls)


def validate_player_number(player_number: int) -> int:
    if isinstance(player_number, bool) or player_number not in VALID_PLAYER_NUMBERS:
        raise ProtocolError(
            f"Invalid player number {player_number!r} (expected one of {VALID_PLAYER_NUMBERS})"
        )
    return player_number


def encode_player_number(player_number: int) -> bytes:
    return str(validate_player_number(player_number)).encode(TEXT_ENCODING)


def encode_score(score) -> bytes:
    """Scores travel as plain decimal text; integral floats drop the fraction."""
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        raise ProtocolError(f"Score must be a number, got {type(score).__name__}")
    if isinstance(score, numbers.Integral) or float(score).is_integer():
        return str(int(score)).encode(TEXT_ENCODING)
    return str(float(score)).encode(TEXT_ENCODING)

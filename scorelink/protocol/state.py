"""
Match state shared between the exchange worker and the game side.

The worker publishes whole MatchState records and reads the local
score; the game side writes the local score and reads snapshots. Every
access goes through one condition variable so readers always see a
consistent (revision, state, score) triple.
"""

import threading
from dataclasses import dataclass
from typing import Optional

from .messages import MatchState, validate_player_number


@dataclass(frozen=True)
class MatchSnapshot:
    revision: int
    player_number: int
    local_score: int
    state: Optional[MatchState] = None
    finished: bool = False

    @property
    def opponent_score(self) -> Optional[int]:
        return self.state.opponent_score if self.state is not None else None

    @property
    def p1_score(self) -> Optional[int]:
        if self.player_number == 1:
            return self.local_score
        return self.opponent_score

    @property
    def p2_score(self) -> Optional[int]:
        if self.player_number == 2:
            return self.local_score
        return self.opponent_score


class SharedMatchState:
    def __init__(self, player_number: int = 1, local_score: int = 0):
        self._player_number = validate_player_number(player_number)
        self._cond = threading.Condition()
        self._local_score = local_score
        self._state: Optional[MatchState] = None
        self._revision = 0
        self._finished = False

    @property
    def player_number(self) -> int:
        return self._player_number

    def set_local_score(self, score) -> None:
        with self._cond:
            self._local_score = score

    def local_score(self):
        with self._cond:
            return self._local_score

    def publish(self, state: MatchState) -> int:
        """Store a freshly received state and wake readers. Returns the new revision."""
        with self._cond:
            self._state = state
            self._revision += 1
            self._cond.notify_all()
            return self._revision

    def finish(self) -> None:
        with self._cond:
            self._finished = True
            self._cond.notify_all()

    def _snapshot_locked(self) -> MatchSnapshot:
        return MatchSnapshot(
            revision=self._revision,
            player_number=self._player_number,
            local_score=self._local_score,
            state=self._state,
            finished=self._finished,
        )

    def snapshot(self) -> MatchSnapshot:
        with self._cond:
            return self._snapshot_locked()

    def wait_for_update(self, after_revision: int, timeout: Optional[float] = None) -> MatchSnapshot:
        """Block until a revision newer than after_revision exists, the match finishes, or timeout."""
        with self._cond:
            self._cond.wait_for(
                lambda: self._revision > after_revision or self._finished,
                timeout=timeout,
            )
            return self._snapshot_locked()

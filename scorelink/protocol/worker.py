import queue
import threading
from typing import Optional

from scorelink.utils.exceptions import ScorelinkException, TransportError
from .session import ScoreExchangeSession
from .state import SharedMatchState


class ScoreExchangeWorker(threading.Thread):
    """
    Runs the relay conversation on its own thread.

    Transport calls block without a timeout, so a stalled relay stalls
    this thread, never the caller. Any codec, transport or protocol error
    ends the connection: it is kept in `error` and the stop event is set.

    When `updates` is given, every round's MatchSnapshot is also put on
    it, followed by None once the worker has finished.
    """

    def __init__(self, session: ScoreExchangeSession, shared: SharedMatchState,
                 stop_event: Optional[threading.Event] = None,
                 rounds: Optional[int] = None, interval: float = 0.0,
                 updates: Optional[queue.Queue] = None):
        super().__init__(name=f"score-exchange-p{session.player_number}", daemon=True)
        self.session = session
        self.shared = shared
        self.stop_event = stop_event or threading.Event()
        self.rounds = rounds
        self.interval = interval
        self.updates = updates
        self.rounds_completed = 0
        self.error: Optional[ScorelinkException] = None

    def run(self):
        try:
            self.session.handshake()
            while not self.stop_event.is_set():
                state = self.session.exchange(self.shared.local_score())
                self.shared.publish(state)
                self.rounds_completed += 1
                if self.updates is not None:
                    self.updates.put(self.shared.snapshot())

                if self.rounds is not None and self.rounds_completed >= self.rounds:
                    break
                if self.interval:
                    self.stop_event.wait(self.interval)
        except ScorelinkException as e:
            self.error = e
        finally:
            self.stop_event.set()
            try:
                self.session.close(graceful=self.error is None)
            except ScorelinkException as e:
                if self.error is None:
                    self.error = e
            self.shared.finish()
            if self.updates is not None:
                self.updates.put(None)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to end after the current round and wait for it."""
        self.stop_event.set()
        self.join(timeout)

    def abort(self, timeout: Optional[float] = None) -> None:
        """
        End the conversation now, even if a read is blocked.

        Shutting the stream down wakes a pending read, which then fails
        and the worker closes the session without the end marker.
        """
        self.stop_event.set()
        try:
            self.session.transport.shutdown()
        except TransportError:
            pass
        self.join(timeout)

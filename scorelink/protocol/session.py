from scorelink.transport import Transport
from scorelink.utils.constants import HANDSHAKE_BUFFER_SIZE, END_MARKER
from scorelink.utils.exceptions import ConnectionClosedError, ProtocolError
from .messages import MatchState, STATE_SIZE, encode_player_number, encode_score, validate_player_number


class ScoreExchangeSession:
    """One client's blocking conversation with the relay."""

    def __init__(self, transport: Transport, player_number: int):
        self.transport = transport
        self.player_number = validate_player_number(player_number)
        self.handshake_reply = None
        self._closed = False

    @property
    def connected(self) -> bool:
        return self.handshake_reply is not None and not self._closed

    def handshake(self) -> bytes:
        self.transport.write(encode_player_number(self.player_number))
        reply = self.transport.read(HANDSHAKE_BUFFER_SIZE)
        if not reply:
            raise ConnectionClosedError("Relay closed the connection during handshake")
        self.handshake_reply = reply
        return reply

    def exchange(self, score) -> MatchState:
        """Send our score, then block until the next match state arrives."""
        if self._closed:
            raise ProtocolError("Session is closed")
        if self.handshake_reply is None:
            raise ProtocolError("Handshake has not been performed")

        self.transport.write(encode_score(score))
        return MatchState.decode(self.transport.read_exact(STATE_SIZE))

    def close(self, graceful: bool = True) -> None:
        """
        Leave the relay.

        A graceful close sends the end marker and shuts the stream down
        before closing; otherwise the socket is just closed.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if graceful and self.handshake_reply is not None and self.transport.is_open:
                self.transport.write(END_MARKER)
                self.transport.shutdown()
        finally:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close(graceful=exc_type is None)
        return False

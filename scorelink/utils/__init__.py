from .constants import (
    DEFAULT_RELAY_HOST, DEFAULT_RELAY_PORT, DEFAULT_PLAYER_NUMBER,
    VALID_PLAYER_NUMBERS, HANDSHAKE_BUFFER_SIZE, END_MARKER,
)
from .exceptions import (
    ScorelinkException, CodecError, UsageError, UnsupportedTypeError,
    BufferTooShortError, ValueOutOfRangeError, TransportError,
    ConnectionClosedError, ProtocolError, CLIError, ValidationError,
)

__all__ = [
    'DEFAULT_RELAY_HOST', 'DEFAULT_RELAY_PORT', 'DEFAULT_PLAYER_NUMBER',
    'VALID_PLAYER_NUMBERS', 'HANDSHAKE_BUFFER_SIZE', 'END_MARKER',
    'ScorelinkException', 'CodecError', 'UsageError', 'UnsupportedTypeError',
    'BufferTooShortError', 'ValueOutOfRangeError', 'TransportError',
    'ConnectionClosedError', 'ProtocolError', 'CLIError', 'ValidationError',
]

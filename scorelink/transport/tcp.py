import socket
from typing import Optional

from .base import Transport
from scorelink.utils.exceptions import TransportError


class TcpTransport(Transport):
    """Blocking TCP stream. timeout=None waits forever on every call."""

    def __init__(self, host: str, port: int, timeout: Optional[float] = None):
        self.host = host
        self.port = port
        self._sock = None

        try:
            self._sock = socket.create_connection((host, port), timeout=timeout)
            self._sock.settimeout(timeout)
        except OSError as e:
            raise TransportError(f"Failed to connect to {host}:{port}: {e}") from e

    @classmethod
    def from_socket(cls, sock: socket.socket) -> "TcpTransport":
        """Wrap an already connected socket."""
        transport = cls.__new__(cls)
        try:
            transport.host, transport.port = sock.getpeername()[:2]
        except (OSError, ValueError):
            transport.host, transport.port = "", 0
        transport._sock = sock
        return transport

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Transport is closed")
        return self._sock

    def write(self, data: bytes) -> int:
        sock = self._require_socket()
        try:
            sock.sendall(data)
            return len(data)
        except OSError as e:
            raise TransportError(f"TCP write error: {e}") from e

    def read(self, size: int = 1) -> bytes:
        sock = self._require_socket()
        try:
            return sock.recv(size)
        except OSError as e:
            raise TransportError(f"TCP read error: {e}") from e

    def shutdown(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            raise TransportError(f"TCP shutdown error: {e}") from e

    def close(self) -> None:
        if self._sock:
            try:
                self._sock.close()
            finally:
                self._sock = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

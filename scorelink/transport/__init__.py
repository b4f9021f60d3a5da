from typing import Optional

from .base import Transport
from .tcp import TcpTransport
from scorelink.utils.exceptions import ValidationError


def parse_address(connection_string: str) -> tuple:
    """Split 'tcp:host:port' or 'host:port' into (host, port)."""
    address = connection_string
    if address.startswith("tcp:"):
        address = address[4:]

    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValidationError(f"Invalid relay address {connection_string!r} (expected HOST:PORT)")
    try:
        port_num = int(port)
    except ValueError:
        raise ValidationError(f"Invalid port in relay address {connection_string!r}") from None
    if not 0 < port_num < 65536:
        raise ValidationError(f"Port out of range in relay address {connection_string!r}")
    return host, port_num


def create_transport(connection_string: str, timeout: Optional[float] = None) -> Transport:
    """Create a TCP transport for the given connection string.
    
    Args:
        connection_string: Relay address (e.g., '127.0.0.1:13000', 'tcp:relay.local:13000')
        timeout: Socket timeout in seconds (default: None, block forever)
    
    Returns:
        TcpTransport instance
    """
    host, port = parse_address(connection_string)
    return TcpTransport(host=host, port=port, timeout=timeout)


__all__ = [
    'Transport',
    'TcpTransport',
    'parse_address',
    'create_transport',
]

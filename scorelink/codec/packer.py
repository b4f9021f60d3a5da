"""
Module-level pack/unpack helpers and the incremental BinaryBuilder.

These mirror Python's struct module:

    pack("<I", 1)                         -> b'\\x01\\x00\\x00\\x00'
    unpack("<?h", data, [BOOL, INT32])    -> (True, 42)
    unpack_single("<H", data)             -> 513
"""

from typing import Iterable, Optional

from scorelink.utils.exceptions import UsageError
from .format import get_format
from .kinds import ScalarKind


def calcsize(fmt: str) -> int:
    """Number of bytes described by fmt."""
    return get_format(fmt).size


def pack(fmt: str, *values) -> bytes:
    """Pack values according to fmt."""
    return get_format(fmt).pack(*values)


def unpack(fmt: str, data, kinds: Optional[Iterable[ScalarKind]] = None) -> tuple:
    """
    Unpack data according to fmt.

    Args:
        fmt: Format string
        data: bytes-like buffer holding at least calcsize(fmt) bytes
        kinds: Requested output kind per type directive (default: the
            directive's own kind)

    Returns:
        Tuple of decoded values, one per type directive
    """
    return get_format(fmt).unpack(data, kinds)


def unpack_from(fmt: str, data, offset: int = 0, kinds: Optional[Iterable[ScalarKind]] = None) -> tuple:
    return get_format(fmt).unpack_from(data, offset, kinds)


def unpack_single(fmt: str, data, kind: Optional[ScalarKind] = None):
    """Unpack a format holding exactly one value and return that value."""
    compiled = get_format(fmt)
    if kind is None:
        if compiled.count != 1:
            raise UsageError(
                f"Format {fmt!r} holds {compiled.count} values, expected exactly one"
            )
        return compiled.unpack(data)[0]
    return compiled.unpack(data, [kind])[0]


class BinaryBuilder:
    """
    Accumulates packed values into one byte string.

    Usage:
        builder = BinaryBuilder()
        builder.append_values("<?h", True, 42)
        builder.append_byte(0xFF)
        payload = builder.to_bytes()
    """

    def __init__(self, initial: bytes = b""):
        self._buffer = bytearray(initial)

    def __len__(self):
        return len(self._buffer)

    def append_byte(self, value: int) -> "BinaryBuilder":
        self._buffer.append(value)
        return self

    def append_bytes(self, values: bytes) -> "BinaryBuilder":
        self._buffer += values
        return self

    def append_values(self, fmt: str, *values) -> "BinaryBuilder":
        self._buffer += pack(fmt, *values)
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

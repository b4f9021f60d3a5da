"""
Format string compilation and the reusable StructFormat.

A format string is scanned left to right:

- '<' / '>' switch the byte order for every later directive
  (little-endian until told otherwise)
- 'x' is one zero padding byte with no value
- every other character is a type directive (see ScalarKind)

Usage:
    fmt = StructFormat("<?h?hh")
    data = fmt.pack(True, 42, False, 100, 50)
    active, pos, *_ = fmt.unpack(data)
"""

import struct
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from scorelink.utils.exceptions import (
    UsageError, UnsupportedTypeError, BufferTooShortError,
)
from .kinds import ScalarKind, LITTLE_ENDIAN, BIG_ENDIAN, NATIVE_BYTE_ORDER


MODE_LITTLE = '<'
MODE_BIG = '>'
PAD = 'x'


@dataclass(frozen=True)
class Directive:
    """A padding byte (kind is None) or a typed slot."""
    char: str
    kind: Optional[ScalarKind]
    little_endian: bool

    @property
    def width(self) -> int:
        return self.kind.width if self.kind is not None else 1


def _require_str(fmt) -> str:
    if not isinstance(fmt, str):
        raise UsageError(f"Format must be a string, got {type(fmt).__name__}")
    return fmt


def compile_format(fmt: str) -> Tuple[Directive, ...]:
    """Translate a format string into its padding and type directives."""
    return _compile(_require_str(fmt))


@lru_cache(maxsize=256)
def _compile(fmt: str) -> Tuple[Directive, ...]:
    directives = []
    little_endian = True
    for ch in fmt:
        if ch == MODE_LITTLE:
            little_endian = True
        elif ch == MODE_BIG:
            little_endian = False
        elif ch == PAD:
            directives.append(Directive(ch, None, little_endian))
        else:
            directives.append(Directive(ch, ScalarKind.from_directive(ch), little_endian))
    return tuple(directives)


class StructFormat:
    """A compiled format that packs and unpacks values."""

    def __init__(self, fmt: str, native_order: str = NATIVE_BYTE_ORDER):
        if native_order not in (LITTLE_ENDIAN, BIG_ENDIAN):
            raise UsageError(f"native_order must be 'little' or 'big', got {native_order!r}")

        self.format = fmt
        self.native_order = native_order
        self._directives = compile_format(fmt)
        self._native_prefix = '<' if native_order == LITTLE_ENDIAN else '>'
        self.kinds = tuple(d.kind for d in self._directives if d.kind is not None)
        self.count = len(self.kinds)
        self.size = sum(d.width for d in self._directives)

    def __repr__(self):
        return f"StructFormat({self.format!r}, size={self.size})"

    def _needs_flip(self, directive: Directive) -> bool:
        return directive.little_endian != (self.native_order == LITTLE_ENDIAN)

    def _native_bytes(self, kind: ScalarKind, value) -> bytes:
        if kind is ScalarKind.BOOL:
            return b'\x01' if value else b'\x00'
        return struct.pack(self._native_prefix + kind.directive, value)

    def _native_value(self, kind: ScalarKind, raw: bytes):
        if kind is ScalarKind.BOOL:
            return raw[0] > 0
        return struct.unpack(self._native_prefix + kind.directive, raw)[0]

    def pack(self, *values) -> bytes:
        """
        Encode values, one per type directive, in order.

        Raises:
            UsageError: value count differs from the type directive count
            UnsupportedTypeError: a value is not numeric
            ValueOutOfRangeError: a value does not fit its directive
        """
        if len(values) < self.count:
            raise UsageError(
                f"Provided too few values for format {self.format!r}: "
                f"expected {self.count}, got {len(values)}"
            )
        if len(values) > self.count:
            raise UsageError(
                f"Provided too many values for format {self.format!r}: "
                f"expected {self.count}, got {len(values)}"
            )

        out = bytearray()
        remaining = iter(values)
        for directive in self._directives:
            if directive.kind is None:
                out.append(0)
                continue

            value = directive.kind.coerce(next(remaining))
            raw = self._native_bytes(directive.kind, value)
            if self._needs_flip(directive):
                raw = raw[::-1]
            out += raw

        return bytes(out)

    def resolve_kinds(self, kinds: Optional[Iterable[ScalarKind]]) -> Tuple[ScalarKind, ...]:
        """Validate the requested output kinds, defaulting to the directives' own."""
        if kinds is None:
            return self.kinds

        kinds = tuple(kinds)
        if len(kinds) != self.count:
            raise UsageError(
                f"Mismatch between requested kinds and format {self.format!r}: "
                f"format has {self.count} values, {len(kinds)} requested"
            )
        for kind in kinds:
            if not isinstance(kind, ScalarKind):
                raise UnsupportedTypeError(f"Unsupported output type {kind!r}")
        return kinds

    def unpack(self, data, kinds: Optional[Iterable[ScalarKind]] = None) -> tuple:
        return self.unpack_from(data, 0, kinds)

    def unpack_from(self, data, offset: int = 0, kinds: Optional[Iterable[ScalarKind]] = None) -> tuple:
        """
        Decode values from data starting at offset.

        Bytes after the end of the format are ignored.

        Raises:
            UsageError: kinds length differs from the type directive count
            UnsupportedTypeError: a requested kind is not a ScalarKind
            BufferTooShortError: fewer than size bytes available at offset
            ValueOutOfRangeError: a decoded value does not fit its requested kind
        """
        kinds = self.resolve_kinds(kinds)

        if offset < 0:
            raise UsageError(f"Offset must not be negative, got {offset}")
        available = len(data) - offset
        if available < self.size:
            raise BufferTooShortError(
                f"Format {self.format!r} needs {self.size} bytes, "
                f"buffer has {max(available, 0)}"
            )

        values = []
        requested = iter(kinds)
        cursor = offset
        for directive in self._directives:
            if directive.kind is None:
                cursor += 1
                continue

            width = directive.kind.width
            raw = bytes(data[cursor:cursor + width])
            if self._needs_flip(directive):
                raw = raw[::-1]
            value = self._native_value(directive.kind, raw)
            values.append(next(requested).coerce(value))
            cursor += width

        return tuple(values)


def get_format(fmt: str) -> StructFormat:
    """Return the cached StructFormat for fmt in native byte order."""
    return _cached_format(_require_str(fmt))


@lru_cache(maxsize=256)
def _cached_format(fmt: str) -> StructFormat:
    return StructFormat(fmt)

"""
Scalar kinds understood by the binary struct codec.

Every type directive in a format string maps to exactly one member of
ScalarKind. Value coercion is an exhaustive match over this closed set;
anything outside it is rejected with UnsupportedTypeError.
"""

import enum
import math
import numbers
import sys

from scorelink.utils.exceptions import UnsupportedTypeError, ValueOutOfRangeError


LITTLE_ENDIAN = "little"
BIG_ENDIAN = "big"

# Queried once from the interpreter, never assumed
NATIVE_BYTE_ORDER = sys.byteorder


class ScalarKind(enum.Enum):
    """Fixed-width primitive kinds: (directive, width in bytes, signed)."""

    BOOL = ('?', 1, False)
    INT8 = ('b', 1, True)
    UINT8 = ('B', 1, False)
    INT16 = ('h', 2, True)
    UINT16 = ('H', 2, False)
    INT32 = ('i', 4, True)
    UINT32 = ('I', 4, False)
    INT64 = ('q', 8, True)
    UINT64 = ('Q', 8, False)

    def __init__(self, directive: str, width: int, signed: bool):
        self.directive = directive
        self.width = width
        self.signed = signed

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def min_value(self) -> int:
        if self.signed:
            return -(1 << (self.width * 8 - 1))
        return 0

    @property
    def max_value(self) -> int:
        if self is ScalarKind.BOOL:
            return 1
        if self.signed:
            return (1 << (self.width * 8 - 1)) - 1
        return (1 << (self.width * 8)) - 1

    @classmethod
    def from_directive(cls, char: str) -> "ScalarKind":
        try:
            return _BY_DIRECTIVE[char]
        except KeyError:
            raise UnsupportedTypeError(f"Unknown format character {char!r}") from None

    @classmethod
    def from_label(cls, label: str) -> "ScalarKind":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            names = ", ".join(kind.label for kind in cls)
            raise UnsupportedTypeError(f"Unknown scalar kind {label!r} (expected one of: {names})") from None

    def coerce(self, value):
        """
        Convert a value to this kind.

        Booleans accept any real number and use its truth value. Integer
        kinds accept bools, integral numbers and finite reals (rounded
        half to even); the result must fit the kind's range.

        Raises:
            UnsupportedTypeError: value is not numeric
            ValueOutOfRangeError: value does not fit this kind
        """
        if not isinstance(value, numbers.Real):
            raise UnsupportedTypeError(
                f"Cannot convert {type(value).__name__} to {self.label}"
            )

        if self is ScalarKind.BOOL:
            return bool(value)

        if isinstance(value, numbers.Integral):
            result = int(value)
        else:
            if not math.isfinite(value):
                raise UnsupportedTypeError(f"Cannot convert {value!r} to {self.label}")
            result = int(round(float(value)))

        if not self.min_value <= result <= self.max_value:
            raise ValueOutOfRangeError(
                f"{value!r} is outside the {self.label} range "
                f"[{self.min_value}, {self.max_value}]"
            )
        return result


_BY_DIRECTIVE = {kind.directive: kind for kind in ScalarKind}

"""scorelink - binary struct codec and two-player score exchange client."""

__version__ = "0.1.0"

from .codec import (
    ScalarKind, StructFormat, BinaryBuilder,
    calcsize, pack, unpack, unpack_from, unpack_single,
    scalar, pack_record, unpack_record,
    NATIVE_BYTE_ORDER,
)
from .utils.exceptions import (
    ScorelinkException, CodecError, UsageError, UnsupportedTypeError,
    BufferTooShortError, ValueOutOfRangeError,
)

__all__ = [
    "__version__",
    "ScalarKind", "StructFormat", "BinaryBuilder",
    "calcsize", "pack", "unpack", "unpack_from", "unpack_single",
    "scalar", "pack_record", "unpack_record",
    "NATIVE_BYTE_ORDER",
    "ScorelinkException", "CodecError", "UsageError", "UnsupportedTypeError",
    "BufferTooShortError", "ValueOutOfRangeError",
]

"""Codec Layer - format-string driven binary struct packing."""

from .kinds import ScalarKind, NATIVE_BYTE_ORDER, LITTLE_ENDIAN, BIG_ENDIAN
from .format import Directive, StructFormat, compile_format, get_format
from .packer import (
    BinaryBuilder, calcsize, pack, unpack, unpack_from, unpack_single,
)
from .records import scalar, record_kinds, pack_record, unpack_record

__all__ = [
    "ScalarKind",
    "NATIVE_BYTE_ORDER",
    "LITTLE_ENDIAN",
    "BIG_ENDIAN",
    "Directive",
    "StructFormat",
    "compile_format",
    "get_format",
    # Functional API
    "BinaryBuilder",
    "calcsize",
    "pack",
    "unpack",
    "unpack_from",
    "unpack_single",
    # Records
    "scalar",
    "record_kinds",
    "pack_record",
    "unpack_record",
]

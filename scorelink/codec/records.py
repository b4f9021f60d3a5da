"""
Positional binding between dataclass records and format strings.

Fields are declared with scalar() so the codec knows the requested kind
of each slot without inspecting Python type annotations:

    @dataclass(frozen=True)
    class Header:
        version: int = scalar(ScalarKind.UINT8)
        length: int = scalar(ScalarKind.UINT16)

    header = unpack_record("<BH", data, Header)
"""

from dataclasses import field, fields, is_dataclass
from typing import Tuple, Type, TypeVar

from scorelink.utils.exceptions import UnsupportedTypeError
from .kinds import ScalarKind
from .packer import pack, unpack

T = TypeVar("T")

KIND_METADATA_KEY = "scorelink.kind"


def scalar(kind: ScalarKind, **kwargs):
    """dataclasses.field() carrying the slot's ScalarKind."""
    if not isinstance(kind, ScalarKind):
        raise UnsupportedTypeError(f"Unsupported field type {kind!r}")
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[KIND_METADATA_KEY] = kind
    return field(metadata=metadata, **kwargs)


def record_kinds(record_type: type) -> Tuple[ScalarKind, ...]:
    """Ordered field kinds of a scalar() dataclass."""
    if not (isinstance(record_type, type) and is_dataclass(record_type)):
        raise UnsupportedTypeError(f"{record_type!r} is not a dataclass type")

    kinds = []
    for f in fields(record_type):
        kind = f.metadata.get(KIND_METADATA_KEY)
        if kind is None:
            raise UnsupportedTypeError(
                f"Field '{f.name}' of {record_type.__name__} has no scalar kind"
            )
        kinds.append(kind)
    return tuple(kinds)


def unpack_record(fmt: str, data, record_type: Type[T]) -> T:
    values = unpack(fmt, data, record_kinds(record_type))
    return record_type(*values)


def pack_record(fmt: str, record) -> bytes:
    record_kinds(type(record))
    return pack(fmt, *(getattr(record, f.name) for f in fields(record)))

"""Low-level readers for the binary R1CS format and its header section."""

from __future__ import annotations

import struct
from typing import BinaryIO

from zkcircom.curves import Curve, check_subgroup_order
from zkcircom.errors import R1CSFileParsing
from zkcircom.r1cs import Header

SUPPORTED_FIELD_SIZE = 32

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


def _parsing_error(detail: object) -> R1CSFileParsing:
    return R1CSFileParsing(f"Encountered error while parsing R1CS file: {detail}")


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream`` or raise R1CSFileParsing."""
    try:
        data = stream.read(size)
    except OSError as exc:
        raise _parsing_error(repr(exc)) from exc
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise _parsing_error(f"unexpected end of data: wanted {size} bytes, got {got}")
    return bytes(data)


def read_u32(stream: BinaryIO) -> int:
    """Read a little-endian unsigned 32-bit integer."""
    return _U32.unpack(read_exact(stream, _U32.size))[0]


def read_u64(stream: BinaryIO) -> int:
    """Read a little-endian unsigned 64-bit integer."""
    return _U64.unpack(read_exact(stream, _U64.size))[0]


def parse_header(stream: BinaryIO, size: int, curve: Curve) -> Header:
    """Parse the header section of ``size`` bytes for circuits over ``curve``.

    Only 32-byte fields are supported; the subgroup order must belong to
    ``curve``.
    """
    field_size = read_u32(stream)
    if field_size != SUPPORTED_FIELD_SIZE:
        raise R1CSFileParsing("This parser only supports 32-byte fields")
    if size != 32 + field_size:
        raise R1CSFileParsing("Invalid header section size")

    subgroup_order = read_exact(stream, field_size)
    detected = check_subgroup_order(subgroup_order, curve)

    return Header(
        field_size=field_size,
        subgroup_order=subgroup_order,
        curve=detected,
        n_wires=read_u32(stream),
        n_pub_out=read_u32(stream),
        n_pub_in=read_u32(stream),
        n_prv_in=read_u32(stream),
        n_labels=read_u64(stream),
        n_constraints=read_u32(stream),
    )
import io
import struct

import pytest

from zkcircom.curves import BLS12_381_ORDER, BN128_ORDER, Curve
from zkcircom.errors import IncompatibleWithCurve, R1CSFileParsing, UnsupportedCurve
from zkcircom.r1cs_header import parse_header, read_exact, read_u32, read_u64

BN_HEADER = bytes.fromhex(
    "20000000"
    "010000f093f5e1439170b97948e833285d588181b64550b829a031e1724e6430"
    "07000000"
    "01000000"
    "02000000"
    "03000000"
    "e803000000000000"
    "03000000"
)


def _header_bytes(order: int, field_size: int = 32, counts=(4, 1, 0, 2, 4, 1)) -> bytes:
    n_wires, n_pub_out, n_pub_in, n_prv_in, n_labels, n_constraints = counts
    return (
        struct.pack("<I", field_size)
        + order.to_bytes(field_size, "little")
        + struct.pack("<IIIIQI", n_wires, n_pub_out, n_pub_in, n_prv_in, n_labels, n_constraints)
    )


def test_read_u32_little_endian():
    stream = io.BytesIO(bytes.fromhex("72316373") + struct.pack("<I", 1))
    assert read_u32(stream) == struct.unpack("<I", b"r1cs")[0]
    assert read_u32(stream) == 1


def test_read_u64_little_endian():
    stream = io.BytesIO(bytes.fromhex("e803000000000000"))
    assert read_u64(stream) == 0x03E8


def test_read_exact_returns_requested_bytes():
    stream = io.BytesIO(b"abcdef")
    assert read_exact(stream, 4) == b"abcd"
    assert stream.read() == b"ef"


def test_read_exact_short_read_raises():
    with pytest.raises(R1CSFileParsing):
        read_exact(io.BytesIO(b"ab"), 4)


def test_read_u64_truncated_raises():
    with pytest.raises(R1CSFileParsing):
        read_u64(io.BytesIO(b"\x01\x02\x03"))


def test_parse_bn128_header_from_source_vector():
    header = parse_header(io.BytesIO(BN_HEADER), 0x40, Curve.BN128)
    assert header.field_size == 32
    assert header.curve is Curve.BN128
    assert header.subgroup_order == BN128_ORDER.to_bytes(32, "little")
    assert header.n_wires == 7
    assert header.n_pub_out == 1
    assert header.n_pub_in == 2
    assert header.n_prv_in == 3
    assert header.n_labels == 0x03E8
    assert header.n_constraints == 3


def test_parse_header_consumes_whole_section():
    stream = io.BytesIO(BN_HEADER + b"rest")
    parse_header(stream, 64, Curve.BN128)
    assert stream.read() == b"rest"


def test_parse_bls_header_round_trip():
    data = _header_bytes(BLS12_381_ORDER, counts=(12, 2, 2, 4, 14, 5))
    header = parse_header(io.BytesIO(data), 64, Curve.BLS12_381)
    assert header.curve is Curve.BLS12_381
    assert (header.n_wires, header.n_pub_out, header.n_pub_in) == (12, 2, 2)
    assert (header.n_prv_in, header.n_labels, header.n_constraints) == (4, 14, 5)


def test_unsupported_field_size():
    data = struct.pack("<I", 8) + (18446744069414584321).to_bytes(8, "little")
    with pytest.raises(R1CSFileParsing) as info:
        parse_header(io.BytesIO(data), 40, Curve.BN128)
    assert info.value == R1CSFileParsing("This parser only supports 32-byte fields")


def test_invalid_section_size():
    with pytest.raises(R1CSFileParsing) as info:
        parse_header(io.BytesIO(BN_HEADER), 65, Curve.BN128)
    assert info.value == R1CSFileParsing("Invalid header section size")


def test_incompatible_curve():
    with pytest.raises(IncompatibleWithCurve):
        parse_header(io.BytesIO(BN_HEADER), 64, Curve.BLS12_381)


def test_unknown_subgroup_order():
    data = _header_bytes(12345)
    with pytest.raises(UnsupportedCurve):
        parse_header(io.BytesIO(data), 64, Curve.BN128)


def test_truncated_header_raises():
    with pytest.raises(R1CSFileParsing):
        parse_header(io.BytesIO(BN_HEADER[:-2]), 64, Curve.BN128)
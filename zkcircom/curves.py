"""Curves supported for circuits and detection from their subgroup order."""

from __future__ import annotations

import enum

from zkcircom.errors import IncompatibleWithCurve, UnsupportedCurve

BN128_ORDER = 21888242871839275222246405745257275088548364400416034343698204186575808495617
BLS12_381_ORDER = 52435875175126190479447740508185965837690552500527637822603658699938581184513


class Curve(enum.Enum):
    """A supported curve; its value is the order of its largest subgroup."""

    BN128 = BN128_ORDER
    BLS12_381 = BLS12_381_ORDER

    def to_bytes(self) -> bytes:
        """Serialize the curve as a single tag byte."""
        return bytes([_TAGS[self]])

    @classmethod
    def from_bytes(cls, data: bytes) -> "Curve":
        """Read a curve from its tag byte."""
        if len(data) < 1:
            raise ValueError("no data to read a curve from")
        for curve, tag in _TAGS.items():
            if tag == data[0]:
                return curve
        raise ValueError(f"invalid curve tag {data[0]}")


_TAGS = {Curve.BN128: 0, Curve.BLS12_381: 1}

DEFAULT_CURVE = Curve.BLS12_381


def check_subgroup_order(subgroup_order_bytes: bytes, expected: Curve) -> Curve:
    """Identify the curve from a little-endian subgroup order.

    Raises UnsupportedCurve for an unknown order and IncompatibleWithCurve
    when the order belongs to a curve other than ``expected``.
    """
    order = int.from_bytes(bytes(subgroup_order_bytes), "little")
    try:
        curve = Curve(order)
    except ValueError:
        raise UnsupportedCurve(f'Unknown curve with order "{order}"') from None
    if curve is not expected:
        raise IncompatibleWithCurve()
    return curve
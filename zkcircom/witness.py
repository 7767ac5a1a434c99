"""Witness calculation driven by a Circom-generated WASM module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Union

from zkcircom.curves import Curve, check_subgroup_order
from zkcircom.errors import (
    IncorrectNumberOfInputsProvided,
    IncorrectNumberOfSignalsProvided,
    UnsupportedVersion,
)
from zkcircom.wasm import Wasm

SUPPORTED_CIRCOM_VERSION = 2

_FNV_OFFSET_BASIS = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_U64_MASK = (1 << 64) - 1
_U32_MASK = 0xFFFFFFFF

Inputs = Union[Mapping[str, Sequence[int]], Iterable[tuple[str, Sequence[int]]]]


def fnv(name: str) -> tuple[int, int]:
    """64-bit FNV-1a hash of a signal name, split into (high, low) 32-bit halves."""
    h = _FNV_OFFSET_BASIS
    for byte in name.encode("utf-8"):
        h ^= byte
        h = (h * _FNV_PRIME) & _U64_MASK
    return h >> 32, h & _U32_MASK


def to_array32(value: int, size: int) -> list[int]:
    """Little-endian 32-bit chunks of a non-negative ``value``, ``size`` of them."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value >> (32 * size):
        raise ValueError(f"value does not fit in {size} 32-bit chunks")
    return [(value >> (32 * i)) & _U32_MASK for i in range(size)]


def from_array32(chunks: Iterable[int], modulus: int) -> int:
    """Read a little-endian base-2**32 number and reduce it modulo ``modulus``."""
    total = sum((chunk & _U32_MASK) << (32 * i) for i, chunk in enumerate(chunks))
    return total % modulus


@dataclass
class WitnessCalculator:
    """Calculates all wire values of a circuit from its WASM module."""

    instance: Wasm
    circom_version: int
    curve: Curve

    @classmethod
    def from_instance(cls, instance: Wasm, curve: Curve) -> "WitnessCalculator":
        """Wrap a module, checking its Circom version and that it targets ``curve``."""
        version = instance.get_version()
        if version != SUPPORTED_CIRCOM_VERSION:
            raise UnsupportedVersion(version)

        n32 = instance.get_field_num_len32()
        instance.get_raw_prime()
        order_bytes = b"".join(
            instance.read_shared_rw_memory(i).to_bytes(4, "little") for i in range(n32)
        )
        detected = check_subgroup_order(order_bytes, curve)
        return cls(instance=instance, circom_version=version, curve=detected)

    def calculate_witnesses(self, inputs: Inputs, sanity_check: bool) -> list[int]:
        """Values of every wire given the input signals.

        ``inputs`` maps each signal name to its values (several for an array
        signal). The result starts with the constant wire 1, then the outputs,
        then the inputs, followed by the intermediate wires.
        """
        modulus = self.curve.value
        wasm = self.instance
        wasm.init(sanity_check)
        field_len = wasm.get_field_num_len32()

        pairs = inputs.items() if isinstance(inputs, Mapping) else inputs
        seen_inputs = 0
        for name, values in pairs:
            msb, lsb = fnv(name)
            seen_signals = 0
            for position, value in enumerate(values):
                for offset, chunk in enumerate(to_array32(int(value) % modulus, field_len)):
                    wasm.write_shared_rw_memory(offset, chunk)
                wasm.set_input_signal(msb, lsb, position)
                seen_inputs += 1
                seen_signals += 1
            required_signals = wasm.get_signal_count(msb, lsb)
            if required_signals != seen_signals:
                raise IncorrectNumberOfSignalsProvided(name, required_signals, seen_signals)

        required_inputs = wasm.get_input_count()
        if required_inputs != seen_inputs:
            raise IncorrectNumberOfInputsProvided(required_inputs, seen_inputs)

        wires = []
        for i in range(wasm.get_witness_count()):
            wasm.get_witness(i)
            chunks = [wasm.read_shared_rw_memory(j) for j in range(field_len)]
            wires.append(from_array32(chunks, modulus))
        return wires
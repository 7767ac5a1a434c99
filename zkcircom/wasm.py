"""Calls into the WASM module that Circom generates for witness calculation."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping

from zkcircom.errors import (
    CircomError,
    UnknownWasmFunction,
    WasmFunctionCallFailed,
    WasmFunctionResultEmpty,
)

_U32_MASK = 0xFFFFFFFF
_I32_SIGN = 1 << 31

Export = Callable[..., Any]


def _as_i32(value: int) -> int:
    """Reinterpret an unsigned 32-bit value as the signed i32 WASM expects."""
    bits = int(value) & _U32_MASK
    return bits - (1 << 32) if bits >= _I32_SIGN else bits


def _results(raw: Any) -> tuple[Any, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (tuple, list)):
        return tuple(raw)
    return (raw,)


class Wasm:
    """The exported functions of a Circom WASM module.

    ``exports`` maps each exported function name to a callable that takes
    i32 arguments and returns its results as a sequence, a single value, or
    ``None`` when it has none.
    """

    def __init__(self, exports: Mapping[str, Export]) -> None:
        self._exports = dict(exports)

    @property
    def exports(self) -> Mapping[str, Export]:
        return MappingProxyType(self._exports)

    def init(self, sanity_check: bool) -> None:
        """Reset the module's state before a new witness calculation."""
        self._call("init", int(bool(sanity_check)))

    def get_version(self) -> int:
        """Circom version that generated the module; 1 when it does not say."""
        if "getVersion" not in self._exports:
            return 1
        return self.get_u32("getVersion")

    def get_field_num_len32(self) -> int:
        """Number of 32-bit chunks needed to represent a field element."""
        return self.get_u32("getFieldNumLen32")

    def get_raw_prime(self) -> None:
        """Place the prime subgroup order, little-endian, in shared memory."""
        self._call("getRawPrime")

    def read_shared_rw_memory(self, i: int) -> int:
        """Read the 32-bit chunk at offset ``i`` of shared memory."""
        return self.get_u32("readSharedRWMemory", i)

    def write_shared_rw_memory(self, i: int, v: int) -> None:
        """Write the 32-bit chunk ``v`` at offset ``i`` of shared memory."""
        self._call("writeSharedRWMemory", i, v)

    def set_input_signal(self, hmsb: int, hlsb: int, pos: int) -> None:
        """Assign the value in shared memory to position ``pos`` of a signal."""
        self._call("setInputSignal", hmsb, hlsb, pos)

    def get_witness(self, i: int) -> None:
        """Place the value of wire ``i`` in shared memory."""
        self._call("getWitness", i)

    def get_witness_count(self) -> int:
        """Number of wires in the circuit."""
        return self.get_u32("getWitnessSize")

    def get_input_count(self) -> int:
        """Number of input signals."""
        return self.get_u32("getInputSize")

    def get_signal_count(self, hmsb: int, hlsb: int) -> int:
        """Length of an input signal: the array length, or 1 for a scalar."""
        return self.get_u32("getInputSignalSize", hmsb, hlsb)

    def get_u32(self, name: str, *args: int) -> int:
        """Call ``name`` and return its first result as an unsigned 32-bit value."""
        results = self._call(name, *args)
        if not results:
            raise WasmFunctionResultEmpty(name)
        first = results[0]
        if isinstance(first, bool) or not isinstance(first, int):
            raise WasmFunctionResultEmpty(name)
        return first & _U32_MASK

    def _func(self, name: str) -> Export:
        try:
            return self._exports[name]
        except KeyError:
            raise UnknownWasmFunction(name) from None

    def _call(self, name: str, *args: int) -> tuple[Any, ...]:
        func = self._func(name)
        try:
            raw = func(*(_as_i32(arg) for arg in args))
        except CircomError:
            raise
        except Exception as exc:
            raise WasmFunctionCallFailed(name) from exc
        return _results(raw)
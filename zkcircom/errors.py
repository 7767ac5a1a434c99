"""Exceptions raised while loading circuits and calculating witnesses."""

from __future__ import annotations

from typing import Any


class CircomError(Exception):
    """Base class of every error raised by this package.

    Two errors compare equal when they are of the same type and carry the
    same arguments.
    """

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self), self.args))

    def __repr__(self) -> str:
        inner = ", ".join(repr(arg) for arg in self.args)
        return f"{type(self).__name__}({inner})"


class _MessageError(CircomError):
    """An error that carries a single descriptive string."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedVersion(CircomError):
    """Only version 2 of Circom is supported."""

    def __init__(self, version: int) -> None:
        super().__init__(version)
        self.version = version

    def __str__(self) -> str:
        return f"unsupported Circom version {self.version}"


class UnsupportedCurve(_MessageError):
    """Only BN128 and BLS12-381 curves are supported."""


class IncompatibleWithCurve(CircomError):
    """The file or module was generated for a different curve than requested."""

    def __str__(self) -> str:
        return "circuit is incompatible with the requested curve"


class UnknownWasmFunction(CircomError):
    """The WASM module does not export a function of this name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown WASM function {self.name!r}"


class WasmFunctionCallFailed(CircomError):
    """Calling the named WASM function failed."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"call to WASM function {self.name!r} failed"


class WasmFunctionResultEmpty(CircomError):
    """The named WASM function returned no result."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"WASM function {self.name!r} returned no result"


class WasmFunctionResultNoti32(CircomError):
    """The named WASM function did not return an i32."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"WASM function {self.name!r} did not return an i32"


class IncorrectNumberOfInputsProvided(CircomError):
    """The number of inputs given differs from what the circuit requires."""

    def __init__(self, required: int, provided: int) -> None:
        super().__init__(required, provided)
        self.required = required
        self.provided = provided

    def __str__(self) -> str:
        return f"circuit requires {self.required} inputs but {self.provided} were provided"


class IncorrectNumberOfSignalsProvided(CircomError):
    """The number of signals given for an input differs from what it requires."""

    def __init__(self, name: str, required: int, provided: int) -> None:
        super().__init__(name, required, provided)
        self.name = name
        self.required = required
        self.provided = provided

    def __str__(self) -> str:
        return (
            f"input {self.name!r} requires {self.required} signals "
            f"but {self.provided} were provided"
        )


class UnableToOpenR1CSFile(_MessageError):
    """The R1CS file could not be opened."""


class UnableToLoadWasmModuleFromFile(_MessageError):
    """The WASM module could not be loaded from a file."""


class UnableToLoadWasmModuleFromBytes(_MessageError):
    """The WASM module could not be loaded from bytes."""


class WasmInstantiationError(_MessageError):
    """The WASM module could not be instantiated."""


class R1CSFileParsing(_MessageError):
    """The R1CS file is malformed or unsupported."""


def _describe(error: Any) -> str:
    return f"{type(error).__name__}: {error}"
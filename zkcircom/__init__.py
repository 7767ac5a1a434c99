"""Circom R1CS parsing, witness calculation through a Circom witness module, and constraint checking."""

__version__ = "0.1.0"

__all__ = ["circuit", "curves", "errors", "r1cs", "r1cs_header", "r1cs_reader", "wasm", "witness"]
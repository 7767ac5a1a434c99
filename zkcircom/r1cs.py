"""Rank-1 constraint system data as read from a Circom R1CS file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from zkcircom.curves import DEFAULT_CURVE, Curve


@dataclass
class LinearCombination:
    """A linear combination of wires: a list of (wire index, coefficient)."""

    terms: list[tuple[int, int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.terms)

    def evaluate(self, wires: Sequence[int], modulus: int) -> int:
        """Value of the combination for the given wire values, reduced mod ``modulus``."""
        return sum(coeff * wires[index] for index, coeff in self.terms) % modulus


@dataclass
class Constraint:
    """A single constraint ``a * b - c = 0``."""

    a: LinearCombination = field(default_factory=LinearCombination)
    b: LinearCombination = field(default_factory=LinearCombination)
    c: LinearCombination = field(default_factory=LinearCombination)

    def is_satisfied(self, wires: Sequence[int], modulus: int) -> bool:
        """Whether the wire values satisfy the constraint in the field of ``modulus``."""
        left = self.a.evaluate(wires, modulus) * self.b.evaluate(wires, modulus)
        return (left - self.c.evaluate(wires, modulus)) % modulus == 0


@dataclass
class Header:
    """Header section of an R1CS file."""

    field_size: int = 0
    subgroup_order: bytes = b""
    curve: Curve = DEFAULT_CURVE
    n_wires: int = 0
    n_pub_out: int = 0
    n_pub_in: int = 0
    n_prv_in: int = 0
    n_labels: int = 0
    n_constraints: int = 0


@dataclass
class R1CS:
    """A constraint system ready for use by a circuit.

    ``num_public`` counts the public inputs and outputs plus the constant
    wire "1"; ``num_private`` counts private inputs and intermediate wires.
    ``wire_to_label_mapping[i]`` is the label index of wire ``i``.
    """

    curve: Curve = DEFAULT_CURVE
    num_public: int = 0
    num_private: int = 0
    constraints: list[Constraint] = field(default_factory=list)
    wire_to_label_mapping: list[int] = field(default_factory=list)


@dataclass
class R1CSFile:
    """Contents of a parsed R1CS file."""

    version: int = 0
    header: Header = field(default_factory=Header)
    constraints: list[Constraint] = field(default_factory=list)
    wire_mapping: list[int] = field(default_factory=list)

    def to_r1cs(self) -> R1CS:
        """Build the constraint system described by this file."""
        header = self.header
        num_public = 1 + header.n_pub_in + header.n_pub_out
        num_private = header.n_wires - num_public
        if num_private < 0:
            raise ValueError(
                f"header declares {header.n_wires} wires but {num_public} public signals"
            )
        return R1CS(
            curve=header.curve,
            num_public=num_public,
            num_private=num_private,
            constraints=list(self.constraints),
            wire_to_label_mapping=[int(label) for label in self.wire_mapping],
        )
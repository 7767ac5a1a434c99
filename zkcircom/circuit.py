"""A Circom circuit turned into constraints over its wire values."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from zkcircom.curves import Curve
from zkcircom.errors import CircomError, UnableToOpenR1CSFile
from zkcircom.r1cs import R1CS, LinearCombination
from zkcircom.r1cs_reader import load_r1cs
from zkcircom.witness import Inputs, WitnessCalculator

PathLike = Union[str, "os.PathLike[str]"]


class VariableKind(enum.Enum):
    """Whether a variable is public (instance) or private (witness)."""

    INSTANCE = "instance"
    WITNESS = "witness"


@dataclass(frozen=True)
class Variable:
    """A variable of a constraint system; instance 0 is the constant 1."""

    kind: VariableKind
    index: int


ONE = Variable(VariableKind.INSTANCE, 0)

Term = tuple[int, Variable]


@dataclass
class ConstraintSystem:
    """Rank-1 constraints over variables in the prime field of ``modulus``.

    The first instance variable is always the constant 1.
    """

    modulus: int
    instance_values: list[int] = field(default_factory=lambda: [1])
    witness_values: list[int] = field(default_factory=list)
    constraints: list[tuple[list[Term], list[Term], list[Term]]] = field(
        default_factory=list
    )

    def new_input_variable(self, value: int) -> Variable:
        """Allocate a public variable holding ``value``."""
        self.instance_values.append(int(value) % self.modulus)
        return Variable(VariableKind.INSTANCE, len(self.instance_values) - 1)

    def new_witness_variable(self, value: int) -> Variable:
        """Allocate a private variable holding ``value``."""
        self.witness_values.append(int(value) % self.modulus)
        return Variable(VariableKind.WITNESS, len(self.witness_values) - 1)

    def enforce_constraint(
        self, a: Iterable[Term], b: Iterable[Term], c: Iterable[Term]
    ) -> None:
        """Add the constraint ``a * b = c``; each side is a list of (coefficient, variable)."""
        sides = tuple(list(side) for side in (a, b, c))
        for side in sides:
            for _, variable in side:
                self._value(variable)
        self.constraints.append(sides)  # type: ignore[arg-type]

    def is_satisfied(self) -> bool:
        """Whether the assigned values satisfy every constraint."""
        return all(
            (self._evaluate(a) * self._evaluate(b) - self._evaluate(c)) % self.modulus == 0
            for a, b, c in self.constraints
        )

    def _value(self, variable: Variable) -> int:
        values = (
            self.instance_values
            if variable.kind is VariableKind.INSTANCE
            else self.witness_values
        )
        if not 0 <= variable.index < len(values):
            raise ValueError(f"unknown variable {variable}")
        return values[variable.index]

    def _evaluate(self, terms: Sequence[Term]) -> int:
        return sum(coeff * self._value(variable) for coeff, variable in terms) % self.modulus


@dataclass
class CircomCircuit:
    """A circuit from a Circom R1CS file, optionally with values for all its wires.

    The wires start with the constant 1, then the public wires, then the
    private wires.
    """

    r1cs: R1CS
    wires: Optional[list[int]] = None

    @classmethod
    def from_r1cs_file(cls, path: PathLike, curve: Curve) -> "CircomCircuit":
        """Load the circuit from the R1CS file at ``path`` for ``curve``."""
        try:
            r1cs = load_r1cs(path, curve)
        except (CircomError, ValueError) as err:
            raise UnableToOpenR1CSFile(
                f"Encountered error while opening R1CS file: {err!r}"
            ) from err
        return cls(r1cs)

    def public_inputs(self) -> Optional[list[int]]:
        """Public outputs followed by public inputs, without the leading 1; None without wires."""
        if self.wires is None:
            return None
        return self.wires[1 : self.r1cs.num_public]

    def set_wires(self, wires: Sequence[int]) -> None:
        """Set values for all the circuit's wires."""
        self.wires = list(wires)

    def set_wires_using_witness_calculator(
        self, calculator: WitnessCalculator, inputs: Inputs, sanity_check: bool
    ) -> None:
        """Compute and set all wire values from the input signals."""
        self.wires = calculator.calculate_witnesses(inputs, sanity_check)

    def generate_constraints(self, cs: ConstraintSystem) -> None:
        """Allocate the circuit's variables in ``cs`` and enforce its constraints.

        Without wire values every variable is assigned zero.
        """
        if cs.modulus != self.r1cs.curve.value:
            raise ValueError("constraint system field does not match the circuit's curve")
        num_public = self.r1cs.num_public
        num_private = self.r1cs.num_private
        wires = self.wires
        if wires is not None and len(wires) < num_public + num_private:
            raise ValueError(
                f"circuit has {num_public + num_private} wires but {len(wires)} values were set"
            )

        for i in range(1, num_public):
            cs.new_input_variable(0 if wires is None else wires[i])
        for i in range(num_private):
            cs.new_witness_variable(0 if wires is None else wires[num_public + i])

        def variable(index: int) -> Variable:
            if index < num_public:
                return Variable(VariableKind.INSTANCE, index)
            return Variable(VariableKind.WITNESS, index - num_public)

        def terms(lc: LinearCombination) -> list[Term]:
            return [(coeff, variable(index)) for index, coeff in lc]

        for constraint in self.r1cs.constraints:
            cs.enforce_constraint(terms(constraint.a), terms(constraint.b), terms(constraint.c))
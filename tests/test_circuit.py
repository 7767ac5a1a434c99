import struct

import pytest

from zkcircom.circuit import (
    CircomCircuit,
    ConstraintSystem,
    Variable,
    VariableKind,
)
from zkcircom.curves import Curve
from zkcircom.errors import UnableToOpenR1CSFile
from zkcircom.r1cs import R1CS, Constraint, LinearCombination

P = Curve.BN128.value


def multiply2_r1cs(curve=Curve.BN128, neg=False):
    one = curve.value - 1 if neg else 1
    constraint = Constraint(
        LinearCombination([(2, one)]),
        LinearCombination([(3, 1)]),
        LinearCombination([(1, one)]),
    )
    return R1CS(
        curve=curve,
        num_public=2,
        num_private=2,
        constraints=[constraint],
        wire_to_label_mapping=[0, 1, 2, 3],
    )


def lc_bytes(terms):
    out = struct.pack("<I", len(terms))
    for wire, coeff in terms:
        out += struct.pack("<I", wire) + coeff.to_bytes(32, "little")
    return out


def multiply2_file_bytes(curve):
    header = struct.pack("<I", 32) + curve.value.to_bytes(32, "little")
    header += struct.pack("<IIIIQI", 4, 1, 0, 2, 4, 1)
    constraints = lc_bytes([(2, 1)]) + lc_bytes([(3, 1)]) + lc_bytes([(1, 1)])
    mapping = b"".join(struct.pack("<Q", i) for i in range(4))
    data = b"r1cs" + struct.pack("<II", 1, 3)
    for kind, body in ((1, header), (2, constraints), (3, mapping)):
        data += struct.pack("<IQ", kind, len(body)) + body
    return data


class FakeCalculator:
    def __init__(self, wires):
        self.wires = wires
        self.calls = []

    def calculate_witnesses(self, inputs, sanity_check):
        self.calls.append((dict(inputs), sanity_check))
        return list(self.wires)


def test_constraint_system_starts_with_one():
    cs = ConstraintSystem(P)
    assert cs.instance_values == [1]
    assert cs.witness_values == []


def test_constraint_system_allocation_and_check():
    cs = ConstraintSystem(P)
    x = cs.new_input_variable(33)
    a = cs.new_witness_variable(3)
    b = cs.new_witness_variable(11)
    assert x == Variable(VariableKind.INSTANCE, 1)
    assert a == Variable(VariableKind.WITNESS, 0)
    cs.enforce_constraint([(1, a)], [(1, b)], [(1, x)])
    assert cs.is_satisfied() is True
    cs.enforce_constraint([(1, a)], [(1, a)], [(1, x)])
    assert cs.is_satisfied() is False


def test_constraint_system_reduces_values():
    cs = ConstraintSystem(P)
    v = cs.new_witness_variable(P + 5)
    assert cs.witness_values[v.index] == 5


def test_enforce_unknown_variable():
    cs = ConstraintSystem(P)
    with pytest.raises(ValueError):
        cs.enforce_constraint([(1, Variable(VariableKind.WITNESS, 3))], [], [])


def test_multiply2_counts_and_satisfaction():
    circuit = CircomCircuit(multiply2_r1cs())
    circuit.set_wires([1, 33, 3, 11])
    cs = ConstraintSystem(P)
    circuit.generate_constraints(cs)
    assert len(cs.instance_values) == 2
    assert len(cs.witness_values) == 2
    assert len(cs.constraints) == 1
    assert cs.is_satisfied() is True


def test_multiply2_negative_coefficients():
    circuit = CircomCircuit(multiply2_r1cs(neg=True))
    circuit.set_wires([1, 33, 3, 11])
    cs = ConstraintSystem(P)
    circuit.generate_constraints(cs)
    assert cs.is_satisfied() is True


def test_wrong_wires_not_satisfied():
    circuit = CircomCircuit(multiply2_r1cs())
    circuit.set_wires([1, 34, 3, 11])
    cs = ConstraintSystem(P)
    circuit.generate_constraints(cs)
    assert cs.is_satisfied() is False


def test_no_wires_assigns_zero():
    circuit = CircomCircuit(multiply2_r1cs())
    cs = ConstraintSystem(P)
    circuit.generate_constraints(cs)
    assert cs.instance_values == [1, 0]
    assert cs.witness_values == [0, 0]
    assert circuit.public_inputs() is None


def test_public_inputs():
    circuit = CircomCircuit(multiply2_r1cs())
    circuit.set_wires([1, 33, 3, 11])
    assert circuit.public_inputs() == [33]


def test_mismatched_field_rejected():
    circuit = CircomCircuit(multiply2_r1cs())
    with pytest.raises(ValueError):
        circuit.generate_constraints(ConstraintSystem(Curve.BLS12_381.value))


def test_too_few_wires_rejected():
    circuit = CircomCircuit(multiply2_r1cs())
    circuit.set_wires([1, 33])
    with pytest.raises(ValueError):
        circuit.generate_constraints(ConstraintSystem(P))


def test_witness_calculator_sets_wires():
    calculator = FakeCalculator([1, 33, 3, 11])
    circuit = CircomCircuit(multiply2_r1cs())
    circuit.set_wires_using_witness_calculator(calculator, {"a": [3], "b": [11]}, True)
    assert circuit.wires == [1, 33, 3, 11]
    assert calculator.calls == [({"a": [3], "b": [11]}, True)]


@pytest.mark.parametrize("curve", [Curve.BN128, Curve.BLS12_381])
def test_from_r1cs_file(tmp_path, curve):
    path = tmp_path / "multiply2.r1cs"
    path.write_bytes(multiply2_file_bytes(curve))
    circuit = CircomCircuit.from_r1cs_file(path, curve)
    assert circuit.r1cs.num_public == 2
    assert circuit.r1cs.num_private == 2
    assert circuit.r1cs.curve is curve
    circuit.set_wires([1, 33, 3, 11])
    cs = ConstraintSystem(curve.value)
    circuit.generate_constraints(cs)
    assert cs.is_satisfied() is True


def test_from_r1cs_file_wrong_curve(tmp_path):
    path = tmp_path / "multiply2.r1cs"
    path.write_bytes(multiply2_file_bytes(Curve.BLS12_381))
    with pytest.raises(UnableToOpenR1CSFile):
        CircomCircuit.from_r1cs_file(path, Curve.BN128)


def test_from_r1cs_file_missing(tmp_path):
    with pytest.raises(UnableToOpenR1CSFile):
        CircomCircuit.from_r1cs_file(tmp_path / "absent.r1cs", Curve.BN128)
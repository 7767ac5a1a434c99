# zkcircom

Tools for working with circuits compiled by Circom, over the BN128 and
BLS12-381 scalar fields:

- parse the binary `.r1cs` constraint files Circom produces,
- compute the values of every wire of a circuit from its input signals, by
  driving the exported functions of an instantiated Circom witness module,
- lay a circuit's constraints out in a constraint system and check that a set
  of wire values satisfies them.

## Installation

```
pip install zkcircom
```

The package has no runtime dependencies.

## Reading an R1CS file

```python
from zkcircom.curves import Curve
from zkcircom.r1cs_reader import read_r1cs_file, load_r1cs

r1cs_file = read_r1cs_file("multiply2.r1cs", Curve.BN128)
print(r1cs_file.header.n_wires, r1cs_file.header.n_constraints)
print(r1cs_file.wire_mapping)

r1cs = load_r1cs("multiply2.r1cs", Curve.BN128)
print(r1cs.num_public, r1cs.num_private, len(r1cs.constraints))
```

`read_r1cs_file` returns an `R1CSFile` (version, `Header`, constraints and the
wire-to-label map); `load_r1cs` turns it into an `R1CS` via
`R1CSFile.to_r1cs()`. `parse_r1cs_bytes(data, curve)` and
`parse_r1cs(stream, curve)` read from memory or from any seekable binary
stream.

The reader checks the magic number, the file version (1), the field size
(only 32-byte fields are accepted), the header and map section sizes, and the
subgroup order. A file compiled for the other curve raises
`IncompatibleWithCurve`; any other order raises `UnsupportedCurve`. Malformed
files raise `R1CSFileParsing`, and a file that cannot be opened raises
`UnableToOpenR1CSFile`. All errors derive from `zkcircom.errors.CircomError`
and compare equal when they have the same type and arguments.

Each `Constraint` has linear combinations `a`, `b` and `c`;
`Constraint.is_satisfied(wires, modulus)` checks `a * b = c` for given wire
values, and `LinearCombination.evaluate(wires, modulus)` evaluates one side.

## Checking a circuit

```python
from zkcircom.circuit import CircomCircuit, ConstraintSystem
from zkcircom.curves import Curve

circuit = CircomCircuit.from_r1cs_file("multiply2.r1cs", Curve.BN128)
circuit.set_wires([1, 33, 3, 11])

cs = ConstraintSystem(Curve.BN128.value)
circuit.generate_constraints(cs)
assert cs.is_satisfied()
print(circuit.public_inputs())   # [33]
```

A `ConstraintSystem` is built from the field modulus; a curve's modulus is its
`value`. `generate_constraints` raises `ValueError` if that modulus does not
match the circuit's curve. Without wire values every variable is assigned
zero. `CircomCircuit.from_r1cs_file` reports any failure to read the file as
`UnableToOpenR1CSFile`.

Wires are ordered as Circom emits them: the constant `1`, then the public
outputs, then the public inputs, then private inputs and intermediate wires.
`public_inputs()` returns the public outputs followed by the public inputs,
without the leading `1`, or `None` when no wires are set.

## Computing witnesses

`Wasm` wraps the exported functions of a Circom witness module, given as a
mapping from export name to a callable that takes i32 arguments.
`WitnessCalculator.from_instance(wasm, curve)` checks that the module was
generated by Circom 2 (`UnsupportedVersion` otherwise) and that its field
belongs to `curve`. Then:

```python
from zkcircom.wasm import Wasm
from zkcircom.witness import WitnessCalculator

calculator = WitnessCalculator.from_instance(Wasm(exports), Curve.BN128)
wires = calculator.calculate_witnesses({"a": [3], "b": [11]}, sanity_check=True)
circuit.set_wires_using_witness_calculator(calculator, {"a": [3], "b": [11]}, True)
```

Inputs are a mapping, or an iterable of pairs, from signal name to its values.
Passing the wrong inputs raises `IncorrectNumberOfInputsProvided` or
`IncorrectNumberOfSignalsProvided`, naming what the module expected and what
it was given.

## What the package does not do

- It does not load or run `.wasm` files itself: the exports of an already
  instantiated module must be supplied by a WebAssembly runtime of your choice.
- It does not generate proving keys, create proofs or verify them; it only
  checks whether wire values satisfy a circuit's constraints.
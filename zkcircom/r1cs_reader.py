"""Reader for the binary R1CS file format produced by Circom."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO, Union

from zkcircom.curves import Curve
from zkcircom.errors import R1CSFileParsing, UnableToOpenR1CSFile
from zkcircom.r1cs import R1CS, Constraint, Header, LinearCombination, R1CSFile
from zkcircom.r1cs_header import parse_header, read_exact, read_u32, read_u64

MAGIC = b"r1cs"
SUPPORTED_VERSION = 1

HEADER_SECTION = 1
CONSTRAINT_SECTION = 2
WIRE_TO_LABEL_SECTION = 3

_FIELD_ELEMENT_SIZE = 32

PathLike = Union[str, "os.PathLike[str]"]


def _parsing_error(detail: object) -> R1CSFileParsing:
    return R1CSFileParsing(f"Encountered error while parsing R1CS file: {detail}")


def _seek(stream: BinaryIO, offset: int, whence: int = os.SEEK_SET) -> int:
    try:
        return stream.seek(offset, whence)
    except (OSError, ValueError) as exc:
        raise _parsing_error(repr(exc)) from exc


def _read_field_element(stream: BinaryIO, modulus: int) -> int:
    value = int.from_bytes(read_exact(stream, _FIELD_ELEMENT_SIZE), "little")
    if value >= modulus:
        raise _parsing_error(f"field element {value} is not below the modulus")
    return value


def _read_lc(stream: BinaryIO, modulus: int) -> LinearCombination:
    num_terms = read_u32(stream)
    terms = []
    for _ in range(num_terms):
        wire_id = read_u32(stream)
        terms.append((wire_id, _read_field_element(stream, modulus)))
    return LinearCombination(terms)


def _read_constraints(stream: BinaryIO, header: Header) -> list[Constraint]:
    modulus = header.curve.value
    constraints = []
    for _ in range(header.n_constraints):
        a = _read_lc(stream, modulus)
        b = _read_lc(stream, modulus)
        c = _read_lc(stream, modulus)
        constraints.append(Constraint(a, b, c))
    return constraints


def _read_map(stream: BinaryIO, size: int, header: Header) -> list[int]:
    """Read the wire-to-label map; labels optimised out of the circuit are absent."""
    if size != header.n_wires * 8:
        raise R1CSFileParsing("Invalid map section size")
    mapping = [read_u64(stream) for _ in range(header.n_wires)]
    if not mapping or mapping[0] != 0:
        raise R1CSFileParsing("Wire 0 should always be mapped to 0")
    return mapping


def _section(sections: dict[int, tuple[int, int]], kind: int, label: str) -> tuple[int, int]:
    try:
        return sections[kind]
    except KeyError:
        raise R1CSFileParsing(f"No section offset for {label} type found") from None


def parse_r1cs(stream: BinaryIO, curve: Curve) -> R1CSFile:
    """Parse an R1CS file from a seekable binary stream for circuits over ``curve``."""
    if read_exact(stream, 4) != MAGIC:
        raise R1CSFileParsing("Invalid magic number")

    version = read_u32(stream)
    if version != SUPPORTED_VERSION:
        raise R1CSFileParsing("Unsupported version")

    num_sections = read_u32(stream)
    sections: dict[int, tuple[int, int]] = {}
    for _ in range(num_sections):
        kind = read_u32(stream)
        size = read_u64(stream)
        offset = _seek(stream, 0, os.SEEK_CUR)
        sections[kind] = (offset, size)
        _seek(stream, size, os.SEEK_CUR)

    header_offset, header_size = _section(sections, HEADER_SECTION, "header")
    _seek(stream, header_offset)
    header = parse_header(stream, header_size, curve)

    constraint_offset, _ = _section(sections, CONSTRAINT_SECTION, "constraint")
    _seek(stream, constraint_offset)
    constraints = _read_constraints(stream, header)

    map_offset, map_size = _section(sections, WIRE_TO_LABEL_SECTION, "wire2label")
    _seek(stream, map_offset)
    wire_mapping = _read_map(stream, map_size, header)

    return R1CSFile(
        version=version,
        header=header,
        constraints=constraints,
        wire_mapping=wire_mapping,
    )


def parse_r1cs_bytes(data: bytes, curve: Curve) -> R1CSFile:
    """Parse an R1CS file held in memory."""
    return parse_r1cs(io.BytesIO(bytes(data)), curve)


def read_r1cs_file(path: PathLike, curve: Curve) -> R1CSFile:
    """Open and parse the R1CS file at ``path``."""
    try:
        stream = open(Path(path), "rb")
    except OSError as exc:
        raise UnableToOpenR1CSFile(
            f"Encountered error while opening R1CS file: {exc!r}"
        ) from exc
    with stream:
        return parse_r1cs(stream, curve)


def load_r1cs(path: PathLike, curve: Curve) -> R1CS:
    """Read the R1CS file at ``path`` and build its constraint system."""
    return read_r1cs_file(path, curve).to_r1cs()
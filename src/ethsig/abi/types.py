"""
Solidity type grammar used by the ABI encoders.

Type strings are parsed once into a small closed set of frozen dataclasses,
so the encoders dispatch on the parsed form instead of re-inspecting strings
at every level of recursion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

_SIZED_RE = re.compile(r"(bytes|uint|int)(\d+)")
_ARRAY_RE = re.compile(r"(.*)\[([^\[\]]*)\]")


@dataclass(frozen=True)
class BoolType:
    def __str__(self) -> str:
        return "bool"


@dataclass(frozen=True)
class AddressType:
    def __str__(self) -> str:
        return "address"


@dataclass(frozen=True)
class UIntType:
    bits: int

    def __str__(self) -> str:
        return f"uint{self.bits}"


@dataclass(frozen=True)
class IntType:
    bits: int

    def __str__(self) -> str:
        return f"int{self.bits}"


@dataclass(frozen=True)
class FixedBytesType:
    size: int

    def __str__(self) -> str:
        return f"bytes{self.size}"


@dataclass(frozen=True)
class BytesType:
    def __str__(self) -> str:
        return "bytes"


@dataclass(frozen=True)
class StringType:
    def __str__(self) -> str:
        return "string"


@dataclass(frozen=True)
class ArrayType:
    """``element[size]``; ``size`` is None for a dynamic ``element[]``."""

    element: "SolidityType"
    size: int | None

    def __str__(self) -> str:
        return f"{self.element}[{'' if self.size is None else self.size}]"


SolidityType = Union[
    BoolType,
    AddressType,
    UIntType,
    IntType,
    FixedBytesType,
    BytesType,
    StringType,
    ArrayType,
]

_ATOMS: dict[str, SolidityType] = {
    "bool": BoolType(),
    "address": AddressType(),
    "bytes": BytesType(),
    "string": StringType(),
    # elementary aliases
    "uint": UIntType(256),
    "int": IntType(256),
}


def _parse_sized(type_str: str) -> SolidityType:
    match = _SIZED_RE.fullmatch(type_str)
    if match is None:
        raise ValueError(f"Unsupported or invalid type: {type_str}")
    base, width = match.group(1), int(match.group(2))
    if base == "bytes":
        if not 1 <= width <= 32:
            raise ValueError(f"Invalid bytes<N> width: {width}")
        return FixedBytesType(width)
    if width % 8 or not 8 <= width <= 256:
        raise ValueError(f"Invalid {base}<N> width: {width}")
    return UIntType(width) if base == "uint" else IntType(width)


@lru_cache(maxsize=1024)
def parse_type(type_str: str) -> SolidityType:
    """
    Parse a Solidity type string such as ``uint256``, ``bytes4`` or ``address[2][]``.

    The last bracket group is the outermost dimension, so ``uint8[2][]`` is a
    dynamic array of ``uint8[2]``. ``uint``/``int`` alias the 256-bit widths.

    Args:
        type_str: Type string.

    Returns:
        The parsed type.

    Raises:
        ValueError: For unknown names and out-of-range widths.
    """
    array = _ARRAY_RE.fullmatch(type_str)
    if array is not None:
        element, size = array.group(1), array.group(2)
        if size and not size.isdigit():
            raise ValueError(f"Unsupported or invalid type: {type_str}")
        return ArrayType(parse_type(element), int(size) if size else None)
    atom = _ATOMS.get(type_str)
    if atom is not None:
        return atom
    return _parse_sized(type_str)


def is_dynamic(type_: SolidityType) -> bool:
    """Whether a value of this type goes to the tail region of an ABI encoding."""
    if isinstance(type_, (BytesType, StringType)):
        return True
    return isinstance(type_, ArrayType) and type_.size is None


def head_size(type_: SolidityType) -> int:
    """Bytes a field of this type occupies in the head region."""
    if isinstance(type_, ArrayType) and type_.size is not None:
        return 32 * type_.size
    return 32


__all__: tuple[str, ...] = (
    "AddressType",
    "ArrayType",
    "BoolType",
    "BytesType",
    "FixedBytesType",
    "IntType",
    "SolidityType",
    "StringType",
    "UIntType",
    "head_size",
    "is_dynamic",
    "parse_type",
)

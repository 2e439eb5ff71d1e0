"""
Tight packing (``abi.encodePacked`` / ``solidityPack``) used by legacy typed-data hashing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..utils import (is_truthy, legacy_to_bytes, normalize, parse_number,
                     set_length_left, set_length_right, to_bytes)
from .types import (AddressType, ArrayType, BoolType, BytesType,
                    FixedBytesType, IntType, SolidityType, StringType,
                    UIntType, parse_type)

# array elements are packed as full words
_ELEMENT_BITS = 256


def _peel_innermost(type_: ArrayType) -> SolidityType:
    """Drop the first bracket group of the type string, e.g. ``T[2][3]`` -> ``T[3]``."""
    if isinstance(type_.element, ArrayType):
        return ArrayType(_peel_innermost(type_.element), type_.size)
    return type_.element


def _pack_array(type_: ArrayType, value: Any) -> bytes:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list for {type_}, got {type(value).__name__}")
    subtype = _peel_innermost(type_)
    if not isinstance(subtype, ArrayType) and type_.size and len(value) > type_.size:
        raise ValueError(f"Elements exceed array size: {type_.size}")
    return b"".join(_pack(subtype, item, _ELEMENT_BITS) for item in value)


def _pack(type_: SolidityType, value: Any, bits: int | None) -> bytes:
    if isinstance(type_, ArrayType):
        return _pack_array(type_, value)
    if isinstance(type_, BytesType):
        return legacy_to_bytes(value)
    if isinstance(type_, StringType):
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)
    if isinstance(type_, BoolType):
        return (1 if is_truthy(value) else 0).to_bytes((bits or 8) // 8, "big")
    if isinstance(type_, AddressType):
        return set_length_left(to_bytes(value), (bits or 160) // 8)
    if isinstance(type_, FixedBytesType):
        if isinstance(value, int) and not isinstance(value, bool):
            value = normalize(value)
        return set_length_right(to_bytes(value), type_.size)
    if isinstance(type_, UIntType):
        num = parse_number(value)
        if abs(num).bit_length() > type_.bits:
            raise ValueError(
                f"Supplied uint exceeds width: {type_.bits} vs {abs(num).bit_length()}"
            )
        if num < 0:
            raise ValueError("Supplied uint is negative")
        return num.to_bytes((bits or type_.bits) // 8, "big")
    if isinstance(type_, IntType):
        num = parse_number(value)
        if abs(num).bit_length() > type_.bits:
            raise ValueError(
                f"Supplied int exceeds width: {type_.bits} vs {abs(num).bit_length()}"
            )
        twos = num % (1 << type_.bits)
        return twos.to_bytes((bits or type_.bits) // 8, "big")
    raise ValueError(f"Unsupported or invalid type: {type_}")


def solidity_pack(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    Tightly pack values: no padding, each scalar at its natural width.

    Array elements are widened to 32 bytes (booleans, addresses and integers),
    while ``bytesN`` elements keep N bytes.

    Args:
        types: Solidity type strings.
        values: Values, one per type.

    Returns:
        The packed bytes.
    """
    if len(types) != len(values):
        raise ValueError("Number of types are not matching the values")
    return b"".join(
        _pack(parse_type(type_str), value, None)
        for type_str, value in zip(types, values)
    )


__all__: tuple[str, ...] = ("solidity_pack",)

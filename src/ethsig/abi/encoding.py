"""
Standard (head/tail) ABI encoding of Solidity values.

Only the encoder direction exists: typed-data hashing needs ``raw_encode`` to
lay out struct fields exactly as the EVM would.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from ..utils import is_truthy, normalize, parse_number, set_length_right, to_bytes
from .types import (AddressType, ArrayType, BoolType, BytesType,
                    FixedBytesType, IntType, SolidityType, StringType,
                    UIntType, head_size, is_dynamic, parse_type)

_TWO_256 = 1 << 256


def _encode_uint(bits: int, num: int) -> bytes:
    if abs(num).bit_length() > bits:
        raise ValueError(
            f"Supplied uint exceeds width: {bits} vs {abs(num).bit_length()}"
        )
    if num < 0:
        raise ValueError("Supplied uint is negative")
    return num.to_bytes(32, "big")


def _encode_int(bits: int, num: int) -> bytes:
    if abs(num).bit_length() > bits:
        raise ValueError(
            f"Supplied int exceeds width: {bits} vs {abs(num).bit_length()}"
        )
    # two's complement over the full word regardless of the declared width
    return (num % _TWO_256).to_bytes(32, "big")


def _encode_dynamic_bytes(data: bytes) -> bytes:
    padding = -len(data) % 32
    return len(data).to_bytes(32, "big") + data + bytes(padding)


def _as_byte_payload(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Sequence):
        return bytes(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a bytes payload")


def _encode_array(type_: ArrayType, value: Any) -> bytes:
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, (list, tuple)):
        raise TypeError("Not an array?")
    if type_.size and len(value) > type_.size:
        raise ValueError(f"Elements exceed array size: {type_.size}")
    out = [_encode(type_.element, item) for item in value]
    if type_.size is None:
        out.insert(0, len(value).to_bytes(32, "big"))
    return b"".join(out)


def _encode(type_: SolidityType, value: Any) -> bytes:
    if isinstance(type_, AddressType):
        return _encode_uint(160, parse_number(value))
    if isinstance(type_, BoolType):
        return (1 if is_truthy(value) else 0).to_bytes(32, "big")
    if isinstance(type_, StringType):
        return _encode_dynamic_bytes(_as_byte_payload(value))
    if isinstance(type_, ArrayType):
        return _encode_array(type_, value)
    if isinstance(type_, BytesType):
        return _encode_dynamic_bytes(_as_byte_payload(value))
    if isinstance(type_, FixedBytesType):
        if isinstance(value, int) and not isinstance(value, bool):
            value = normalize(value)
        return set_length_right(to_bytes(value), 32)
    if isinstance(type_, UIntType):
        return _encode_uint(type_.bits, parse_number(value))
    if isinstance(type_, IntType):
        return _encode_int(type_.bits, parse_number(value))
    raise ValueError(f"Unsupported or invalid type: {type_}")


def encode_single(type_str: str, value: Any) -> bytes:
    """
    ABI-encode one value in place (no head/tail split for the value itself).

    Args:
        type_str: Solidity type, e.g. ``"uint32"`` or ``"bytes32[]"``.
        value: Value to encode; numbers may be ints or decimal/0x strings.

    Returns:
        The encoding; 32 bytes for every static scalar type.
    """
    return _encode(parse_type(type_str), value)


def raw_encode(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    ABI-encode a list of values with the head/tail layout.

    Static values are written inline. Dynamic values (``string``, ``bytes``,
    ``T[]``) are replaced in the head by a uint256 offset from the start of
    the buffer and appended to the tail in declaration order. A ``T[K]`` field
    takes ``32 * K`` head bytes.

    Args:
        types: Solidity type strings.
        values: Values, one per type.

    Returns:
        The encoded bytes.
    """
    parsed = [parse_type(t) for t in types]
    offset = sum(head_size(t) for t in parsed)
    head: list[bytes] = []
    tail: list[bytes] = []
    for i, type_ in enumerate(parsed):
        value = values[i] if i < len(values) else None
        encoded = _encode(type_, value)
        if is_dynamic(type_):
            head.append(offset.to_bytes(32, "big"))
            tail.append(encoded)
            offset += len(encoded)
        else:
            head.append(encoded)
    return b"".join(head + tail)


__all__: tuple[str, ...] = (
    "encode_single",
    "raw_encode",
)

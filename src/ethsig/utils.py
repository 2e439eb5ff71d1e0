"""
Value coercions shared by the encoders and signers.

Wallet payloads arrive as loosely typed JSON: numbers may be ints, decimal
strings or 0x-hex strings, byte values may be hex strings or raw bytes. The
helpers here pin down those conversions once, together with the 65-byte
``r || s || v`` signature codec.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .curves import pubkey_to_address, recover_pubkey

MAX_SAFE_INTEGER = 2**53 - 1

_HEX_RE = re.compile(r"0x[0-9a-fA-F]*")
_BARE_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def is_truthy(value: Any) -> bool:
    """Loose truthiness of a JSON value: only None, False, 0, NaN and "" are false."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def is_hex_string(value: Any) -> bool:
    """True for a str of the form ``0x`` followed by hex digits (possibly none)."""
    return isinstance(value, str) and _HEX_RE.fullmatch(value) is not None


def strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def add_hex_prefix(value: str) -> str:
    return value if value.startswith("0x") else "0x" + value


def number_to_bytes(num: int) -> bytes:
    """Minimal big-endian bytes of a non-negative int; 0 becomes a single zero byte."""
    if num < 0:
        raise ValueError(f"Cannot convert negative number to bytes: {num}")
    digits = format(num, "x")
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def _hex_to_bytes(value: str) -> bytes:
    digits = strip_hex_prefix(value)
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def to_bytes(value: Any) -> bytes:
    """
    Strict conversion to bytes.

    Accepts bytes-like objects, 0x-hex strings, non-negative ints, sequences
    of byte values and None (empty). Any other str is rejected.

    Args:
        value: Value to convert.

    Returns:
        The value as ``bytes``.
    """
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        if not is_hex_string(value):
            raise ValueError(
                "Cannot convert string to buffer. toBuffer only supports "
                f"0x-prefixed hex strings and this string was given: {value}"
            )
        return _hex_to_bytes(value)
    if isinstance(value, bool):
        raise TypeError(f"Cannot convert bool to bytes: {value}")
    if isinstance(value, int):
        return number_to_bytes(value)
    if isinstance(value, (list, tuple)):
        return bytes(value)
    raise TypeError(f"invalid type for bytes conversion: {type(value).__name__}")


def legacy_to_bytes(value: Any) -> bytes:
    """Like ``to_bytes`` but a non-hex str is taken as its UTF-8 encoding."""
    if isinstance(value, str) and not is_hex_string(value):
        return value.encode("utf-8")
    return to_bytes(value)


def normalize(value: Any) -> str | None:
    """
    Normalize an address-like value to a lower-case 0x-prefixed hex string.

    Falsy input yields None. Negative ints yield ``"0x"``; other ints are
    rendered with an even number of hex digits.
    """
    if not is_truthy(value):
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            return "0x"
        value = "0x" + number_to_bytes(value).hex()
    if not isinstance(value, str):
        raise TypeError(
            "normalize() requires hex string or integer input. "
            f"received {type(value).__name__}: {value!r}"
        )
    return add_hex_prefix(value.lower())


def parse_number(value: Any) -> int:
    """
    Parse a numeric ABI argument to an int.

    0x-prefixed strings are base 16, other strings base 10 (empty means 0),
    bytes are big-endian. Integral floats are accepted.
    """
    if isinstance(value, bool):
        raise TypeError("Argument is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if value.startswith("0x"):
            return int(value[2:] or "0", 16)
        return int(value or "0", 10)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    raise TypeError("Argument is not a number")


def set_length_left(data: bytes, length: int) -> bytes:
    """Left-pad with zeros to ``length``, or keep the trailing ``length`` bytes."""
    if len(data) < length:
        return bytes(length - len(data)) + data
    return data[len(data) - length :]


def set_length_right(data: bytes, length: int) -> bytes:
    """Right-pad with zeros to ``length``, or keep the leading ``length`` bytes."""
    if len(data) < length:
        return data + bytes(length - len(data))
    return data[:length]


def pad_with_zeroes(hex_string: str, target_length: int) -> str:
    """
    Left-pad an unprefixed hex string with "0" up to ``target_length`` chars.

    Args:
        hex_string: Unprefixed hex digits (may be empty).
        target_length: Desired length; shorter targets leave the input unchanged.

    Returns:
        The padded string.
    """
    if hex_string != "" and _BARE_HEX_RE.fullmatch(hex_string) is None:
        raise ValueError(
            f"Expected an unprefixed hex string. Received: {hex_string}"
        )
    if target_length < 0:
        raise ValueError(
            "Expected a non-negative integer target length. "
            f"Received: {target_length}"
        )
    return hex_string.rjust(target_length, "0")


def _component_to_int(value: int | bytes) -> int:
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    return value


def concat_sig(v: int | bytes, r: int | bytes, s: int | bytes) -> str:
    """
    Render a signature as ``0x`` + r (64 hex) + s (64 hex) + v (natural hex width).

    Args:
        v: Recovery value, e.g. 27 or 28 (int or big-endian bytes).
        r, s: Signature scalars (int or big-endian bytes).

    Returns:
        The concatenated signature string.
    """
    v_int = _component_to_int(v)
    if v_int < 0 or v_int > MAX_SAFE_INTEGER:
        raise OverflowError(f"Received an invalid integer type: {v_int}")
    r_hex = pad_with_zeroes(format(_component_to_int(r), "x"), 64)
    s_hex = pad_with_zeroes(format(_component_to_int(s), "x"), 64)
    return "0x" + r_hex + s_hex + format(v_int, "x")


def from_rpc_sig(signature: str | bytes) -> tuple[int, int, int]:
    """
    Split a serialized signature into ``(v, r, s)``.

    65 or more bytes are read as ``r || s || v`` (v may span several bytes);
    64 bytes are read as the EIP-2098 compact form, where the top bit of ``s``
    carries the y parity. A v below 27 is lifted by 27.
    """
    sig = to_bytes(signature)
    if len(sig) >= 65:
        r = int.from_bytes(sig[:32], "big")
        s = int.from_bytes(sig[32:64], "big")
        v = int.from_bytes(sig[64:], "big")
    elif len(sig) == 64:
        r = int.from_bytes(sig[:32], "big")
        v = sig[32] >> 7
        s = int.from_bytes(bytes([sig[32] & 0x7F]) + sig[33:64], "big")
    else:
        raise ValueError("Invalid signature length")
    if v < 27:
        v += 27
    return (v, r, s)


def _recovery_id(v: int, chain_id: int | None) -> int:
    if v in (0, 1):
        return v
    if chain_id is None:
        return v - 27
    return v - (2 * chain_id + 35)


def recover_public_key(
    message_hash: bytes, signature: str | bytes, chain_id: int | None = None
) -> bytes:
    """
    Recover the 64-byte public key (x || y) that produced ``signature``.

    Args:
        message_hash: 32-byte digest that was signed.
        signature: Serialized signature (hex string or bytes).
        chain_id: Chain id for EIP-155 style ``v`` values, if any.

    Returns:
        64-byte public key without the 0x04 prefix.
    """
    v, r, s = from_rpc_sig(signature)
    recid = _recovery_id(v, chain_id)
    if recid not in (0, 1):
        raise ValueError("Invalid signature v value")
    return recover_pubkey(message_hash, r, s, recid)[1:]


def public_to_address(public_key: bytes) -> str:
    """Lower-case 0x address of a 64- or 65-byte public key."""
    return pubkey_to_address(public_key)


__all__: tuple[str, ...] = (
    "MAX_SAFE_INTEGER",
    "add_hex_prefix",
    "concat_sig",
    "from_rpc_sig",
    "is_hex_string",
    "is_truthy",
    "legacy_to_bytes",
    "normalize",
    "number_to_bytes",
    "pad_with_zeroes",
    "parse_number",
    "public_to_address",
    "recover_public_key",
    "set_length_left",
    "set_length_right",
    "strip_hex_prefix",
    "to_bytes",
)

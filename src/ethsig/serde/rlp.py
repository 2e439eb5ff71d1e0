"""Minimal RLP encoder (bytes, str, int, None, nested lists). Encode only."""

from __future__ import annotations

from ..utils import is_hex_string, number_to_bytes, strip_hex_prefix


def _to_payload(item) -> bytes:
    """Byte string for a scalar item: 0x-hex str decoded, other str UTF-8, int minimal big-endian."""
    if item is None:
        return b""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        if is_hex_string(item):
            digits = strip_hex_prefix(item)
            return bytes.fromhex("0" * (len(digits) % 2) + digits)
        return item.encode("utf-8")
    if isinstance(item, bool):
        return b"\x01" if item else b""
    if isinstance(item, int):
        if item < 0:
            raise ValueError("RLP cannot encode negative integers")
        return b"" if item == 0 else number_to_bytes(item)
    raise TypeError(f"Cannot RLP-encode type {type(item).__name__}")


def _append_length(buf: bytearray, length: int, short_base: int) -> None:
    if length <= 55:
        buf.append(short_base + length)
        return
    len_bytes = number_to_bytes(length)
    buf.append(short_base + 55 + len(len_bytes))
    buf.extend(len_bytes)


def _rlp_encode_into(item, buf: bytearray) -> None:
    if isinstance(item, (list, tuple)):
        payload = bytearray()
        for child in item:
            _rlp_encode_into(child, payload)
        _append_length(buf, len(payload), 0xC0)
        buf.extend(payload)
        return
    data = _to_payload(item)
    if len(data) == 1 and data[0] < 0x80:
        buf.extend(data)
        return
    _append_length(buf, len(data), 0x80)
    buf.extend(data)


def rlp_encode(item) -> bytes:
    """
    Encode a value with Ethereum's Recursive Length Prefix scheme.

    Args:
        item: bytes, str (0x-hex is decoded, other text is UTF-8), non-negative
            int (0 encodes as the empty string), None, or a list/tuple of these.

    Returns:
        RLP-encoded bytes.
    """
    buf = bytearray()
    _rlp_encode_into(item, buf)
    return bytes(buf)


__all__: tuple[str, ...] = ("rlp_encode",)

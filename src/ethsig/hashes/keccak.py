"""
Keccak-256 as used by Ethereum (original Keccak padding, not NIST SHA3-256).

The sponge keeps its 25 lanes in a flat list indexed ``x + 5 * y``.
"""

from __future__ import annotations

_MASK64 = 0xFFFFFFFFFFFFFFFF
_RATE = 136  # 1088-bit rate for a 512-bit capacity

_ROUND_CONSTANTS = (
    0x0000000000000001,
    0x0000000000008082,
    0x800000000000808A,
    0x8000000080008000,
    0x000000000000808B,
    0x0000000080000001,
    0x8000000080008081,
    0x8000000000008009,
    0x000000000000008A,
    0x0000000000000088,
    0x0000000080008009,
    0x000000008000000A,
    0x000000008000808B,
    0x800000000000008B,
    0x8000000000008089,
    0x8000000000008003,
    0x8000000000008002,
    0x8000000000000080,
    0x000000000000800A,
    0x800000008000000A,
    0x8000000080008081,
    0x8000000000008080,
    0x0000000080000001,
    0x8000000080008008,
)

# rho offsets, same lane order as the state
_ROTATION = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)

# pi: lane x + 5y moves to y + 5 * ((2x + 3y) % 5)
_PI_TARGET = tuple(
    (i // 5) + 5 * ((2 * (i % 5) + 3 * (i // 5)) % 5) for i in range(25)
)


def _rol64(v: int, n: int) -> int:
    return ((v << n) | (v >> (64 - n))) & _MASK64 if n else v


def _permute(lanes: list[int]) -> None:
    """Keccak-f[1600], 24 rounds, in place."""
    b = [0] * 25
    for rc in _ROUND_CONSTANTS:
        c = [
            lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20]
            for x in range(5)
        ]
        for x in range(5):
            d = c[(x - 1) % 5] ^ _rol64(c[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                lanes[x + y] ^= d
        for i in range(25):
            b[_PI_TARGET[i]] = _rol64(lanes[i], _ROTATION[i])
        for y in range(0, 25, 5):
            b0, b1, b2, b3, b4 = b[y : y + 5]
            lanes[y] = b0 ^ (~b1 & b2)
            lanes[y + 1] = b1 ^ (~b2 & b3)
            lanes[y + 2] = b2 ^ (~b3 & b4)
            lanes[y + 3] = b3 ^ (~b4 & b0)
            lanes[y + 4] = b4 ^ (~b0 & b1)
        lanes[0] ^= rc


def _pad(data: bytes) -> bytes:
    """Multirate padding 0x01 .. 0x80 up to a whole number of blocks."""
    padlen = _RATE - len(data) % _RATE
    if padlen == 1:
        return data + b"\x81"
    return data + b"\x01" + bytes(padlen - 2) + b"\x80"


def keccak256(data: bytes) -> bytes:
    """
    Keccak-256 digest.

    Args:
        data: Input bytes (any length, ``bytearray`` and ``memoryview`` accepted).

    Returns:
        32-byte digest.
    """
    padded = _pad(bytes(data))
    lanes = [0] * 25
    for start in range(0, len(padded), _RATE):
        for i in range(_RATE // 8):
            off = start + 8 * i
            lanes[i] ^= int.from_bytes(padded[off : off + 8], "little")
        _permute(lanes)
    return b"".join(lane.to_bytes(8, "little") for lane in lanes[:4])


__all__: tuple[str, ...] = ("keccak256",)

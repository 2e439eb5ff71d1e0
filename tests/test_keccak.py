"""Keccak-256 against known digests, including the padding edge cases."""

import pytest

from ethsig import keccak256

KECCAK256_EMPTY = bytes.fromhex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)
KECCAK256_HELLO = bytes.fromhex(
    "1c8aff950685c2ed4bc3174f3472287b56d9517b9c948127319a09a7a36deac8"
)
KECCAK256_COW = bytes.fromhex(
    "c85ef7d79691fe79573b1a7064c19c1a9819ebdbd1faaab1a8ec92344438aaf4"
)
RATE = 136


def test_keccak256_empty() -> None:
    assert keccak256(b"") == KECCAK256_EMPTY


def test_keccak256_hello() -> None:
    assert keccak256(b"hello") == KECCAK256_HELLO


def test_keccak256_cow() -> None:
    assert keccak256(b"cow") == KECCAK256_COW


def test_keccak256_accepts_bytes_like() -> None:
    assert keccak256(bytearray(b"hello")) == KECCAK256_HELLO
    assert keccak256(memoryview(b"hello")) == KECCAK256_HELLO


@pytest.mark.parametrize("length", [RATE - 1, RATE, RATE + 1, 2 * RATE, 1000])
def test_keccak256_block_boundaries(length: int) -> None:
    digest = keccak256(b"a" * length)
    assert len(digest) == 32
    assert digest != keccak256(b"a" * (length + 1))


def test_keccak256_deterministic() -> None:
    assert keccak256(b"same input" * 40) == keccak256(b"same input" * 40)

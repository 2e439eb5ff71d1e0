"""RLP encoder against the canonical Ethereum examples."""

from __future__ import annotations

import pytest

from ethsig import rlp_encode

LOREM = "Lorem ipsum dolor sit amet, consectetur adipisicing elit"


@pytest.mark.parametrize(
    ("item", "expected"),
    [
        ("dog", "83646f67"),
        (["cat", "dog"], "c88363617483646f67"),
        ("", "80"),
        ([], "c0"),
        (0, "80"),
        (None, "80"),
        (b"\x00", "00"),
        (15, "0f"),
        (1024, "820400"),
        ("0x0400", "820400"),
        ([[], [[]], [[], [[]]]], "c7c0c1c0c3c0c1c0"),
    ],
)
def test_rlp_encode(item: object, expected: str) -> None:
    assert rlp_encode(item).hex() == expected


def test_rlp_encode_long_string() -> None:
    encoded = rlp_encode(LOREM)
    assert encoded[:2] == b"\xb8\x38"
    assert encoded[2:] == LOREM.encode()


def test_rlp_encode_long_list() -> None:
    encoded = rlp_encode([LOREM])
    assert encoded[:2] == b"\xf8\x3a"
    assert encoded[2:4] == b"\xb8\x38"


def test_rlp_encode_rejects_negative() -> None:
    with pytest.raises(ValueError, match="negative"):
        rlp_encode(-1)


def test_rlp_encode_rejects_unknown_type() -> None:
    with pytest.raises(TypeError):
        rlp_encode({"a": 1})

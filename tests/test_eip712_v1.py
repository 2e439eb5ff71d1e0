"""Legacy (V1) typed-data hashing."""

from __future__ import annotations

import pytest

from ethsig import keccak256, solidity_pack
from ethsig.signing import typed_signature_hash

ALICE_MESSAGE = [{"type": "string", "name": "message", "value": "Hi, Alice!"}]


def test_single_value() -> None:
    assert typed_signature_hash(ALICE_MESSAGE) == (
        "0x14b9f24872e28cc49e72dc104d7380d8e0ba84a3fe2e712704bcac66a5702bd5"
    )


def test_multiple_values() -> None:
    typed_data = ALICE_MESSAGE + [{"type": "uint8", "name": "value", "value": 10}]
    assert typed_signature_hash(typed_data) == (
        "0xf7ad23226db5c1c00ca0ca1468fd49c8f8bbc1489bc1c382de5adc557a69c229"
    )


def test_bytes_value() -> None:
    typed_data = [{"type": "bytes", "name": "message", "value": "0xdeadbeaf"}]
    assert typed_signature_hash(typed_data) == (
        "0x6c69d03412450b174def7d1e48b3bcbbbd8f51df2e76e2c5b3a5d951125be3a9"
    )


def test_hash_is_built_from_schema_and_data_hashes() -> None:
    schema_hash = keccak256(b"string message")
    data_hash = keccak256(b"Hi, Alice!")
    expected = keccak256(
        solidity_pack(["bytes32", "bytes32"], [schema_hash, data_hash])
    )
    assert typed_signature_hash(ALICE_MESSAGE) == "0x" + expected.hex()


def test_array_values_are_packed_as_words() -> None:
    typed_data = [{"type": "uint8[]", "name": "data", "value": [1, 2]}]
    schema_hash = keccak256(b"uint8[] data")
    data_hash = keccak256((1).to_bytes(32, "big") + (2).to_bytes(32, "big"))
    expected = keccak256(schema_hash + data_hash)
    assert typed_signature_hash(typed_data) == "0x" + expected.hex()


@pytest.mark.parametrize(
    "typed_data",
    [
        [],
        42,
        None,
        [{"type": "string", "value": "Hi, Alice!"}],
        [{"type": "string", "name": "", "value": "Hi, Alice!"}],
    ],
)
def test_rejects_empty_or_unnamed(typed_data: object) -> None:
    with pytest.raises(ValueError, match="Expect argument to be non-empty array"):
        typed_signature_hash(typed_data)  # type: ignore[arg-type]


@pytest.mark.parametrize("type_", ["jocker", "function", "foo"])
def test_rejects_unknown_type(type_: str) -> None:
    typed_data = [{"type": type_, "name": "message", "value": "Hi, Alice!"}]
    with pytest.raises(ValueError, match=f"Unsupported or invalid type: {type_}"):
        typed_signature_hash(typed_data)


def test_rejects_missing_type() -> None:
    with pytest.raises(TypeError, match="Missing type"):
        typed_signature_hash([{"name": "message", "value": "Hi, Alice!"}])


def test_rejects_null_number() -> None:
    with pytest.raises(TypeError, match="Argument is not a number"):
        typed_signature_hash([{"type": "int32", "name": "data", "value": None}])

"""Head/tail ABI encoding and the type grammar behind it."""

from __future__ import annotations

import pytest

from ethsig.abi import encode_single, is_dynamic, parse_type, raw_encode
from ethsig.abi.types import (AddressType, ArrayType, BoolType, BytesType,
                              FixedBytesType, IntType, StringType, UIntType,
                              head_size)


def _word(n: int) -> str:
    return format(n, "064x")


def test_parse_type_scalars() -> None:
    assert parse_type("bool") == BoolType()
    assert parse_type("address") == AddressType()
    assert parse_type("uint") == UIntType(256)
    assert parse_type("int") == IntType(256)
    assert parse_type("uint8") == UIntType(8)
    assert parse_type("bytes4") == FixedBytesType(4)
    assert parse_type("bytes") == BytesType()
    assert parse_type("string") == StringType()


def test_parse_type_outermost_dimension_last() -> None:
    parsed = parse_type("uint8[2][]")
    assert parsed == ArrayType(ArrayType(UIntType(8), 2), None)
    assert str(parsed) == "uint8[2][]"


@pytest.mark.parametrize(
    ("type_str", "message"),
    [
        ("bytes33", "Invalid bytes<N> width: 33"),
        ("bytes0", "Invalid bytes<N> width: 0"),
        ("uint0", r"Invalid uint<N> width: 0"),
        ("uint257", r"Invalid uint<N> width: 257"),
        ("int0", r"Invalid int<N> width: 0"),
        ("int257", r"Invalid int<N> width: 257"),
        ("int12", r"Invalid int<N> width: 12"),
        ("fixed128x18", "Unsupported or invalid type: fixed128x18"),
        ("Person", "Unsupported or invalid type: Person"),
        ("uint[x]", r"Unsupported or invalid type: uint\[x\]"),
    ],
)
def test_parse_type_rejects(type_str: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_type(type_str)


def test_dynamic_and_head_size() -> None:
    assert is_dynamic(parse_type("string"))
    assert is_dynamic(parse_type("bytes"))
    assert is_dynamic(parse_type("uint256[]"))
    assert is_dynamic(parse_type("uint256[2][]"))
    assert not is_dynamic(parse_type("uint256[2]"))
    assert not is_dynamic(parse_type("bytes32"))
    assert head_size(parse_type("uint256[3]")) == 96
    assert head_size(parse_type("string")) == 32


def test_encode_uint() -> None:
    assert raw_encode(["uint32"], [42]).hex() == _word(42)
    assert raw_encode(["uint256"], [1]).hex() == _word(1)
    assert raw_encode(["uint"], [1]).hex() == _word(1)
    assert raw_encode(["uint256"], ["0x10"]).hex() == _word(16)
    assert raw_encode(["uint256"], ["10"]).hex() == _word(10)


def test_encode_int_negative() -> None:
    assert raw_encode(["int256"], [-1]).hex() == "f" * 64
    encoded = raw_encode(
        ["int256"], [-19999999999999999999999999999999999999999999999999999999999999]
    )
    assert encoded.hex() == (
        "fffffffffffff38dd0f10627f5529bdb2c52d4846810af0ac000000000000001"
    )


def test_encode_int256_max_safe_integer() -> None:
    assert raw_encode(["int256"], [2**53 - 1]).hex() == _word(2**53 - 1)
    assert raw_encode(["int256"], [9007199254740991]).hex().endswith(
        "001fffffffffffff"
    )


def test_encode_small_int_uses_full_word() -> None:
    assert raw_encode(["int8"], [-1]).hex() == "f" * 64


def test_encode_string_31_chars() -> None:
    encoded = raw_encode(["string"], ["a response string (unsupported)"])
    assert encoded.hex() == (
        _word(32)
        + _word(31)
        + "6120726573706f6e736520737472696e672028756e737570706f727465642900"
    )


def test_encode_string_longer_than_a_word() -> None:
    text = " hello world" * 20
    encoded = raw_encode(["string"], [text])
    assert encoded[:32] == (32).to_bytes(32, "big")
    assert encoded[32:64] == len(text).to_bytes(32, "big")
    assert encoded[64 : 64 + len(text)] == text.encode()
    assert len(encoded) % 32 == 0


def test_encode_string_and_static_array() -> None:
    encoded = raw_encode(["string", "uint256[2]"], ["foo", [5, 6]])
    assert encoded.hex() == (
        _word(0x60) + _word(5) + _word(6) + _word(3) + "666f6f" + "0" * 58
    )


def test_encode_dynamic_array() -> None:
    encoded = raw_encode(["uint8[]"], [[1, 2]])
    assert encoded.hex() == _word(32) + _word(2) + _word(1) + _word(2)


def test_encode_array_from_json_string() -> None:
    assert encode_single("uint8[]", "[1, 2]") == encode_single("uint8[]", [1, 2])


def test_encode_array_rejects_non_list() -> None:
    with pytest.raises(TypeError, match="Not an array"):
        encode_single("uint8[]", 5)


def test_encode_array_size_exceeded() -> None:
    with pytest.raises(ValueError, match="Elements exceed array size: 2"):
        raw_encode(["uint[2]"], [[1, 2, 3]])


def test_encode_short_static_array_is_not_padded() -> None:
    assert raw_encode(["uint8[3]"], [[1]]).hex() == _word(1)


@pytest.mark.parametrize(("value", "width"), [(1 << 9, 10), (256, 9)])
def test_encode_uint_exceeds_width(value: int, width: int) -> None:
    with pytest.raises(ValueError, match=f"Supplied uint exceeds width: 8 vs {width}"):
        raw_encode(["uint8"], [value])


def test_encode_uint_negative() -> None:
    with pytest.raises(ValueError, match="Supplied uint is negative"):
        raw_encode(["uint8"], [-1])


def test_encode_int_exceeds_width() -> None:
    with pytest.raises(ValueError, match="Supplied int exceeds width: 8 vs 9"):
        raw_encode(["int8"], [256])


def test_encode_bool_and_address() -> None:
    assert raw_encode(["bool"], [True]).hex() == _word(1)
    assert raw_encode(["bool"], [0]).hex() == _word(0)
    assert raw_encode(["bool"], [{}]).hex() == _word(1)
    address = "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"
    assert raw_encode(["address"], [address]).hex() == (
        "0" * 24 + "cd2a3d9f938e13cd947ec05abc7fe734df8dd826"
    )


def test_encode_address_too_wide() -> None:
    with pytest.raises(ValueError, match="Supplied uint exceeds width: 160 vs 164"):
        raw_encode(["address"], ["0x" + "f" * 41])


def test_encode_fixed_bytes() -> None:
    assert raw_encode(["bytes4"], ["0xdeadbeef"]).hex() == "deadbeef" + "0" * 56
    assert raw_encode(["bytes32"], [b"\x01"]).hex() == "01" + "0" * 62
    assert raw_encode(["bytes2"], [0x1234]).hex() == "1234" + "0" * 60


def test_encode_dynamic_bytes() -> None:
    encoded = raw_encode(["bytes"], [b"\xde\xad"])
    assert encoded.hex() == _word(32) + _word(2) + "dead" + "0" * 60


def test_encode_missing_value_is_none() -> None:
    assert raw_encode(["bool"], []).hex() == _word(0)

"""
EIP-712 typed structured data hashing (V3 and V4).

A typed message is ``{"types", "primaryType", "domain", "message"}``. Struct
values are encoded field by field against their type definitions, nested
structs and dynamic values are hashed, and the result is laid out with the
standard ABI encoder before hashing.

The two revisions differ in how they treat absent data:

- V3 skips fields missing from the data and rejects array fields.
- V4 supports arrays, raises for missing primitive fields and substitutes a
  zero hash for a missing or None struct, which terminates recursive types.

A field key that is absent from the data dict plays the role of an undefined
value; an explicit ``None`` is a null value.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

from ..abi import raw_encode
from ..hashes import keccak256
from ..utils import is_hex_string, is_truthy, number_to_bytes, strip_hex_prefix
from ._version import STRUCTURED_VERSIONS, SignTypedDataVersion, validate_version

logger = logging.getLogger(__name__)

Types = Mapping[str, list[Mapping[str, str]]]

TYPED_MESSAGE_KEYS: tuple[str, ...] = ("types", "primaryType", "domain", "message")

EIP712_SOLIDITY_TYPES: frozenset[str] = frozenset(
    ["bool", "address", "string", "bytes"]
    + [f"uint{bits}" for bits in range(8, 257, 8)]
    + [f"int{bits}" for bits in range(8, 257, 8)]
    + [f"bytes{size}" for size in range(1, 33)]
)

_MISSING = object()
_ZERO_HASH = bytes(32)
_TYPE_NAME_RE = re.compile(r"\w*", re.ASCII)
_ARRAY_SUFFIX_RE = re.compile(r"(\[\d*\])+$")


def find_type_dependencies(
    primary_type: str, types: Types, results: set[str] | None = None
) -> set[str]:
    """
    Collect the struct types reachable from ``primary_type``, itself included.

    Array suffixes are stripped before lookup, names absent from ``types``
    (primitives, or an undeclared primary type) are skipped, and the visited
    set makes self-referential types terminate.

    Args:
        primary_type: Root type name, possibly array-suffixed.
        types: Struct definitions.
        results: Set to extend; a new one is created when omitted.

    Returns:
        The set of reachable struct names.
    """
    if results is None:
        results = set()
    pending: list[Any] = [primary_type]
    while pending:
        type_name = pending.pop()
        if not isinstance(type_name, str):
            raise ValueError(
                "Invalid findTypeDependencies input "
                f"{json.dumps(type_name, default=repr)}"
            )
        type_name = _TYPE_NAME_RE.match(type_name).group(0)
        if type_name in results or type_name not in types:
            continue
        results.add(type_name)
        pending.extend(field["type"] for field in reversed(types[type_name]))
    return results


def encode_type(primary_type: str, types: Types) -> str:
    """
    Canonical type string, e.g. ``Mail(Person from,Person to,string contents)Person(string name,address wallet)``.

    The primary type comes first, followed by its dependencies sorted by name.
    """
    deps = find_type_dependencies(primary_type, types)
    deps.discard(primary_type)
    parts = []
    for type_name in [primary_type, *sorted(deps)]:
        fields = types.get(type_name)
        if fields is None:
            raise ValueError(f"No type definition specified: {type_name}")
        members = ",".join(f"{field['type']} {field['name']}" for field in fields)
        parts.append(f"{type_name}({members})")
    return "".join(parts)


def hash_type(primary_type: str, types: Types) -> bytes:
    """Keccak-256 of the canonical type string (the type hash)."""
    return keccak256(encode_type(primary_type, types).encode("utf-8"))


def _read_field(data: Any, name: str) -> Any:
    if data is None or data is _MISSING:
        state = "null" if data is None else "undefined"
        raise TypeError(f"Cannot read properties of {state} (reading '{name}')")
    if isinstance(data, Mapping):
        return data.get(name, _MISSING)
    return _MISSING


def _dynamic_bytes_payload(value: Any) -> bytes:
    if isinstance(value, bool):
        raise TypeError(f"Cannot encode bool as bytes: {value}")
    if isinstance(value, int):
        return number_to_bytes(value)
    if is_hex_string(value):
        digits = strip_hex_prefix(value)
        return bytes.fromhex("0" * (len(digits) % 2) + digits)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview, list, tuple)):
        return bytes(value)
    raise TypeError(f"Cannot encode {type(value).__name__} as bytes")


def _string_payload(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, int) and not isinstance(value, bool):
        return number_to_bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Cannot encode {type(value).__name__} as string")


def _array_items(value: Any) -> list[Any] | tuple[Any, ...]:
    if value is None or value is _MISSING:
        state = "null" if value is None else "undefined"
        raise TypeError(f"Cannot read properties of {state} (reading 'map')")
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list for array field, got {type(value).__name__}")
    return value


def encode_field(
    types: Types,
    name: str,
    type_: str,
    value: Any,
    version: SignTypedDataVersion | str,
) -> tuple[str, Any]:
    """
    Encode one field to an ``(abi_type, value)`` pair for the struct encoder.

    Nested structs, ``bytes``, ``string`` and arrays become ``("bytes32",
    hash)``; primitives pass through unchanged to be ABI-encoded inline.

    Args:
        types: Struct definitions.
        name: Field name (used in error messages).
        type_: Field type string.
        value: Field value.
        version: ``V3`` or ``V4``.

    Returns:
        The ABI type and the value to encode under it.
    """
    version = validate_version(version, STRUCTURED_VERSIONS)

    if type_ in types:
        if version is SignTypedDataVersion.V4 and (value is None or value is _MISSING):
            return ("bytes32", _ZERO_HASH)
        return ("bytes32", keccak256(encode_data(type_, value, types, version)))

    if value is _MISSING:
        raise ValueError(f"missing value for field {name} of type {type_}")

    if type_ == "bytes":
        return ("bytes32", keccak256(_dynamic_bytes_payload(value)))

    if type_ == "string":
        return ("bytes32", keccak256(_string_payload(value)))

    if type_.endswith("]"):
        if version is SignTypedDataVersion.V3:
            raise ValueError("Arrays are unimplemented in encodeData; use V4 extension")
        element_type = type_[: type_.rfind("[")]
        items = _array_items(value)
        if element_type in types:
            # struct elements hash their concatenated encode_data, not their struct hashes
            return (
                "bytes32",
                keccak256(
                    b"".join(
                        encode_data(element_type, item, types, version)
                        for item in items
                    )
                ),
            )
        pairs = [
            encode_field(types, name, element_type, item, version) for item in items
        ]
        return (
            "bytes32",
            keccak256(raw_encode([t for t, _ in pairs], [v for _, v in pairs])),
        )

    return (type_, value)


def encode_data(
    primary_type: str,
    data: Any,
    types: Types,
    version: SignTypedDataVersion | str,
) -> bytes:
    """
    ABI-encode a struct value: its type hash followed by each declared field.

    Keys of ``data`` that are not declared on the type are ignored.

    Args:
        primary_type: Struct type name.
        data: Struct value; ``None`` or an absent value makes field reads raise
            ``TypeError``.
        types: Struct definitions.
        version: ``V3`` or ``V4``.

    Returns:
        The encoded struct (not yet hashed).
    """
    version = validate_version(version, STRUCTURED_VERSIONS)
    encoded_types = ["bytes32"]
    encoded_values: list[Any] = [hash_type(primary_type, types)]
    for field in types[primary_type]:
        value = _read_field(data, field["name"])
        if version is SignTypedDataVersion.V3 and value is _MISSING:
            continue
        abi_type, encoded = encode_field(
            types, field["name"], field["type"], value, version
        )
        encoded_types.append(abi_type)
        encoded_values.append(encoded)
    return raw_encode(encoded_types, encoded_values)


def hash_struct(
    primary_type: str,
    data: Any,
    types: Types,
    version: SignTypedDataVersion | str,
) -> bytes:
    """Keccak-256 of ``encode_data`` (the struct hash)."""
    version = validate_version(version, STRUCTURED_VERSIONS)
    return keccak256(encode_data(primary_type, data, types, version))


def sanitize_data(typed_data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Keep only the four typed-message keys and default ``EIP712Domain`` to ``[]``.

    Keys with a false-like value are dropped; empty dicts and lists are kept.
    The input is not modified.
    """
    sanitized: dict[str, Any] = {}
    for key in TYPED_MESSAGE_KEYS:
        value = typed_data.get(key)
        if is_truthy(value):
            sanitized[key] = value
    if "types" in sanitized:
        sanitized["types"] = {"EIP712Domain": [], **sanitized["types"]}
    return sanitized


def _sanitized_types(sanitized: Mapping[str, Any]) -> Types:
    types = sanitized.get("types")
    if types is None:
        raise ValueError("typed data is missing 'types'")
    return types


def eip712_domain_hash(
    typed_data: Mapping[str, Any], version: SignTypedDataVersion | str
) -> bytes:
    """
    Hash of the domain separator.

    Args:
        typed_data: Typed message.
        version: ``V3`` or ``V4``.

    Returns:
        32-byte ``hashStruct("EIP712Domain", domain)``.
    """
    version = validate_version(version, STRUCTURED_VERSIONS)
    sanitized = sanitize_data(typed_data)
    domain_types = {"EIP712Domain": _sanitized_types(sanitized)["EIP712Domain"]}
    return hash_struct(
        "EIP712Domain", sanitized.get("domain", {}), domain_types, version
    )


def eip712_hash(
    typed_data: Mapping[str, Any], version: SignTypedDataVersion | str
) -> bytes:
    """
    EIP-712 digest to sign: keccak256(0x1901 || domainHash || structHash).

    When ``primaryType`` is ``EIP712Domain`` the message is ignored and the
    struct hash is left out.

    Args:
        typed_data: Dict with keys "types", "primaryType", "domain", "message";
            other keys are ignored.
        version: ``V3`` or ``V4``.

    Returns:
        32-byte hash to sign (e.g. with sign_recoverable).
    """
    version = validate_version(version, STRUCTURED_VERSIONS)
    sanitized = sanitize_data(typed_data)
    parts = [b"\x19\x01", eip712_domain_hash(typed_data, version)]
    primary_type = sanitized.get("primaryType")
    if primary_type != "EIP712Domain":
        parts.append(
            hash_struct(
                primary_type,
                sanitized.get("message", _MISSING),
                _sanitized_types(sanitized),
                version,
            )
        )
    digest = keccak256(b"".join(parts))
    logger.debug("eip712 %s digest for primary type %r", version.value, primary_type)
    return digest


def _is_known_type(type_: str, types: Types) -> bool:
    base = _ARRAY_SUFFIX_RE.sub("", type_)
    return base in types or base in EIP712_SOLIDITY_TYPES


def validate_typed_message(typed_data: Any, strict: bool = False) -> bool:
    """
    Check that ``typed_data`` has the shape of a typed message.

    Args:
        typed_data: Candidate message.
        strict: Also require every field type to be a declared struct or an
            EIP-712 primitive, optionally with array suffixes.

    Returns:
        True when the message is well formed.
    """
    if not isinstance(typed_data, Mapping):
        return False
    if any(key not in typed_data for key in TYPED_MESSAGE_KEYS):
        return False
    types = typed_data["types"]
    if not isinstance(types, Mapping):
        return False
    for fields in types.values():
        if not isinstance(fields, list):
            return False
        for field in fields:
            if not isinstance(field, Mapping):
                return False
            if not isinstance(field.get("name"), str):
                return False
            if not isinstance(field.get("type"), str):
                return False
            if strict and not _is_known_type(field["type"], types):
                return False
    if not isinstance(typed_data["primaryType"], str):
        return False
    return isinstance(typed_data["domain"], Mapping) and isinstance(
        typed_data["message"], Mapping
    )


TypedDataUtils = SimpleNamespace(
    encode_data=encode_data,
    encode_type=encode_type,
    find_type_dependencies=find_type_dependencies,
    hash_struct=hash_struct,
    hash_type=hash_type,
    sanitize_data=sanitize_data,
    eip712_hash=eip712_hash,
    eip712_domain_hash=eip712_domain_hash,
    validate_typed_message=validate_typed_message,
)

__all__: tuple[str, ...] = (
    "EIP712_SOLIDITY_TYPES",
    "TYPED_MESSAGE_KEYS",
    "TypedDataUtils",
    "eip712_domain_hash",
    "eip712_hash",
    "encode_data",
    "encode_field",
    "encode_type",
    "find_type_dependencies",
    "hash_struct",
    "hash_type",
    "sanitize_data",
    "validate_typed_message",
)

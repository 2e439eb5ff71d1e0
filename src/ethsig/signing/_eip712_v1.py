"""
Legacy (V1) typed-data hashing.

V1 data is a flat list of ``{"name", "type", "value"}`` entries with no
nested types and no domain. The digest is a hash of two tightly packed
hashes: one over the ``"<type> <name>"`` schema strings and one over the values.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..abi import solidity_pack
from ..hashes import keccak256
from ..utils import is_truthy, legacy_to_bytes

TypedDataV1 = Sequence[Mapping[str, Any]]

_NON_EMPTY_ERROR = "Expect argument to be non-empty array"


def typed_signature_hash_bytes(typed_data: TypedDataV1) -> bytes:
    """32-byte V1 digest; see ``typed_signature_hash``."""
    if not isinstance(typed_data, (list, tuple)) or not typed_data:
        raise ValueError(_NON_EMPTY_ERROR)
    values = [
        legacy_to_bytes(entry.get("value"))
        if entry.get("type") == "bytes"
        else entry.get("value")
        for entry in typed_data
    ]
    types = [entry.get("type") for entry in typed_data]
    schema = []
    for entry in typed_data:
        if not is_truthy(entry.get("name")):
            raise ValueError(_NON_EMPTY_ERROR)
        if not isinstance(entry.get("type"), str):
            raise TypeError(f"Missing type for entry {entry['name']!r}")
        schema.append(f"{entry['type']} {entry['name']}")
    schema_hash = keccak256(solidity_pack(["string"] * len(typed_data), schema))
    data_hash = keccak256(solidity_pack(types, values))
    return keccak256(solidity_pack(["bytes32", "bytes32"], [schema_hash, data_hash]))


def typed_signature_hash(typed_data: TypedDataV1) -> str:
    """
    Legacy V1 typed-data digest as a 0x-prefixed hex string.

    Args:
        typed_data: Non-empty list of ``{"name", "type", "value"}`` dicts.

    Returns:
        "0x" plus 64 hex chars.
    """
    return "0x" + typed_signature_hash_bytes(typed_data).hex()


__all__: tuple[str, ...] = (
    "TypedDataV1",
    "typed_signature_hash",
    "typed_signature_hash_bytes",
)

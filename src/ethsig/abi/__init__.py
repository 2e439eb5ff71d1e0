"""Solidity ABI encoding: type grammar, head/tail encoding, tight packing."""

from .encoding import encode_single, raw_encode
from .packing import solidity_pack
from .types import SolidityType, is_dynamic, parse_type

__all__: tuple[str, ...] = (
    "SolidityType",
    "encode_single",
    "is_dynamic",
    "parse_type",
    "raw_encode",
    "solidity_pack",
)

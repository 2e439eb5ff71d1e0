"""Serialization (serde): RLP encoding."""

from .rlp import rlp_encode

__all__: tuple[str, ...] = ("rlp_encode",)

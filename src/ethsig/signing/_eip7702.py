"""
EIP-7702 authorization tuples: ``keccak256(0x05 || rlp([chainId, contractAddress, nonce]))``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ..curves import sign_recoverable
from ..hashes import keccak256
from ..serde import rlp_encode
from ..utils import concat_sig, public_to_address, recover_public_key, to_bytes

EIP7702Authorization = Sequence[Any]

_MAGIC = b"\x05"
_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")


def _is_uint_below(value: Any, bound: int) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value < bound
    )


def _validate_authorization(authorization: EIP7702Authorization | None) -> None:
    if authorization is None:
        raise ValueError("Missing authorization parameter")
    chain_id, contract_address, nonce = (list(authorization) + [None] * 3)[:3]
    if chain_id is None:
        raise ValueError("Missing chainId parameter")
    if contract_address is None:
        raise ValueError("Missing contractAddress parameter")
    if nonce is None:
        raise ValueError("Missing nonce parameter")
    if not _is_uint_below(chain_id, 1 << 256):
        raise ValueError(
            "Invalid chainId: must be a non-negative number less than 2^256"
        )
    if not isinstance(contract_address, str) or not _ADDRESS_RE.fullmatch(
        contract_address
    ):
        raise ValueError("Invalid contractAddress: must be a 20 byte hex string")
    if not _is_uint_below(nonce, 1 << 64):
        raise ValueError("Invalid nonce: must be a non-negative number less than 2^64")


def hash_eip7702_authorization(authorization: EIP7702Authorization) -> bytes:
    """
    Digest of an authorization tuple.

    Args:
        authorization: ``(chain_id, contract_address, nonce)``; chain id below
            2**256, a 0x-prefixed 20-byte hex address, nonce below 2**64.

    Returns:
        32-byte hash to sign.
    """
    _validate_authorization(authorization)
    chain_id, contract_address, nonce = authorization[:3]
    return keccak256(_MAGIC + rlp_encode([chain_id, contract_address, nonce]))


def sign_eip7702_authorization(
    private_key: bytes | str, authorization: EIP7702Authorization
) -> str:
    """Sign an authorization tuple; returns the 0x-prefixed ``r || s || v`` signature."""
    _validate_authorization(authorization)
    if private_key is None:
        raise ValueError("Missing privateKey parameter")
    message_hash = hash_eip7702_authorization(authorization)
    r, s, v = sign_recoverable(to_bytes(private_key), message_hash)
    return concat_sig(v, r, s)


def recover_eip7702_authorization(
    signature: str | bytes, authorization: EIP7702Authorization
) -> str:
    """Lower-case 0x address that signed ``authorization``."""
    _validate_authorization(authorization)
    if signature is None:
        raise ValueError("Missing signature parameter")
    message_hash = hash_eip7702_authorization(authorization)
    return public_to_address(recover_public_key(message_hash, signature))


__all__: tuple[str, ...] = (
    "EIP7702Authorization",
    "hash_eip7702_authorization",
    "recover_eip7702_authorization",
    "sign_eip7702_authorization",
)

"""
personal_sign: signatures over ``"\\x19Ethereum Signed Message:\\n" + len + message``.
"""

from __future__ import annotations

from typing import Any

from ..curves import sign_recoverable
from ..hashes import keccak256
from ..utils import (concat_sig, legacy_to_bytes, public_to_address,
                     recover_public_key, to_bytes)

_PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"


def hash_personal_message(message: bytes) -> bytes:
    """Keccak-256 of the prefixed message; the length is written in decimal."""
    return keccak256(
        _PERSONAL_MESSAGE_PREFIX + str(len(message)).encode("ascii") + message
    )


def _personal_public_key(data: Any, signature: str | bytes) -> bytes:
    return recover_public_key(hash_personal_message(legacy_to_bytes(data)), signature)


def personal_sign(private_key: bytes | str, data: Any) -> str:
    """
    Sign a message the way ``personal_sign`` does.

    Args:
        private_key: 32-byte private key (bytes or 0x-hex).
        data: Message; a 0x-hex string is decoded, other text is UTF-8.

    Returns:
        0x-prefixed ``r || s || v`` signature.
    """
    if data is None:
        raise ValueError("Missing data parameter")
    if private_key is None:
        raise ValueError("Missing privateKey parameter")
    message_hash = hash_personal_message(legacy_to_bytes(data))
    r, s, v = sign_recoverable(to_bytes(private_key), message_hash)
    return concat_sig(v, r, s)


def recover_personal_signature(data: Any, signature: str | bytes) -> str:
    """Lower-case 0x address that produced a ``personal_sign`` signature."""
    if data is None:
        raise ValueError("Missing data parameter")
    if signature is None:
        raise ValueError("Missing signature parameter")
    return public_to_address(_personal_public_key(data, signature))


def extract_public_key(data: Any, signature: str | bytes) -> str:
    """
    Public key behind a ``personal_sign`` signature.

    Returns:
        "0x" plus 128 hex chars (x || y, without the 0x04 prefix).
    """
    if data is None:
        raise ValueError("Missing data parameter")
    if signature is None:
        raise ValueError("Missing signature parameter")
    return "0x" + _personal_public_key(data, signature).hex()


__all__: tuple[str, ...] = (
    "extract_public_key",
    "hash_personal_message",
    "personal_sign",
    "recover_personal_signature",
)

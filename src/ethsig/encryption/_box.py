"""
Message encryption to an account's encryption public key.

Envelope version ``x25519-xsalsa20-poly1305``: every message is boxed with a
fresh ephemeral Curve25519 key pair and a random nonce; the envelope carries
the nonce, the ephemeral public key and the ciphertext, all base64.
"""

from __future__ import annotations

import base64
import json
import logging
from collections.abc import Mapping
from typing import Any

from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from nacl.utils import random

from ..utils import strip_hex_prefix

logger = logging.getLogger(__name__)

ENCRYPTION_VERSION = "x25519-xsalsa20-poly1305"
DEFAULT_PADDING_LENGTH = 2**11
_NACL_EXTRA_BYTES = 16


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value, validate=True)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _require(**params: Any) -> None:
    for name, value in params.items():
        if value is None:
            raise ValueError(f"Missing {name} parameter")


def _receiver_key(private_key: str) -> PrivateKey:
    return PrivateKey(bytes.fromhex(strip_hex_prefix(private_key)))


def encrypt(public_key: str, data: Any, version: str) -> dict[str, str]:
    """
    Encrypt a string for the holder of ``public_key``.

    Args:
        public_key: Receiver's base64 Curve25519 public key
            (see ``get_encryption_public_key``).
        data: Message text.
        version: Envelope version; only ``x25519-xsalsa20-poly1305`` exists.

    Returns:
        Envelope dict with "version", "nonce", "ephemPublicKey", "ciphertext".
    """
    _require(publicKey=public_key, data=data, version=version)
    if version != ENCRYPTION_VERSION:
        raise ValueError("Encryption type/version not supported")
    if not isinstance(data, str):
        raise TypeError("Message data must be given as a string")
    try:
        receiver = PublicKey(_b64decode(public_key))
    except (TypeError, ValueError) as err:
        raise ValueError("Bad public key") from err

    ephemeral = PrivateKey.generate()
    nonce = random(Box.NONCE_SIZE)
    encrypted = Box(ephemeral, receiver).encrypt(data.encode("utf-8"), nonce)
    logger.debug("encrypted %d-byte message (%s)", len(data), version)
    return {
        "version": ENCRYPTION_VERSION,
        "nonce": _b64encode(nonce),
        "ephemPublicKey": _b64encode(bytes(ephemeral.public_key)),
        "ciphertext": _b64encode(encrypted.ciphertext),
    }


def encrypt_safely(public_key: str, data: Any, version: str) -> dict[str, str]:
    """
    Encrypt any JSON-serializable value, padded to hide its length.

    The value is wrapped as ``{"data": ..., "padding": "000..."}`` so the
    ciphertext length is a multiple of ``DEFAULT_PADDING_LENGTH``.
    """
    _require(publicKey=public_key, data=data, version=version)
    if hasattr(data, "toJSON") or (isinstance(data, Mapping) and "toJSON" in data):
        raise ValueError(
            "Cannot encrypt with toJSON property.  Please remove toJSON property"
        )
    with_padding = {"data": data, "padding": ""}
    remainder = len(_to_json(with_padding).encode("utf-8")) % DEFAULT_PADDING_LENGTH
    if remainder > 0:
        pad_length = DEFAULT_PADDING_LENGTH - remainder - _NACL_EXTRA_BYTES
        with_padding["padding"] = "0" * max(pad_length, 0)
    return encrypt(public_key, _to_json(with_padding), version)


def decrypt(encrypted_data: Mapping[str, str], private_key: str) -> str:
    """
    Open an envelope produced by ``encrypt``.

    Args:
        encrypted_data: Envelope dict.
        private_key: Receiver's 32-byte private key as hex.

    Returns:
        The decrypted text.

    Raises:
        ValueError: Unsupported version, malformed fields, or
            ``"Decryption failed."`` for any authentication failure.
    """
    _require(encryptedData=encrypted_data, privateKey=private_key)
    if encrypted_data.get("version") != ENCRYPTION_VERSION:
        raise ValueError("Encryption type/version not supported.")

    receiver = _receiver_key(private_key)
    nonce = _b64decode(encrypted_data["nonce"])
    ciphertext = _b64decode(encrypted_data["ciphertext"])
    ephem_public_key = _b64decode(encrypted_data["ephemPublicKey"])
    if len(ephem_public_key) != PublicKey.SIZE:
        raise ValueError("bad public key size")
    if len(nonce) != Box.NONCE_SIZE:
        raise ValueError("bad nonce size")

    try:
        plaintext = Box(receiver, PublicKey(ephem_public_key)).decrypt(
            ciphertext, nonce
        )
    except CryptoError:
        raise ValueError("Decryption failed.") from None
    output = plaintext.decode("utf-8", errors="replace")
    if not output:
        raise ValueError("Decryption failed.")
    return output


def decrypt_safely(encrypted_data: Mapping[str, str], private_key: str) -> Any:
    """Open an envelope produced by ``encrypt_safely`` and return the original value."""
    _require(encryptedData=encrypted_data, privateKey=private_key)
    return json.loads(decrypt(encrypted_data, private_key))["data"]


def get_encryption_public_key(private_key: str) -> str:
    """
    Curve25519 public key for a hex private key, base64 encoded.

    Args:
        private_key: 32-byte private key as hex (an Ethereum key works as is).

    Returns:
        Base64 public key to hand to senders.
    """
    return _b64encode(bytes(_receiver_key(private_key).public_key))


__all__: tuple[str, ...] = (
    "DEFAULT_PADDING_LENGTH",
    "ENCRYPTION_VERSION",
    "decrypt",
    "decrypt_safely",
    "encrypt",
    "encrypt_safely",
    "get_encryption_public_key",
)

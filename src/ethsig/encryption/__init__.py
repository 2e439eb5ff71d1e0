"""Encryption: NaCl box envelopes (x25519-xsalsa20-poly1305)."""

from ._box import (DEFAULT_PADDING_LENGTH, ENCRYPTION_VERSION, decrypt,
                   decrypt_safely, encrypt, encrypt_safely,
                   get_encryption_public_key)

__all__: tuple[str, ...] = (
    "DEFAULT_PADDING_LENGTH",
    "ENCRYPTION_VERSION",
    "decrypt",
    "decrypt_safely",
    "encrypt",
    "encrypt_safely",
    "get_encryption_public_key",
)

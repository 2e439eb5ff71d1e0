"""Sign typed data (V1, V3, V4) and recover the signer's address."""

from __future__ import annotations

import logging
from typing import Any

from ..curves import sign_recoverable
from ..utils import concat_sig, public_to_address, recover_public_key, to_bytes
from ._eip712 import eip712_hash
from ._eip712_v1 import typed_signature_hash_bytes
from ._version import SignTypedDataVersion, validate_version

logger = logging.getLogger(__name__)


def _typed_data_digest(data: Any, version: SignTypedDataVersion) -> bytes:
    if version is SignTypedDataVersion.V1:
        return typed_signature_hash_bytes(data)
    return eip712_hash(data, version)


def sign_typed_data(
    private_key: bytes | str,
    data: Any,
    version: SignTypedDataVersion | str,
) -> str:
    """
    Sign typed data with a secp256k1 key.

    Args:
        private_key: 32-byte private key (bytes or 0x-hex).
        data: V1 list of ``{"name", "type", "value"}`` entries, or a V3/V4
            typed message dict.
        version: ``V1``, ``V3`` or ``V4``.

    Returns:
        0x-prefixed ``r || s || v`` signature (130 hex chars for v = 27/28).
    """
    version = validate_version(version)
    if data is None:
        raise ValueError("Missing data parameter")
    if private_key is None:
        raise ValueError("Missing private key parameter")
    message_hash = _typed_data_digest(data, version)
    r, s, v = sign_recoverable(to_bytes(private_key), message_hash)
    logger.debug("signed %s typed data", version.value)
    return concat_sig(v, r, s)


def recover_typed_signature(
    data: Any,
    signature: str | bytes,
    version: SignTypedDataVersion | str,
) -> str:
    """
    Recover the address that signed typed data.

    Args:
        data: The signed typed data (same shape as for ``sign_typed_data``).
        signature: 0x-hex or raw signature bytes.
        version: ``V1``, ``V3`` or ``V4``.

    Returns:
        Lower-case 0x-prefixed signer address.
    """
    version = validate_version(version)
    if data is None:
        raise ValueError("Missing data parameter")
    if signature is None:
        raise ValueError("Missing signature parameter")
    message_hash = _typed_data_digest(data, version)
    return public_to_address(recover_public_key(message_hash, signature))


__all__: tuple[str, ...] = (
    "recover_typed_signature",
    "sign_typed_data",
)

"""Signing schemas: EIP-712 typed data (V1/V3/V4), personal_sign, EIP-7702."""

from ._eip712 import (EIP712_SOLIDITY_TYPES, TYPED_MESSAGE_KEYS,
                      TypedDataUtils, eip712_domain_hash, eip712_hash,
                      encode_data, encode_field, encode_type,
                      find_type_dependencies, hash_struct, hash_type,
                      sanitize_data, validate_typed_message)
from ._eip712_v1 import typed_signature_hash
from ._eip7702 import (hash_eip7702_authorization,
                       recover_eip7702_authorization,
                       sign_eip7702_authorization)
from ._personal import (extract_public_key, hash_personal_message,
                        personal_sign, recover_personal_signature)
from ._typed_data import recover_typed_signature, sign_typed_data
from ._version import SignTypedDataVersion

__all__: tuple[str, ...] = (
    "EIP712_SOLIDITY_TYPES",
    "SignTypedDataVersion",
    "TYPED_MESSAGE_KEYS",
    "TypedDataUtils",
    "eip712_domain_hash",
    "eip712_hash",
    "encode_data",
    "encode_field",
    "encode_type",
    "extract_public_key",
    "find_type_dependencies",
    "hash_eip7702_authorization",
    "hash_personal_message",
    "hash_struct",
    "hash_type",
    "personal_sign",
    "recover_eip7702_authorization",
    "recover_personal_signature",
    "recover_typed_signature",
    "sanitize_data",
    "sign_eip7702_authorization",
    "sign_typed_data",
    "typed_signature_hash",
    "validate_typed_message",
)

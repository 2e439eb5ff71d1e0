"""
Ethereum message signing: EIP-712 typed data (V1/V3/V4), personal_sign,
EIP-7702 authorizations and NaCl box encryption. Keccak-256 and secp256k1
are pure Python; no eth_account dependency.
"""

import logging

from .__about__ import __version__
from .abi import parse_type, raw_encode, solidity_pack
from .curves import (privkey_to_address, privkey_to_pubkey, pubkey_to_address,
                     recover_pubkey, sign_recoverable)
from .encryption import (decrypt, decrypt_safely, encrypt, encrypt_safely,
                         get_encryption_public_key)
from .hashes import keccak256
from .serde import rlp_encode
from .signing import (SignTypedDataVersion, TypedDataUtils,
                      eip712_domain_hash, eip712_hash, encode_data,
                      encode_type, extract_public_key,
                      find_type_dependencies, hash_eip7702_authorization,
                      hash_struct, hash_type, personal_sign,
                      recover_eip7702_authorization,
                      recover_personal_signature, recover_typed_signature,
                      sanitize_data, sign_eip7702_authorization,
                      sign_typed_data, typed_signature_hash,
                      validate_typed_message)
from .utils import (concat_sig, normalize, pad_with_zeroes, public_to_address,
                    recover_public_key)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Hashes
    "keccak256",
    # Serde
    "rlp_encode",
    # Curves: secp256k1
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address",
    "recover_pubkey",
    "sign_recoverable",
    # ABI
    "parse_type",
    "raw_encode",
    "solidity_pack",
    # Signing: EIP-712 typed data
    "SignTypedDataVersion",
    "TypedDataUtils",
    "eip712_domain_hash",
    "eip712_hash",
    "encode_data",
    "encode_type",
    "find_type_dependencies",
    "hash_struct",
    "hash_type",
    "recover_typed_signature",
    "sanitize_data",
    "sign_typed_data",
    "typed_signature_hash",
    "validate_typed_message",
    # Signing: personal_sign
    "extract_public_key",
    "personal_sign",
    "recover_personal_signature",
    # Signing: EIP-7702
    "hash_eip7702_authorization",
    "recover_eip7702_authorization",
    "sign_eip7702_authorization",
    # Encryption
    "decrypt",
    "decrypt_safely",
    "encrypt",
    "encrypt_safely",
    "get_encryption_public_key",
    # Utils
    "concat_sig",
    "normalize",
    "pad_with_zeroes",
    "public_to_address",
    "recover_public_key",
)

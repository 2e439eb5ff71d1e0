#!/usr/bin/env python3
"""Example: sign and recover EIP-712 typed data, personal_sign and EIP-7702."""

from ethsig import (
    SignTypedDataVersion,
    keccak256,
    personal_sign,
    recover_personal_signature,
    recover_typed_signature,
    sign_eip7702_authorization,
    sign_typed_data,
    typed_signature_hash,
)
from ethsig.curves import privkey_to_address

privkey = keccak256(b"cow")
address = privkey_to_address(privkey)

typed_data = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "version", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallet", "type": "address"},
        ],
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person[]"},
            {"name": "contents", "type": "string"},
        ],
    },
    "primaryType": "Mail",
    "domain": {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
    },
    "message": {
        "from": {"name": "Cow", "wallet": address},
        "to": [{"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"}],
        "contents": "Hello, Bob!",
    },
}

signature = sign_typed_data(privkey, typed_data, SignTypedDataVersion.V4)
print("signer:", address)
print("V4 signature:", signature)
print("recovered:", recover_typed_signature(typed_data, signature, "V4"))

legacy = [{"type": "string", "name": "message", "value": "Hi, Alice!"}]
print("V1 hash:", typed_signature_hash(legacy))

personal = personal_sign(privkey, "Hello, world!")
print("personal_sign:", personal)
print("recovered:", recover_personal_signature("Hello, world!", personal))

authorization = [1, "0x1234567890123456789012345678901234567890", 0]
print("EIP-7702:", sign_eip7702_authorization(privkey, authorization))

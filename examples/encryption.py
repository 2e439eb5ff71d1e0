#!/usr/bin/env python3
"""Example: encrypt a message to an account and decrypt it with the account key."""

from ethsig.encryption import (
    ENCRYPTION_VERSION,
    decrypt,
    decrypt_safely,
    encrypt,
    encrypt_safely,
    get_encryption_public_key,
)

bob_private_key = "7e5374ec2ef0d91761a6e72fdf8f6ac665519bfdf6da0a2329cf0d804514b816"
bob_public_key = get_encryption_public_key(bob_private_key)
print("encryption public key:", bob_public_key)

envelope = encrypt(bob_public_key, "My name is Satoshi Buterin", ENCRYPTION_VERSION)
print("envelope:", envelope)
print("decrypted:", decrypt(envelope, bob_private_key))

padded = encrypt_safely(bob_public_key, {"amount": 42}, ENCRYPTION_VERSION)
print("padded ciphertext length:", len(padded["ciphertext"]))
print("decrypted:", decrypt_safely(padded, bob_private_key))

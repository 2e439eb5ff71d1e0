"""
Benchmark typed-data hashing and signing: V1, V3, V4, personal_sign, EIP-7702.
Reports time per call and peak memory (tracemalloc) per run.

Run from repo root:

  PYTHONPATH=src python benchmarks/signing.py

Or after pip install -e .:

  python benchmarks/signing.py
"""

from __future__ import annotations

import time
import tracemalloc

from ethsig import (eip712_hash, keccak256, personal_sign,
                    recover_typed_signature, sign_eip7702_authorization,
                    sign_typed_data, typed_signature_hash)

N_TIME = 200
N_MEM = 50
PRIV = keccak256(b"cow")
PERSON = [{"name": "name", "type": "string"}, {"name": "wallet", "type": "address"}]
TYPED_DATA = {
    "types": {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "chainId", "type": "uint256"},
        ],
        "Person": PERSON,
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person[]"},
            {"name": "contents", "type": "string"},
        ],
    },
    "primaryType": "Mail",
    "domain": {"name": "Bench", "chainId": 1},
    "message": {
        "from": {"name": "Cow", "wallet": "0x" + "11" * 20},
        "to": [{"name": f"p{i}", "wallet": "0x" + "22" * 20} for i in range(8)],
        "contents": "hello",
    },
}
V3_DATA = {
    **TYPED_DATA,
    "types": {**TYPED_DATA["types"], "Mail": [
        {"name": "from", "type": "Person"},
        {"name": "contents", "type": "string"},
    ]},
}
V1_DATA = [
    {"type": "string", "name": "message", "value": "Hi, Alice!"},
    {"type": "uint8", "name": "value", "value": 10},
]
AUTHORIZATION = [1, "0x" + "33" * 20, 7]


def _time_per_call(fn, *args, n: int = N_TIME, **kwargs) -> float:
    for _ in range(5):
        fn(*args, **kwargs)
    start = time.perf_counter()
    for _ in range(n):
        fn(*args, **kwargs)
    return (time.perf_counter() - start) / n


def _peak_kb(fn, *args, n: int = N_MEM, **kwargs) -> float:
    tracemalloc.start()
    tracemalloc.reset_peak()
    for _ in range(n):
        fn(*args, **kwargs)
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return peak / 1024.0


def main() -> None:
    print("Benchmark: typed-data hashing and signing (pure Python)")
    print()

    signature = sign_typed_data(PRIV, TYPED_DATA, "V4")
    assert recover_typed_signature(TYPED_DATA, signature, "V4").startswith("0x")
    print(f"  n = {N_TIME} (time), {N_MEM} (memory)")
    print()

    cases = [
        ("typed_signature_hash V1", typed_signature_hash, (V1_DATA,)),
        ("eip712_hash V3", eip712_hash, (V3_DATA, "V3")),
        ("eip712_hash V4 (8-element array)", eip712_hash, (TYPED_DATA, "V4")),
        ("sign_typed_data V4", sign_typed_data, (PRIV, TYPED_DATA, "V4")),
        ("recover_typed_signature V4", recover_typed_signature,
         (TYPED_DATA, signature, "V4")),
        ("personal_sign", personal_sign, (PRIV, "Hello, world!")),
        ("sign_eip7702_authorization", sign_eip7702_authorization,
         (PRIV, AUTHORIZATION)),
    ]
    for label, fn, args in cases:
        t = _time_per_call(fn, *args) * 1000
        m = _peak_kb(fn, *args)
        print(f"  {label:<36} {t:8.4f} ms   peak {m:8.2f} KiB")


if __name__ == "__main__":
    main()

"""
Benchmark the pure-Python primitives: Keccak-256 over several payload sizes,
secp256k1 signing and public key recovery.

Run from repo root:

  PYTHONPATH=src python benchmarks/keccak.py
"""

from __future__ import annotations

import time

from ethsig import keccak256, recover_pubkey, sign_recoverable

SAMPLES = [
    (b"", "empty"),
    (b"hello", "short"),
    (b"x" * 136, "1 block"),
    (b"x" * 1024, "1 KiB"),
]
PRIV = keccak256(b"cow")
MSG_HASH = keccak256(b"bench")


# fewer iterations for larger payloads
def _n_time(data_len: int) -> int:
    return 2000 if data_len <= 256 else 300


def _time_per_call(fn, *args, n: int, warmup: int = 10) -> float:
    for _ in range(warmup):
        fn(*args)
    start = time.perf_counter()
    for _ in range(n):
        fn(*args)
    return (time.perf_counter() - start) / n


def main() -> None:
    print("Benchmark: Keccak-256 and secp256k1 (pure Python)")
    print()
    print(f"  {'size':<10} {'n':<8} {'keccak256 (ms)':<14}")
    print("  " + "-" * 34)
    for data, label in SAMPLES:
        n = _n_time(len(data))
        t = _time_per_call(keccak256, data, n=n) * 1000
        print(f"  {label:<10} {n:<8} {t:<14.4f}")
    print()

    r, s, v = sign_recoverable(PRIV, MSG_HASH)
    t_sign = _time_per_call(sign_recoverable, PRIV, MSG_HASH, n=100) * 1000
    t_recover = _time_per_call(recover_pubkey, MSG_HASH, r, s, v - 27, n=100) * 1000
    print(f"  sign_recoverable   {t_sign:.4f} ms")
    print(f"  recover_pubkey     {t_recover:.4f} ms")


if __name__ == "__main__":
    main()

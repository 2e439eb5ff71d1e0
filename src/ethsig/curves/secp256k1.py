"""
secp256k1 ECDSA for Ethereum: key derivation, RFC 6979 signing, public key recovery.

Signatures are low-s normalized and carry an Ethereum recovery value ``v``
(27 or 28), so they match what wallets such as MetaMask produce.
"""

from __future__ import annotations

import hashlib
import hmac

from ..hashes import keccak256

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_HALF_N = _N // 2
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)
_INFINITY = (0, 0)


def _mod_inv(a: int, n: int) -> int:
    """Modular inverse via extended gcd."""
    a %= n
    t, r = 0, n
    new_t, new_r = 1, a
    while new_r:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r
    if r != 1:
        raise ValueError("no inverse")
    return t % n


def _point_add(p: tuple[int, int], q: tuple[int, int]) -> tuple[int, int]:
    """Affine point addition; (0, 0) stands for the point at infinity."""
    if p == _INFINITY:
        return q
    if q == _INFINITY:
        return p
    px, py = p
    qx, qy = q
    if px == qx:
        if py != qy or py == 0:
            return _INFINITY
        lam = 3 * px * px * _mod_inv(2 * py, _P) % _P
    else:
        lam = (qy - py) * _mod_inv(qx - px, _P) % _P
    rx = (lam * lam - px - qx) % _P
    return (rx, (lam * (px - rx) - py) % _P)


def _point_mul(k: int, point: tuple[int, int]) -> tuple[int, int]:
    """Double-and-add scalar multiplication."""
    k %= _N
    acc = _INFINITY
    while k:
        if k & 1:
            acc = _point_add(acc, point)
        point = _point_add(point, point)
        k >>= 1
    return acc


def _encode_point(point: tuple[int, int]) -> bytes:
    return b"\x04" + point[0].to_bytes(32, "big") + point[1].to_bytes(32, "big")


def _scalar_from_privkey(privkey: bytes) -> int:
    if len(privkey) != 32:
        raise ValueError("privkey must be 32 bytes")
    d = int.from_bytes(privkey, "big")
    if d == 0 or d >= _N:
        raise ValueError("invalid privkey")
    return d


def privkey_to_pubkey(privkey: bytes) -> bytes:
    """
    Derive uncompressed public key (65 bytes: 0x04 || x || y) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        65-byte uncompressed public key.
    """
    return _encode_point(_point_mul(_scalar_from_privkey(privkey), _G))


def _hmac_sha256(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha256).digest()


def _rfc6979_nonces(d: int, msg_hash: bytes):
    """Yield RFC 6979 (HMAC-SHA256) nonce candidates for key d and a 32-byte hash."""
    x = d.to_bytes(32, "big")
    h1 = (int.from_bytes(msg_hash, "big") % _N).to_bytes(32, "big")
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = _hmac_sha256(k, v + b"\x00" + x + h1)
    v = _hmac_sha256(k, v)
    k = _hmac_sha256(k, v + b"\x01" + x + h1)
    v = _hmac_sha256(k, v)
    while True:
        v = _hmac_sha256(k, v)
        candidate = int.from_bytes(v, "big")
        if 1 <= candidate < _N:
            yield candidate
        k = _hmac_sha256(k, v + b"\x00")
        v = _hmac_sha256(k, v)


def sign_recoverable(privkey: bytes, msg_hash: bytes) -> tuple[int, int, int]:
    """
    ECDSA sign with recovery id; returns (r, s, v) with v in {27, 28}.

    The nonce is derived per RFC 6979 and ``s`` is normalized to the lower half
    of the group order, flipping the recovery parity when it is negated.

    Args:
        privkey: 32-byte private key.
        msg_hash: 32-byte message hash to sign.

    Returns:
        (r, s, v) where v is 27 or 28 for Ethereum-style recovery.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    d = _scalar_from_privkey(privkey)
    z = int.from_bytes(msg_hash, "big") % _N
    for k in _rfc6979_nonces(d, msg_hash):
        rx, ry = _point_mul(k, _G)
        r = rx % _N
        if r == 0:
            continue
        s = _mod_inv(k, _N) * (z + r * d) % _N
        if s == 0:
            continue
        recid = (ry & 1) | (2 if rx >= _N else 0)
        if s > _HALF_N:
            s = _N - s
            recid ^= 1
        return (r, s, 27 + recid)
    raise ValueError("sign_recoverable: nonce generation exhausted")


def recover_pubkey(msg_hash: bytes, r: int, s: int, recid: int) -> bytes:
    """
    Recover uncompressed public key (65 bytes) from ECDSA signature (msg_hash, r, s, recid).

    Args:
        msg_hash: 32-byte message hash that was signed.
        r, s: Signature components (scalars).
        recid: Recovery id (0-3); bit 0 is the parity of R.y, bit 1 means R.x = r + n.

    Returns:
        65-byte uncompressed public key.
    """
    if len(msg_hash) != 32:
        raise ValueError("msg_hash must be 32 bytes")
    if not 0 <= recid <= 3:
        raise ValueError(f"invalid recovery id: {recid}")
    if not (0 < r < _N and 0 < s < _N):
        raise ValueError("signature scalars out of range")
    x = r + _N if recid & 2 else r
    if x >= _P:
        raise ValueError("recid 2/3 but r+n >= p")
    rhs = (pow(x, 3, _P) + 7) % _P
    y = pow(rhs, (_P + 1) // 4, _P)
    if y * y % _P != rhs:
        raise ValueError("no square root")
    if (y & 1) != (recid & 1):
        y = _P - y
    r_inv = _mod_inv(r, _N)
    z = int.from_bytes(msg_hash, "big") % _N
    q = _point_add(
        _point_mul(-z * r_inv % _N, _G), _point_mul(s * r_inv % _N, (x, y))
    )
    if q == _INFINITY:
        raise ValueError("recovered point at infinity")
    return _encode_point(q)


def pubkey_to_address(pubkey: bytes) -> str:
    """
    Ethereum address of a public key, 65-byte (0x04-prefixed) or 64-byte raw form.

    Returns:
        "0x" plus 40 lower-case hex chars (keccak256(x || y)[12:32]).
    """
    if len(pubkey) == 65 and pubkey[0] == 0x04:
        pubkey = pubkey[1:]
    if len(pubkey) != 64:
        raise ValueError("pubkey must be 64 or 65 bytes")
    return "0x" + keccak256(pubkey)[12:].hex()


def privkey_to_address(privkey: bytes) -> str:
    """
    Ethereum address (0x + 40 hex) from 32-byte private key.

    Args:
        privkey: 32-byte secp256k1 private key.

    Returns:
        "0x" plus 40 hex chars.
    """
    return pubkey_to_address(privkey_to_pubkey(privkey))


__all__: tuple[str, ...] = (
    "privkey_to_address",
    "privkey_to_pubkey",
    "pubkey_to_address",
    "recover_pubkey",
    "sign_recoverable",
)

"""
wallet_core.crypto
------------------
Ed25519 primitives used to sign request payloads.

Private keys travel as base64 strings holding either the raw 32-byte seed or
the 64-byte seed||public-key form emitted by the gateway's key tooling.
"""

from __future__ import annotations
from typing import Tuple
import binascii
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from .errors import SigningError
from .utils import b64e, b64d

SEED_SIZE = 32
EXPANDED_KEY_SIZE = 64


# --------- Key material ----------
def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = ed25519.Ed25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()


def encode_private_key(priv_raw: bytes) -> str:
    return b64e(priv_raw)


def decode_private_key(private_key_b64: str) -> bytes:
    """Return the 32-byte seed encoded in a base64 private key string."""
    if not private_key_b64:
        raise SigningError("private key is empty")
    try:
        raw = b64d(private_key_b64)
    except (binascii.Error, ValueError) as e:
        raise SigningError("private key is not valid base64") from e

    if len(raw) == SEED_SIZE:
        return raw
    if len(raw) == EXPANDED_KEY_SIZE:
        seed, pub = raw[:SEED_SIZE], raw[SEED_SIZE:]
        derived = ed25519.Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()
        if derived != pub:
            raise SigningError("private key public half does not match its seed")
        return seed
    raise SigningError(f"private key has invalid length {len(raw)}")


def public_key_of(priv_raw: bytes) -> bytes:
    return ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw).public_key().public_bytes_raw()


# --------- Ed25519 (sign/verify) ----------
def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    try:
        sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
        return sk.sign(data)
    except ValueError as e:
        raise SigningError(f"ed25519 signing failed: {e}") from e


def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except (InvalidSignature, ValueError):
        return False

"""
wallet_core.signature
---------------------
Builds the signature block attached to every signed request envelope.

The signature is computed over the exact payload bytes that travel in the
envelope; nothing here re-serializes or canonicalizes JSON.

Two signer capabilities are available and chosen when the client is built:

- KeySigner: the caller supplies the private key in SignatureParams.
- CustodySigner: the private key is fetched from a KeyCustody provider
  for the params' creator, then signing proceeds identically.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from .constants import SIGNATURE_ALGORITHM
from .crypto import decode_private_key, ed25519_sign, ed25519_verify
from .custody import KeyCustody
from .errors import SigningError
from .logger import get_logger
from .models import SignatureParams, SignedPayload
from .utils import b64d, b64e

log = get_logger("Wallet.Signature")


def build_signature(params: Optional[SignatureParams], raw_payload: bytes) -> SignedPayload:
    if params is None:
        raise SigningError("signature params are required")
    if not params.creator:
        raise SigningError("signature creator is required")
    if not params.nonce:
        raise SigningError("signature nonce is required")
    if not isinstance(raw_payload, (bytes, bytearray)):
        raise SigningError("payload to sign must be bytes")

    seed = decode_private_key(params.private_key)
    sig = ed25519_sign(seed, bytes(raw_payload))
    return SignedPayload(
        creator=params.creator,
        nonce=params.nonce,
        signature_value=b64e(sig),
        algorithm=SIGNATURE_ALGORITHM,
    )


def verify_signature(signed: SignedPayload, raw_payload: bytes, pub_raw: bytes) -> bool:
    if signed.algorithm != SIGNATURE_ALGORITHM:
        return False
    try:
        sig = b64d(signed.signature_value)
    except ValueError:
        return False
    return ed25519_verify(pub_raw, sig, raw_payload)


# ------------------------------------------------------------------
# Signer capabilities
# ------------------------------------------------------------------
class KeySigner:
    """Signs with the key material the caller passes in."""

    def resolve(self, params: Optional[SignatureParams]) -> SignatureParams:
        if params is None:
            raise SigningError("signature params are required")
        return params


class CustodySigner:
    """Resolves the creator's private key through a custody provider."""

    def __init__(self, custody: KeyCustody):
        self.custody = custody

    def resolve(self, params: Optional[SignatureParams]) -> SignatureParams:
        if params is None:
            raise SigningError("signature params are required")
        if not params.creator:
            raise SigningError("signature creator is required")

        log.info(f"[SIGN] querying custody for {params.creator}")
        private_key = self.custody.query_private_key(params.creator, params.security_code)
        return replace(params, private_key=private_key)


class SignatureBuilder:
    def __init__(self, signer=None):
        self.signer = signer or KeySigner()

    def build(self, params: Optional[SignatureParams], raw_payload: bytes) -> SignedPayload:
        resolved = self.signer.resolve(params)
        return build_signature(resolved, raw_payload)

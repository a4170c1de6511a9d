# wallet_core/custody.py
"""
Key custody providers.

A custody provider holds private keys on behalf of wallet identities and
releases them to the signer when the caller presents the right security code.
The remote custody service is an external collaborator; this module defines the
interface the signer depends on plus an in-process provider.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Protocol
import hmac
import os

from wallet_core.errors import KeyAccessDeniedError, KeyNotFoundError
from wallet_core.logger import get_logger

log = get_logger("Wallet.Custody")


class KeyCustody(Protocol):
    def query_private_key(self, identity: str, security_code: Optional[str] = None) -> str:
        """Return base64 private key material for identity."""
        ...


@dataclass
class CustodyRecord:
    """
    Custody-side entry for one wallet identity.
    """
    identity: str
    private_key: str
    security_code: Optional[str] = None
    status: str = "trusted"   # trusted | revoked


class InMemoryKeyCustody:
    def __init__(self, records: Optional[Dict[str, CustodyRecord]] = None):
        self.records = dict(records or {})

    def upsert(self, rec: CustodyRecord):
        self.records[rec.identity] = rec

    def revoke(self, identity: str):
        rec = self.records.get(identity)
        if rec: rec.status = "revoked"

    def query_private_key(self, identity: str, security_code: Optional[str] = None) -> str:
        rec = self.records.get(identity)
        if rec is None:
            log.warning(f"[CUSTODY] no key held for {identity}")
            raise KeyNotFoundError(f"no private key held for {identity}")

        if rec.status != "trusted":
            raise KeyAccessDeniedError(f"key for {identity} is {rec.status}")

        if rec.security_code is not None:
            supplied = (security_code or "").encode("utf-8")
            if not hmac.compare_digest(supplied, rec.security_code.encode("utf-8")):
                log.warning(f"[CUSTODY] security code rejected for {identity}")
                raise KeyAccessDeniedError(f"security code rejected for {identity}")

        log.debug(f"[CUSTODY] released key for {identity}")
        return rec.private_key


def load_custody_provider(config: dict | None = None) -> Optional[KeyCustody]:
    """
    Factory resolver for the custody backend.

    For now:
        - none (default): callers hold their own keys
        - memory
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("WALLET_CUSTODY", "none")

    if provider == "none":
        return None

    if provider == "memory":
        return InMemoryKeyCustody(config.get("records"))

    raise ValueError(f"Unknown custody provider: {provider}")

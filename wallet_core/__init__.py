"""
Wallet Core Package
===================
Client primitives for the blockchain wallet gateway.

Provides:
- Ed25519 signing of request payloads (direct key or custodial lookup)
- Request envelope composition and HTTP transport adapters
- Two-stage response envelope decoding into typed results
- Multipart upload of POE attachments
- Parsing of asynchronous transaction callbacks
"""

from wallet_core.client import WalletClient
from wallet_core.config import WalletConfig, load_config
from wallet_core.constants import InvocationMode
from wallet_core.errors import (
    WalletError,
    PreconditionError,
    SigningError,
    TransportError,
    DecodeError,
    RemoteError,
    PayloadTypeError,
    LocalFileError,
)

__all__ = [
    "WalletClient",
    "WalletConfig",
    "load_config",
    "InvocationMode",
    "WalletError",
    "PreconditionError",
    "SigningError",
    "TransportError",
    "DecodeError",
    "RemoteError",
    "PayloadTypeError",
    "LocalFileError",
]

"""
wallet_core.errors
------------------
Typed failures raised by the wallet client.

Callers can tell apart:
- bad input (PreconditionError, SigningError, LocalFileError)
- infrastructure faults (TransportError, DecodeError, PayloadTypeError)
- explicit rejections by the gateway (RemoteError)
"""

from __future__ import annotations
from typing import Optional


class WalletError(Exception):
    pass


class PreconditionError(WalletError, ValueError):
    """A required argument was missing or invalid; raised before any I/O."""


class SigningError(WalletError):
    pass


class KeyNotFoundError(SigningError):
    pass


class KeyAccessDeniedError(SigningError):
    pass


class TransportError(WalletError):
    """Connection failure, timeout, or a non-OK HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(WalletError):
    pass


class RemoteError(WalletError):
    """The gateway answered with a well-formed, non-success envelope."""

    def __init__(self, code: int, message: str):
        super().__init__(f"remote error {code}: {message}")
        self.code = code
        self.message = message


class PayloadTypeError(WalletError):
    def __init__(self, observed_type: str):
        super().__init__(f"response payload type invalid: {observed_type}")
        self.observed_type = observed_type


class LocalFileError(WalletError):
    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class LocalFileNotFoundError(LocalFileError):
    pass

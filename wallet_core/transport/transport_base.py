from __future__ import annotations
from typing import Any

from wallet_core.transport.request import TransportRequest


class BaseTransport:
    """
    Transport contract for the wallet client.

    send() takes a composed TransportRequest and returns the raw HTTP response
    (a requests.Response). Status codes are not interpreted here; the response
    envelope decoder does that. Connection-level failures raise TransportError.

    Adapters are built once and reused across calls, so send() must not mutate
    adapter state per request. HTTPAdapter holds one requests.Session, which is
    not documented as thread-safe: give each thread its own adapter.
    """
    name: str = "base"

    def send(self, request: TransportRequest) -> Any:
        raise NotImplementedError

    def close(self) -> None:
        return

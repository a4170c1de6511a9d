# wallet_core/transport/transport_local.py
from typing import Callable, List, Optional
import requests
from http.client import responses
from wallet_core.errors import TransportError
from wallet_core.logger import get_logger
from wallet_core.transport.request import TransportRequest
from wallet_core.transport.transport_base import BaseTransport

log = get_logger("Wallet.Transport.Local")

Handler = Callable[[TransportRequest], requests.Response]


class LocalAdapter(BaseTransport):
    """
    In-process loopback transport.

    Requests are handed to a handler callable instead of the network, which
    makes it suitable for tests and offline tooling. Every request that
    reaches the handler is recorded in `sent`.
    """

    name = "local"

    def __init__(self, handler: Optional[Handler] = None):
        self.handler = handler
        self.sent: List[TransportRequest] = []

    def send(self, request: TransportRequest) -> requests.Response:
        if self.handler is None:
            raise TransportError("local transport has no handler registered")
        log.info(f"[LOCAL SEND] {request.method} {request.path}")
        self.sent.append(request)
        return self.handler(request)


def make_response(status: int, body: bytes, content_type: str = "application/json") -> requests.Response:
    """Build a requests.Response from raw parts, for loopback handlers."""
    res = requests.Response()
    res.status_code = status
    res._content = body
    res.headers["Content-Type"] = content_type
    res.reason = responses.get(status, "")
    res._content_consumed = True
    return res

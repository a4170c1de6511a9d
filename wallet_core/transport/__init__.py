# wallet_core/transport/__init__.py
import os
from wallet_core.transport.request import TransportRequest, compose, invoke_headers
from wallet_core.transport.transport_base import BaseTransport
from wallet_core.transport.transport_http import HTTPAdapter
from wallet_core.transport.transport_local import LocalAdapter


def transport_factory(config=None):
    """
    Select the transport adapter from config, falling back to WALLET_TRANSPORT.

      - "http"  → HTTPAdapter against the configured gateway (default)
      - "local" → LocalAdapter loopback with no handler
    """
    mode = (getattr(config, "transport", None) or os.getenv("WALLET_TRANSPORT", "http")).lower()

    if mode == "local":
        return LocalAdapter()

    if mode == "http":
        if config is None:
            return HTTPAdapter(os.getenv("WALLET_API_URL", "http://127.0.0.1:9143"))
        return HTTPAdapter(
            config.api_url,
            api_key=config.api_key,
            timeout=config.timeout,
            verify=config.verify_tls,
        )

    raise ValueError(f"Unknown transport: {mode}")


__all__ = [
    "TransportRequest",
    "compose",
    "invoke_headers",
    "BaseTransport",
    "HTTPAdapter",
    "LocalAdapter",
    "transport_factory",
]

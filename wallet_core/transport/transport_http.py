# wallet_core/transport/transport_http.py
from typing import Optional
import requests
from wallet_core.constants import HEADER_API_KEY
from wallet_core.errors import TransportError
from wallet_core.logger import get_logger
from wallet_core.transport.request import TransportRequest
from wallet_core.transport.transport_base import BaseTransport

log = get_logger("Wallet.Transport.HTTP")


class HTTPAdapter(BaseTransport):
    """
    HTTP transport adapter for the wallet gateway.

    Features:
    - One requests.Session per adapter (shared connection pool and TLS config).
      The session is not thread-safe; build one adapter per thread.
    - Adds the API-Key header when an api key is configured.
    - Timeouts and connection failures surface as TransportError.
    """

    name = "http"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        verify: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()

    def send(self, request: TransportRequest) -> requests.Response:
        url = f"{self.base_url}{request.path}"
        headers = dict(request.headers)
        if self.api_key:
            headers[HEADER_API_KEY] = self.api_key

        log.debug(f"[HTTP SEND] → {request.method} {url} | params={request.params}")
        try:
            res = self.session.request(
                request.method,
                url,
                headers=headers,
                params=request.params or None,
                data=request.data,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.Timeout as e:
            log.error(f"[HTTP SEND] timeout {request.method} {url}: {e}")
            raise TransportError(f"request to {url} timed out") from e
        except requests.RequestException as e:
            log.error(f"[HTTP SEND] {request.method} {url} failed: {e}")
            raise TransportError(f"request to {url} failed: {e}") from e

        log.info(f"[HTTP RECV] {request.method} {request.path} → {res.status_code} {res.reason}")
        return res

    def close(self) -> None:
        self.session.close()

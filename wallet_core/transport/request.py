# wallet_core/transport/request.py
"""
Request composition.

Turns a method, path, caller headers and either a request envelope or raw
bytes into a transport-ready request. Only parameter validation happens here;
Bc-Invoke-Mode and Callback-Url are carried through untouched.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from wallet_core.constants import (
    HEADER_CALLBACK_URL,
    HEADER_CONTENT_TYPE,
    HEADER_INVOKE_MODE,
    JSON_CONTENT_TYPE,
    InvocationMode,
)
from wallet_core.errors import PreconditionError
from wallet_core.models import RequestEnvelope

Headers = Dict[str, str]

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass(frozen=True)
class TransportRequest:
    method: str
    path: str
    headers: Headers = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    data: Optional[bytes] = None


def compose(
    method: str,
    path: str,
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[RequestEnvelope] = None,
    raw: Optional[bytes] = None,
    params: Optional[Mapping[str, Optional[str]]] = None,
    content_type: Optional[str] = None,
) -> TransportRequest:
    method = (method or "").upper()
    if method not in ALLOWED_METHODS:
        raise PreconditionError(f"unsupported http method: {method!r}")
    if not path or not path.startswith("/"):
        raise PreconditionError(f"request path must be absolute: {path!r}")
    if body is not None and raw is not None:
        raise PreconditionError("request takes either an envelope body or raw bytes, not both")

    out_headers: Headers = dict(headers or {})
    data = None

    if body is not None:
        if not isinstance(body, RequestEnvelope):
            raise PreconditionError("request body must be a RequestEnvelope")
        data = body.to_json_bytes()
        out_headers[HEADER_CONTENT_TYPE] = JSON_CONTENT_TYPE
    elif raw is not None:
        if not content_type:
            raise PreconditionError("raw request body requires a content type")
        data = bytes(raw)
        out_headers[HEADER_CONTENT_TYPE] = content_type

    # empty query values are left off the url
    query = {k: v for k, v in (params or {}).items() if v}

    return TransportRequest(method=method, path=path, headers=out_headers, params=query, data=data)


def invoke_headers(
    mode: InvocationMode = InvocationMode.ASYNC,
    callback_url: Optional[str] = None,
) -> Headers:
    """Caller-side helper for the invocation mode and callback headers."""
    headers: Headers = {}
    if InvocationMode(mode) is InvocationMode.SYNC:
        if callback_url:
            raise PreconditionError("callback url only applies to async invocation")
        headers[HEADER_INVOKE_MODE] = InvocationMode.SYNC.value
    elif callback_url:
        headers[HEADER_CALLBACK_URL] = callback_url
    return headers

"""
wallet_core.envelope
--------------------
Request envelope construction and two-stage response envelope decoding.

Outbound, the payload is serialized once; those exact bytes are signed and the
same string is carried in the envelope.

Inbound, every gateway response is an envelope
``{"err_code": int, "err_message": str, "payload": "<json string>"}``.
The envelope is decoded first; only on the success code is the inner payload
string parsed, independently, into the type the call site asked for.
"""

from __future__ import annotations
from typing import Any, Optional, Tuple
import json

from .constants import HTTP_OK, SUCCESS_CODE
from .errors import DecodeError, PayloadTypeError, PreconditionError, RemoteError, TransportError
from .logger import get_logger
from .models import RequestEnvelope, ResponseEnvelope, SignedPayload
from .utils import compact_json, type_name

log = get_logger("Wallet.Envelope")


# ------------------------------------------------------------------
# Outbound
# ------------------------------------------------------------------
def serialize_payload(body: Any) -> bytes:
    """Serialize a request payload model (or plain mapping) to the bytes that get signed."""
    if hasattr(body, "to_dict"):
        body = body.to_dict()
    try:
        return compact_json(body)
    except (TypeError, ValueError) as e:
        raise PreconditionError(f"request payload is not JSON serializable: {e}") from e


def wrap_payload(raw_payload: bytes, signature: Optional[SignedPayload]) -> RequestEnvelope:
    return RequestEnvelope(payload=raw_payload.decode("utf-8"), signature=signature)


# ------------------------------------------------------------------
# Inbound
# ------------------------------------------------------------------
def _read_envelope(response) -> ResponseEnvelope:
    status = response.status_code
    body = response.content or b""

    if status != HTTP_OK:
        text = body.decode("utf-8", errors="replace")
        log.error(f"[DECODE] unexpected http status {status}: {text[:200]}")
        raise TransportError(f"unexpected http status {status}", status_code=status, body=text)

    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"response envelope is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"response envelope must be an object, got {type_name(data)}")

    code = data.get("err_code")
    if not isinstance(code, int) or isinstance(code, bool):
        raise DecodeError(f"response envelope err_code invalid: {type_name(code)}")

    return ResponseEnvelope.from_dict(data)


def unwrap_payload(envelope: ResponseEnvelope, target=None) -> Any:
    if envelope.err_code != SUCCESS_CODE:
        log.warning(f"[DECODE] remote rejected call: {envelope.err_code} {envelope.err_message}")
        raise RemoteError(envelope.err_code, envelope.err_message)

    payload = envelope.payload
    if payload is None:
        return None
    if not isinstance(payload, str):
        raise PayloadTypeError(type_name(payload))

    try:
        value = json.loads(payload)
    except ValueError as e:
        raise DecodeError(f"response payload is not valid JSON: {e}") from e

    if target is None or value is None:
        return value
    if not isinstance(value, dict):
        raise DecodeError(f"response payload must be an object for {target.__name__}, got {type_name(value)}")
    try:
        return target.from_dict(value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"response payload does not match {target.__name__}: {e!r}") from e


def decode_response(response, target=None) -> Any:
    """
    Decode a raw HTTP response into ``target`` (a model class with
    ``from_dict``), or into plain JSON values when no target is given.

    Raises TransportError, DecodeError, RemoteError or PayloadTypeError.
    The response is closed on every path.
    """
    try:
        envelope = _read_envelope(response)
        return unwrap_payload(envelope, target)
    finally:
        response.close()


def encode_success(result: Any = None) -> bytes:
    """Build a success response envelope body; used by loopback handlers and tests."""
    payload = None
    if result is not None:
        inner = result.to_dict() if hasattr(result, "to_dict") else result
        payload = json.dumps(inner)
    return json.dumps({"err_code": SUCCESS_CODE, "err_message": "", "payload": payload}).encode("utf-8")


def encode_error(code: int, message: str) -> bytes:
    return json.dumps({"err_code": code, "err_message": message}).encode("utf-8")


def split_envelope(data: bytes) -> Tuple[str, Optional[SignedPayload]]:
    """Inverse of RequestEnvelope.to_json_bytes: returns (payload string, signature)."""
    try:
        raw = json.loads(data.decode("utf-8"))
        sig = raw.get("signature")
        return raw["payload"], SignedPayload.from_dict(sig) if sig else None
    except (UnicodeDecodeError, ValueError, KeyError, AttributeError) as e:
        raise DecodeError(f"request envelope malformed: {e!r}") from e

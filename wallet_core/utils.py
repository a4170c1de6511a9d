"""
wallet_core.utils
-----------------
Lightweight helpers for base64, compact JSON and error messages.
The compact serializer produces the exact bytes that are both signed and sent.
"""

from __future__ import annotations
import base64, json
from typing import Any


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"), validate=True)


def compact_json(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__

# wallet_core/callback.py
"""
Receiving side of asynchronous transaction confirmations.

When a call is made in async mode with a Callback-Url header, the gateway
later POSTs a TransactionEvent to that URL. Delivery is at-least-once: any
response other than 200 makes the sender redeliver, and a successful delivery
may still arrive more than once. Deduplicating by transaction_id is left to
the handler.

CallbackReceiver is framework-neutral: feed it the raw request body from any
web framework and return the (status, body) it produces.
"""

from __future__ import annotations
from typing import Callable, Dict, Tuple
import json

from .logger import get_logger
from .models import TransactionEvent

log = get_logger("Wallet.Callback")

ACK_STATUS = 200


def parse_event(body: bytes) -> TransactionEvent:
    data = json.loads(body.decode("utf-8"))
    if not isinstance(data, dict):
        raise ValueError("callback body must be a JSON object")
    return TransactionEvent.from_dict(data)


class CallbackReceiver:
    def __init__(self, handler: Callable[[TransactionEvent], None]):
        self.handler = handler

    def handle(self, body: bytes) -> Tuple[int, Dict[str, str]]:
        try:
            event = parse_event(body)
        except (UnicodeDecodeError, ValueError, KeyError, TypeError) as e:
            log.error(f"[CALLBACK] malformed event: {e!r}")
            return 400, {"error": "malformed transaction event"}

        log.info(f"[CALLBACK] tx={event.transaction_id} block={event.block_number} invalid={event.is_invalid}")
        try:
            self.handler(event)
        except Exception:
            # non-200 makes the gateway redeliver
            log.exception(f"[CALLBACK] handler failed for tx={event.transaction_id}")
            return 500, {"error": "handler failed"}

        return ACK_STATUS, {"status": "ok"}

# wallet_core/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import os

DEFAULT_API_URL = "http://127.0.0.1:9143"


@dataclass(frozen=True)
class WalletConfig:
    api_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    timeout: Optional[float] = 30.0
    verify_tls: bool = True
    transport: str = "http"      # http | local
    custody: str = "none"        # none | memory
    log_level: str = "INFO"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(overrides: dict | None = None) -> WalletConfig:
    """
    Resolve client configuration.

    Each setting comes from `overrides` first, then the environment, then the
    default:
        api_url     WALLET_API_URL
        api_key     WALLET_API_KEY
        timeout     WALLET_TIMEOUT      (seconds, 0 disables)
        verify_tls  WALLET_VERIFY_TLS
        transport   WALLET_TRANSPORT
        custody     WALLET_CUSTODY
        log_level   WALLET_LOG_LEVEL
    """
    overrides = overrides or {}

    def pick(key: str, env: str, default):
        if overrides.get(key) is not None:
            return overrides[key]
        return os.getenv(env, default)

    timeout = pick("timeout", "WALLET_TIMEOUT", "30")
    timeout = float(timeout) if timeout not in (None, "") else None
    verify = pick("verify_tls", "WALLET_VERIFY_TLS", "1")

    return WalletConfig(
        api_url=pick("api_url", "WALLET_API_URL", DEFAULT_API_URL),
        api_key=pick("api_key", "WALLET_API_KEY", None) or None,
        timeout=timeout or None,
        verify_tls=verify if isinstance(verify, bool) else _flag(str(verify)),
        transport=str(pick("transport", "WALLET_TRANSPORT", "http")).lower(),
        custody=str(pick("custody", "WALLET_CUSTODY", "none")).lower(),
        log_level=str(pick("log_level", "WALLET_LOG_LEVEL", "INFO")).upper(),
    )

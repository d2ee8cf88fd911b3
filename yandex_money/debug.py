"""
Opt-in diagnostic output for HTTP traffic.

Enabled by ``YANDEX_MONEY_DEBUG=1`` or ``set_debug(True)`` (the CLI's
``--debug``). Lines go to stderr so command output on stdout stays valid
JSON. Wallet tokens, one-time codes and card codes are masked before they
are printed.
"""

from __future__ import annotations
import json
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

PREFIX = "[YandexMoney]"
_FALSY = ("", "0", "false", "no", "off")

_enabled = os.getenv("YANDEX_MONEY_DEBUG", "0").strip().lower() not in _FALSY
_max_chars = int(os.getenv("YANDEX_MONEY_DEBUG_MAX_JSON", "20000"))

# lowercase names; headers and form fields share one namespace
SECRET_KEYS = frozenset({"authorization", "cookie", "code", "client_secret", "csc", "access_token"})


def is_enabled() -> bool:
    return _enabled


def set_debug(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


# ----------------------------- masking -----------------------------

def mask_value(val: Optional[str]) -> Optional[str]:
    """Keep a short hint of a secret: ``4100...WXYZ``. Short values vanish."""
    if val is None:
        return None
    if len(val) <= 10:
        return "***"
    return f"{val[:4]}...{val[-4:]}"


def redact_auth(value: Optional[str]) -> Optional[str]:
    scheme, _, credential = (value or "").strip().partition(" ")
    if not credential or scheme.lower() != "bearer":
        return value
    return f"Bearer {mask_value(credential.strip())}"


def _scrub(items: Iterable, secret_keys=SECRET_KEYS) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in items:
        lk = key.lower()
        if lk == "authorization":
            out[key] = redact_auth(value)
        elif lk in secret_keys:
            out[key] = "***"
        else:
            out[key] = value
    return out


def scrub_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return _scrub((headers or {}).items())


def scrub_params(params: Mapping[str, str]) -> Dict[str, str]:
    return _scrub((params or {}).items())


# ----------------------------- output -----------------------------

def _emit(*parts: Any) -> None:
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    print(PREFIX, stamp, *parts, file=sys.stderr, flush=True)


def dprint(*args: Any) -> None:
    if _enabled:
        _emit(*args)


def djson(label: str, data: Any) -> None:
    if not _enabled:
        return
    try:
        text = json.dumps(data, ensure_ascii=False, indent=2, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    if len(text) > _max_chars:
        text = f"{text[:_max_chars]}... ({len(text) - _max_chars} chars truncated)"
    _emit(f"{label}:", text)


__all__ = [
    "is_enabled",
    "set_debug",
    "mask_value",
    "redact_auth",
    "scrub_headers",
    "scrub_params",
    "dprint",
    "djson",
]

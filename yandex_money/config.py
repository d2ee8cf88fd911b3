from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional

from .debug import mask_value
from .errors import YandexMoneyConfigError


DEFAULT_BASE_URL = "https://money.yandex.ru"
DEFAULT_TIMEOUT = 30.0

# field -> environment variable
CREDENTIAL_ENV = {
    "token": "TOKEN",
    "client_id": "CLIENT_ID",
    "redirect_uri": "CLIENT_REDIRECT",
    "client_secret": "CLIENT_SECRET",
}


# ----------------------------- helpers -----------------------------

def _parse_bool(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def _normalize_base_url(url: Optional[str]) -> str:
    url = (url or "").strip()
    # endpoints are joined as "{base_url}/{endpoint}"
    return url.rstrip("/") if url else DEFAULT_BASE_URL


def _from_env(name: str, parse: Callable[[str], object], default):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw)
    except ValueError:
        return default


def _dprint(enabled: bool, *args) -> None:
    if enabled:
        print("[YandexMoney][Config]", *args, file=sys.stderr)


# ----------------------------- config -----------------------------

@dataclass
class YandexMoneyConfig:
    """
    Configuration with precedence:
      explicit kwargs > environment (.env) > defaults

    Authorized calls need ``token``; the OAuth flow needs ``client_id`` and
    ``redirect_uri`` instead.
    """

    # Credentials
    token: Optional[str] = None
    client_id: Optional[str] = None
    redirect_uri: Optional[str] = None
    client_secret: Optional[str] = None

    # Routing / network
    base_url: Optional[str] = None
    timeout: Optional[float] = None

    # Diagnostics
    debug: Optional[bool] = None

    # where each field came from (arg/env/default), for debug output
    _source: Dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for name, var in CREDENTIAL_ENV.items():
            if getattr(self, name):
                self._source[name] = "arg"
            else:
                setattr(self, name, os.environ.get(var) or None)
                self._source[name] = "env"

        if self.base_url:
            self._source["base_url"] = "arg"
        else:
            self.base_url = os.environ.get("YANDEX_MONEY_BASE_URL")
            self._source["base_url"] = "env/default"
        self.base_url = _normalize_base_url(self.base_url)

        if self.timeout is not None:
            self.timeout = float(self.timeout)
            self._source["timeout"] = "arg"
        else:
            self.timeout = _from_env("YANDEX_MONEY_TIMEOUT", float, DEFAULT_TIMEOUT)
            self._source["timeout"] = "env/default"

        if self.debug is not None:
            self.debug = bool(self.debug)
            self._source["debug"] = "arg"
        else:
            self.debug = _from_env("YANDEX_MONEY_DEBUG", _parse_bool, False)
            self._source["debug"] = "env/default"

        _dprint(self.debug, "Loaded config:", {**self.masked(), "source": self._source})

    # -------- validation & utils --------
    def validate(self) -> "YandexMoneyConfig":
        """Ensure a bearer token is present for authorized API calls."""
        if not self.token:
            _dprint(self.debug, "Validation failed: token missing")
            raise YandexMoneyConfigError("TOKEN is required for authorized API calls.")
        return self

    def require_client(self) -> "YandexMoneyConfig":
        """Ensure the OAuth application credentials are present."""
        missing = [
            CREDENTIAL_ENV[name]
            for name in ("client_id", "redirect_uri")
            if not getattr(self, name)
        ]
        if missing:
            raise YandexMoneyConfigError(f"{' and '.join(missing)} required for authorization.")
        return self

    def masked(self) -> dict:
        """Sanitized view for logs."""
        return {
            "token": mask_value(self.token) if self.token else "(empty)",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "client_secret": "***" if self.client_secret else "(empty)",
            "base_url": self.base_url,
            "timeout": self.timeout,
            "debug": self.debug,
        }

    def copy_with(
        self,
        *,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: Optional[bool] = None,
    ) -> "YandexMoneyConfig":
        """Modified copy; arguments left as ``None`` keep the current value."""
        return replace(
            self,
            token=token or self.token,
            base_url=base_url or self.base_url,
            timeout=self.timeout if timeout is None else timeout,
            debug=self.debug if debug is None else debug,
        )

    # -------- alt constructors --------
    @classmethod
    def from_env(cls) -> "YandexMoneyConfig":
        """Config from the environment alone, validated for authorized calls."""
        return cls().validate()


__all__ = ["YandexMoneyConfig", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT"]

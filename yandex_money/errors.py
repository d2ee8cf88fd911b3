from __future__ import annotations
from typing import Any, Dict, Optional

from .debug import dprint


class YandexMoneySDKError(Exception):
    """Base exception for all Yandex.Money SDK errors."""
    pass


class YandexMoneyConfigError(YandexMoneySDKError):
    """Raised when configuration/credentials are invalid or missing."""
    pass


class YandexMoneyHTTPError(YandexMoneySDKError):
    """
    Transport-level failure.

    Attributes
    ----------
    status : int
        HTTP status code, or -1 when no response was received at all.
    body : str
        Raw response body (or the underlying network error text).
    endpoint : Optional[str]
        Endpoint path the request was sent to, e.g. ``api/account-info``.
    """

    def __init__(self, status: int, body: str, endpoint: Optional[str] = None):
        self.status = int(status)
        self.body = body
        self.endpoint = endpoint
        dprint("YandexMoneyHTTPError", {"status": self.status, "endpoint": self.endpoint})
        super().__init__(self._message())

    @property
    def is_network_error(self) -> bool:
        """True when the request never produced an HTTP response."""
        return self.status == -1

    def _message(self) -> str:
        where = f" {self.endpoint}" if self.endpoint else ""
        body = (self.body or "").strip()
        if len(body) > 240:
            body = body[:237] + "..."
        if self.is_network_error:
            return f"Network error{where}: {body}"
        return f"HTTP {self.status}{where}: {body}"

    def __repr__(self) -> str:
        return f"YandexMoneyHTTPError(status={self.status}, endpoint={self.endpoint!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "endpoint": self.endpoint, "body": self.body}


class YandexMoneyParseError(YandexMoneySDKError):
    """Response body is not JSON or does not have the expected shape."""

    def __init__(self, message: str, *, endpoint: Optional[str] = None, body: Optional[str] = None):
        self.endpoint = endpoint
        self.body = body
        where = f" from {endpoint}" if endpoint else ""
        super().__init__(f"Cannot parse response{where}: {message}")


class YandexMoneyAPIError(YandexMoneySDKError):
    """The API answered with a well-formed ``{"error": "..."}`` body."""

    def __init__(self, description: str, *, endpoint: Optional[str] = None):
        self.description = description
        self.endpoint = endpoint
        where = f" {endpoint}" if endpoint else ""
        super().__init__(f"Request rejected{where}: {description}")

    def __repr__(self) -> str:
        return f"YandexMoneyAPIError(description={self.description!r}, endpoint={self.endpoint!r})"


class AuthorizationCallbackError(YandexMoneySDKError):
    """
    The caller-supplied authorization callback failed.

    The underlying exception is available as ``__cause__``.
    """

    def __init__(self, message: str):
        super().__init__(f"Authorization callback failed: {message}")


__all__ = [
    "YandexMoneySDKError",
    "YandexMoneyConfigError",
    "YandexMoneyHTTPError",
    "YandexMoneyParseError",
    "YandexMoneyAPIError",
    "AuthorizationCallbackError",
]

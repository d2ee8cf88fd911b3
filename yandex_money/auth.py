"""
Yandex.Money OAuth
~~~~~~~~~~~~~~~~~~

Three-legged authorization of an application:

1. POST ``oauth/authorize``; the API answers with a redirect to the page
   where the user grants access.
2. A caller-supplied callback takes that address and returns the one-time
   code (typically by sending a human to the page and reading the code off
   the URL they get redirected to).
3. The code is exchanged at ``oauth/token`` for a permanent access token.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Dict, Iterable, Optional, Union

import httpx

from .client import YandexMoneyClient
from .config import YandexMoneyConfig
from .errors import AuthorizationCallbackError
from .models import AccessScope, TokenExchange, join_ordered
from .utils import uuid_str

logger = logging.getLogger(__name__)

AUTHORIZE_ENDPOINT = "oauth/authorize"
TOKEN_ENDPOINT = "oauth/token"

AuthorizeCallback = Callable[[str], Union[str, Awaitable[str]]]


def serialize_scope(access_scope: Iterable[AccessScope | str]) -> str:
    """
    Space-separated scope list. Members are emitted in ``AccessScope``
    declaration order so the same set always yields the same string.
    """
    return join_ordered(access_scope, AccessScope)


def build_authorize_params(
    client_id: str,
    redirect_uri: str,
    access_scope: Iterable[AccessScope | str],
    *,
    instance_name: Optional[str] = None,
) -> Dict[str, str]:
    return {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": serialize_scope(access_scope),
        "instance_name": instance_name or uuid_str(),
    }


def extract_code(redirect_url: str) -> str:
    """
    Pull the ``code`` query parameter out of the URL the user was redirected to.

    Raises
    ------
    ValueError
        If the URL is malformed or has no ``code``.
    """
    try:
        url = httpx.URL(redirect_url.strip())
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid redirect URL: {e}") from e
    code = url.params.get("code")
    if not code:
        raise ValueError("Authorization code not found in redirect URL")
    return code


class UnauthorizedClient:
    """
    Client for the OAuth endpoints. Never sends a bearer token.

    Usage::

        async with UnauthorizedClient(YandexMoneyConfig(client_id=..., redirect_uri=...)) as c:
            token = await c.authorize({AccessScope.ACCOUNT_INFO}, callback)
    """

    def __init__(
        self,
        config: Optional[YandexMoneyConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = (config or YandexMoneyConfig()).require_client()
        self.client = YandexMoneyClient(self.config, transport=transport, anonymous=True)

    async def __aenter__(self) -> "UnauthorizedClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def authorize(
        self,
        access_scope: Iterable[AccessScope | str],
        authorize_callback: AuthorizeCallback,
    ) -> str:
        """
        Run the whole flow and return the permanent access token.

        ``authorize_callback`` receives the authorization page address and
        returns the one-time code; it may be a plain or an async function.
        Anything it raises is re-raised as ``AuthorizationCallbackError``
        and the token exchange is skipped.
        """
        access_scope = set(access_scope)
        if not access_scope:
            raise ValueError("at least one access scope is required")

        redirect_addr = await self.client.get_redirect(
            AUTHORIZE_ENDPOINT,
            build_authorize_params(self.config.client_id, self.config.redirect_uri, access_scope),
        )
        logger.info("Authorization page: %s", redirect_addr)

        try:
            code = authorize_callback(redirect_addr)
            if inspect.isawaitable(code):
                code = await code
        except Exception as e:
            raise AuthorizationCallbackError(str(e) or type(e).__name__) from e
        if not code:
            raise AuthorizationCallbackError("callback returned no authorization code")

        return await self.exchange_code(code)

    async def exchange_code(self, code: str) -> str:
        """Trade a one-time authorization code for a permanent token."""
        params = {
            "code": code,
            "client_id": self.config.client_id,
            "grant_type": "authorization_code",
            "redirect_uri": self.config.redirect_uri,
        }
        if self.config.client_secret:
            params["client_secret"] = self.config.client_secret
        token = await self.client.call_model(TOKEN_ENDPOINT, params, TokenExchange)
        logger.info("Authorization code exchanged for a permanent token")
        return token.access_token


__all__ = [
    "AuthorizeCallback",
    "UnauthorizedClient",
    "build_authorize_params",
    "extract_code",
    "serialize_scope",
]

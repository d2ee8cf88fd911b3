from __future__ import annotations

from ..client import YandexMoneyClient
from ..debug import dprint

REVOKE_ENDPOINT = "api/revoke"


class TokensAPI:
    """
    Access token management.

    Once revoked, the token is rejected by every endpoint, ``api/revoke``
    included (HTTP 401), so a second revoke raises ``YandexMoneyHTTPError``.
    """

    def __init__(self, client: YandexMoneyClient):
        self.client = client

    async def revoke(self) -> None:
        dprint("tokens.revoke()")
        await self.client.call_empty(REVOKE_ENDPOINT, {})

from __future__ import annotations

from ..client import YandexMoneyClient
from ..debug import dprint
from ..models import AccountInfo

ACCOUNT_INFO_ENDPOINT = "api/account-info"


class AccountAPI:
    """Wallet status (requires the ``account-info`` scope)."""

    def __init__(self, client: YandexMoneyClient):
        self.client = client

    async def info(self) -> AccountInfo:
        dprint("account.info()")
        return await self.client.call_model(ACCOUNT_INFO_ENDPOINT, {}, AccountInfo)

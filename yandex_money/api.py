"""
High-level entry point: one method per remote operation.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator, Iterable, Mapping, Optional

import httpx

from .client import YandexMoneyClient
from .config import YandexMoneyConfig
from .models import (
    AccountInfo,
    MoneySource,
    Operation,
    OperationDetails,
    OperationType,
    Phone,
    ProcessPaymentResponse,
    RequestAmount,
    UserId,
)
from .resources import AccountAPI, OperationsAPI, PaymentRequest, PaymentsAPI, TokensAPI


class Client:
    """
    Authorized Yandex.Money client.

    ``token`` defaults to the ``TOKEN`` environment variable. Use as an async
    context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        config: Optional[YandexMoneyConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = config or YandexMoneyConfig()
        if token is not None:
            config = config.copy_with(token=token)
        self.config = config.validate()
        self.client = YandexMoneyClient(self.config, transport=transport)
        self.account = AccountAPI(self.client)
        self.operations = OperationsAPI(self.client)
        self.payments = PaymentsAPI(self.client)
        self.tokens = TokensAPI(self.client)

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ----------------------- account & history -----------------------

    async def account_info(self) -> AccountInfo:
        return await self.account.info()

    def operation_history(
        self,
        types: Iterable[OperationType | str] = (),
        label: Optional[str] = None,
        from_: Optional[datetime] = None,
        till: Optional[datetime] = None,
        start_record: int = 0,
        details: bool = False,
        records: Optional[int] = None,
    ) -> AsyncIterator[Operation]:
        return self.operations.history(
            types=types,
            label=label,
            from_=from_,
            till=till,
            start_record=start_record,
            details=details,
            records=records,
        )

    async def operation_details(self, operation_id: str) -> OperationDetails:
        return await self.operations.details(operation_id)

    # ----------------------- payments -----------------------

    def request_shop_payment(self, pattern_id: str, other: Optional[Mapping[str, str]] = None) -> PaymentRequest:
        return self.payments.request_shop(pattern_id, other)

    def request_transfer(
        self,
        to: UserId,
        amount: RequestAmount,
        comment: Optional[str] = None,
        message: Optional[str] = None,
        label: Optional[str] = None,
        codepro: Optional[bool] = None,
        hold_for_pickup: Optional[bool] = None,
        expire_period: Optional[int] = None,
    ) -> PaymentRequest:
        return self.payments.request_transfer(
            to,
            amount,
            comment=comment,
            message=message,
            label=label,
            codepro=codepro,
            hold_for_pickup=hold_for_pickup,
            expire_period=expire_period,
        )

    def request_mobile_payment(self, phone_number: Phone, amount: Decimal | str | int) -> PaymentRequest:
        return self.payments.request_mobile(phone_number, amount)

    async def process_payment(self, request_id: str, money_source: MoneySource) -> ProcessPaymentResponse:
        return await self.payments.process(request_id, money_source)

    # ----------------------- token -----------------------

    async def revoke_token(self) -> None:
        await self.tokens.revoke()


__all__ = ["Client"]

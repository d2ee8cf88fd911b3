from __future__ import annotations
from decimal import Decimal
from typing import Dict, Mapping, Optional

from ..client import YandexMoneyClient
from ..debug import dprint, djson, scrub_params
from ..errors import YandexMoneySDKError
from ..models import (
    Phone,
    MoneySource,
    ProcessPaymentResponse,
    RequestAmount,
    RequestPaymentResponse,
    UserId,
)
from ..utils import form_params, format_amount, positive_amount

REQUEST_PAYMENT_ENDPOINT = "api/request-payment"
PROCESS_PAYMENT_ENDPOINT = "api/process-payment"

P2P_PATTERN = "p2p"
PHONE_TOPUP_PATTERN = "phone-topup"


def _validate_id(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required and must be a non-empty string.")


class PaymentRequest:
    """
    Unsent ``api/request-payment`` call.

    Built by ``PaymentsAPI.request_*``; ``params`` may still be adjusted
    before ``send()``, which can be awaited only once.
    """

    def __init__(self, client: YandexMoneyClient, params: Mapping[str, str]):
        self.client = client
        self.params: Dict[str, str] = dict(params)
        self._sent = False

    async def send(self) -> RequestPaymentResponse:
        if self._sent:
            raise YandexMoneySDKError("payment request has already been sent")
        self._sent = True
        djson("payments.send params", scrub_params(self.params))
        return await self.client.call_model(
            REQUEST_PAYMENT_ENDPOINT, self.params, RequestPaymentResponse
        )

    def __repr__(self) -> str:
        return f"PaymentRequest(params={scrub_params(self.params)!r}, sent={self._sent})"


class TestPaymentRequest:
    """
    Dry-run wrapper: the API validates the request but moves no money.

    ``test_result`` asks the API to simulate a specific outcome (an error
    code such as ``not_enough_funds``); by default it reports success.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, inner: PaymentRequest, *, test_result: Optional[str] = None):
        self.inner = inner
        self.test_result = test_result

    @property
    def params(self) -> Dict[str, str]:
        return self.inner.params

    async def send(self) -> RequestPaymentResponse:
        self.inner.params["test_payment"] = "true"
        if self.test_result:
            self.inner.params["test_result"] = self.test_result
        return await self.inner.send()


class PaymentsAPI:
    """
    Payment requests and their processing.

    Constructors only build parameters; the network is touched by
    ``PaymentRequest.send()`` and ``process()``.
    """

    def __init__(self, client: YandexMoneyClient):
        self.client = client

    # ----------------------- request constructors -----------------------

    def request_shop(self, pattern_id: str, other: Optional[Mapping[str, str]] = None) -> PaymentRequest:
        """Payment to a shop; ``other`` holds the shop pattern's own fields."""
        _validate_id("pattern_id", pattern_id)
        params = {"pattern_id": pattern_id}
        for k, v in (other or {}).items():
            params[str(k)] = str(v)
        dprint("payments.request_shop()", {"pattern_id": pattern_id, "fields": sorted(params)})
        return PaymentRequest(self.client, params)

    def request_transfer(
        self,
        to: UserId,
        amount: RequestAmount,
        *,
        comment: Optional[str] = None,
        message: Optional[str] = None,
        label: Optional[str] = None,
        codepro: Optional[bool] = None,
        hold_for_pickup: Optional[bool] = None,
        expire_period: Optional[int] = None,
    ) -> PaymentRequest:
        """
        Peer-to-peer transfer.

        ``amount`` is ``Total`` (recipient gets exactly this) or ``Net``
        (sender pays exactly this). Optional fields are sent only when given.
        """
        if expire_period is not None and expire_period < 1:
            raise ValueError("expire_period must be a positive number of days")

        params = form_params({
            "pattern_id": P2P_PATTERN,
            "to": str(to),
            amount.param_name: str(amount),
            "comment": comment,
            "message": message,
            "label": label,
            "codepro": codepro,
            "hold_for_pickup": hold_for_pickup,
            "expire_period": expire_period,
        })
        dprint("payments.request_transfer()", {"to_kind": type(to).__name__, "amount_kind": type(amount).__name__})
        return PaymentRequest(self.client, params)

    def request_mobile(self, phone_number: Phone, amount: Decimal | str | int) -> PaymentRequest:
        """Mobile phone top-up."""
        params = {
            "pattern_id": PHONE_TOPUP_PATTERN,
            "phone-number": str(phone_number),
            "amount": format_amount(positive_amount(amount)),
        }
        dprint("payments.request_mobile()")
        return PaymentRequest(self.client, params)

    # ----------------------- processing -----------------------

    async def process(self, request_id: str, money_source: MoneySource) -> ProcessPaymentResponse:
        """Confirm a request created by ``PaymentRequest.send()``."""
        _validate_id("request_id", request_id)
        params = {"request_id": request_id, **money_source.to_params()}
        djson("payments.process params", scrub_params(params))
        return await self.client.call_model(PROCESS_PAYMENT_ENDPOINT, params, ProcessPaymentResponse)

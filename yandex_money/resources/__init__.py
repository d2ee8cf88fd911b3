from __future__ import annotations

"""
Resource APIs for the Yandex.Money SDK.

Public exports:

- AccountAPI
- OperationsAPI
- PaymentsAPI (+ PaymentRequest, TestPaymentRequest)
- TokensAPI
"""

from .account import AccountAPI
from .operations import OperationsAPI
from .payments import PaymentsAPI, PaymentRequest, TestPaymentRequest
from .tokens import TokensAPI

__all__ = (
    "AccountAPI",
    "OperationsAPI",
    "PaymentsAPI",
    "PaymentRequest",
    "TestPaymentRequest",
    "TokensAPI",
)

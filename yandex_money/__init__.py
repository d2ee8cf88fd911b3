"""
Yandex.Money Python SDK

Async client for the Yandex.Money wallet API:
- Account info
- Operation history (paged, lazy) and operation details
- Payment requests (shop, peer-to-peer, mobile top-up) and their processing
- OAuth authorization and token revocation
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------
__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Public API re-exports
# ---------------------------------------------------------------------------
from .config import YandexMoneyConfig
from .client import YandexMoneyClient
from .api import Client
from .auth import UnauthorizedClient, extract_code
from .errors import (
    YandexMoneySDKError,
    YandexMoneyConfigError,
    YandexMoneyHTTPError,
    YandexMoneyParseError,
    YandexMoneyAPIError,
    AuthorizationCallbackError,
)
from .models import (
    AccessScope,
    OperationType,
    AccountId,
    Email,
    Phone,
    UserId,
    Net,
    Total,
    RequestAmount,
    Wallet,
    Card,
    Secure3D,
    MoneySource,
    AccountInfo,
    Operation,
    OperationDetails,
    RequestPaymentResponse,
    ProcessPaymentResponse,
)
from .resources import (
    AccountAPI,
    OperationsAPI,
    PaymentsAPI,
    PaymentRequest,
    TestPaymentRequest,
    TokensAPI,
)
from .debug import dprint, djson, is_enabled as debug_enabled, set_debug as set_debug_enabled

__all__ = (
    "__version__",
    # core
    "YandexMoneyConfig",
    "YandexMoneyClient",
    "Client",
    "UnauthorizedClient",
    "extract_code",
    # errors
    "YandexMoneySDKError",
    "YandexMoneyConfigError",
    "YandexMoneyHTTPError",
    "YandexMoneyParseError",
    "YandexMoneyAPIError",
    "AuthorizationCallbackError",
    # request types
    "AccessScope",
    "OperationType",
    "AccountId",
    "Email",
    "Phone",
    "UserId",
    "Net",
    "Total",
    "RequestAmount",
    "Wallet",
    "Card",
    "Secure3D",
    "MoneySource",
    # response models
    "AccountInfo",
    "Operation",
    "OperationDetails",
    "RequestPaymentResponse",
    "ProcessPaymentResponse",
    # resources
    "AccountAPI",
    "OperationsAPI",
    "PaymentsAPI",
    "PaymentRequest",
    "TestPaymentRequest",
    "TokensAPI",
    # debug controls
    "dprint",
    "djson",
    "debug_enabled",
    "set_debug_enabled",
)

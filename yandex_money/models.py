from __future__ import annotations
import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

import phonenumbers
from pydantic import BaseModel, ConfigDict, Field

from .utils import format_amount, positive_amount


# =============================================================================
# Enumerations
# =============================================================================
class AccessScope(str, Enum):
    """
    OAuth permissions an application may ask for.

    Declaration order is the order used when the scope set is serialized.
    """
    ACCOUNT_INFO = "account-info"
    OPERATION_HISTORY = "operation-history"
    OPERATION_DETAILS = "operation-details"
    INCOMING_TRANSFERS = "incoming-transfers"
    PAYMENT = "payment"
    PAYMENT_SHOP = "payment-shop"
    PAYMENT_P2P = "payment-p2p"
    MONEY_SOURCE = "money-source"


class OperationType(str, Enum):
    """Operation history filter values."""
    DEPOSITION = "deposition"
    PAYMENT = "payment"


def join_ordered(values, enum_cls) -> str:
    """Space-join a set of enum members in declaration order."""
    wanted = {enum_cls(v) for v in values}
    return " ".join(m.value for m in enum_cls if m in wanted)


# =============================================================================
# Transfer recipient (exactly one of account / email / phone)
# =============================================================================
@dataclass(frozen=True)
class AccountId:
    account: int

    def __str__(self) -> str:
        return str(int(self.account))


@dataclass(frozen=True)
class Email:
    email: str

    def __str__(self) -> str:
        return self.email


@dataclass(frozen=True)
class Phone:
    number: phonenumbers.PhoneNumber

    @classmethod
    def parse(cls, value: str, region: Optional[str] = None) -> "Phone":
        """
        Parse a phone number. Without ``region`` the number must be written
        in international form (``+7...``).
        """
        try:
            number = phonenumbers.parse(value, region)
        except phonenumbers.NumberParseException as e:
            raise ValueError(f"Invalid phone number {value!r}: {e}") from e
        if not phonenumbers.is_possible_number(number):
            raise ValueError(f"Invalid phone number {value!r}")
        return cls(number)

    def __str__(self) -> str:
        return phonenumbers.format_number(self.number, phonenumbers.PhoneNumberFormat.E164)


UserId = Union[AccountId, Email, Phone]


# =============================================================================
# Requested amount
# =============================================================================
@dataclass(frozen=True)
class Net:
    """Amount deducted from the sender; the recipient gets less (after fees)."""
    value: Decimal
    param_name = "amount_due"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", positive_amount(self.value))

    def __str__(self) -> str:
        return format_amount(self.value)


@dataclass(frozen=True)
class Total:
    """Amount the recipient receives; the sender pays fees on top."""
    value: Decimal
    param_name = "amount"

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", positive_amount(self.value))

    def __str__(self) -> str:
        return format_amount(self.value)


RequestAmount = Union[Net, Total]


# =============================================================================
# Money source for process-payment
# =============================================================================
@dataclass(frozen=True)
class Secure3D:
    ext_auth_success_uri: str
    ext_auth_fail_uri: str


@dataclass(frozen=True)
class Wallet:
    def to_params(self) -> Dict[str, str]:
        return {"money_source": "wallet"}


@dataclass(frozen=True)
class Card:
    id: str
    secure3d: Optional[Secure3D] = None
    csc: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        params = {"money_source": self.id}
        if self.csc:
            params["csc"] = self.csc
        if self.secure3d is not None:
            params["ext_auth_success_uri"] = self.secure3d.ext_auth_success_uri
            params["ext_auth_fail_uri"] = self.secure3d.ext_auth_fail_uri
        return params


MoneySource = Union[Wallet, Card]


# =============================================================================
# Base model: permissive to avoid breaking on API additions
# =============================================================================
class _APIModel(BaseModel):
    """
    Loose model that accepts extra fields so the SDK doesn't break
    when the API adds response properties.
    """
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# Account
# =============================================================================
class BalanceDetails(_APIModel):
    total: Optional[Decimal] = None
    available: Optional[Decimal] = None
    deposition_pending: Optional[Decimal] = None
    blocked: Optional[Decimal] = None
    debt: Optional[Decimal] = None
    hold: Optional[Decimal] = None


class LinkedCard(_APIModel):
    pan_fragment: Optional[str] = None
    type: Optional[str] = None


class AccountInfo(_APIModel):
    """
    Wallet summary returned by ``api/account-info``.

    ``currency`` is the ISO 4217 numeric code as a string ("643" for RUB).
    """
    account: str
    balance: Decimal
    currency: Optional[str] = None
    account_status: Optional[Literal["anonymous", "named", "identified"]] = None
    account_type: Optional[Literal["personal", "professional"]] = None
    balance_details: Optional[BalanceDetails] = None
    cards_linked: List[LinkedCard] = Field(default_factory=list)


# =============================================================================
# Operation history
# =============================================================================
class Operation(_APIModel):
    """One row of the operation history."""
    operation_id: str
    status: Optional[str] = None          # success | refused | in_progress
    datetime: Optional[dt.datetime] = None
    title: Optional[str] = None
    pattern_id: Optional[str] = None
    direction: Optional[Literal["in", "out"]] = None
    amount: Optional[Decimal] = None
    label: Optional[str] = None
    type: Optional[str] = None


class OperationHistory(_APIModel):
    operations: List[Operation]
    # the API sends the cursor as a string
    next_record: Optional[int] = None


class OperationDetails(Operation):
    """Full description of a single operation (``api/operation-details``)."""
    amount_due: Optional[Decimal] = None
    fee: Optional[Decimal] = None
    sender: Optional[str] = None
    recipient: Optional[str] = None
    recipient_type: Optional[str] = None
    message: Optional[str] = None
    comment: Optional[str] = None
    codepro: Optional[bool] = None
    protection_code: Optional[str] = None
    expires: Optional[dt.datetime] = None
    answer_datetime: Optional[dt.datetime] = None
    details: Optional[str] = None
    digital_goods: Optional[Dict[str, Any]] = None


# =============================================================================
# Payments
# =============================================================================
class RequestPaymentResponse(_APIModel):
    """Result of ``api/request-payment``; ``request_id`` feeds process-payment."""
    status: str
    request_id: Optional[str] = None
    money_source: Optional[Dict[str, Any]] = None
    contract_amount: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    recipient_account_status: Optional[str] = None
    recipient_account_type: Optional[str] = None
    protection_code: Optional[str] = None
    account_unblock_uri: Optional[str] = None
    ext_action_uri: Optional[str] = None


class ProcessPaymentResponse(_APIModel):
    status: str                            # success | refused | in_progress | ext_auth_required
    payment_id: Optional[str] = None
    balance: Optional[Decimal] = None
    invoice_id: Optional[str] = None
    payer: Optional[str] = None
    payee: Optional[str] = None
    credit_amount: Optional[Decimal] = None
    account_unblock_uri: Optional[str] = None
    acs_uri: Optional[str] = None
    acs_params: Optional[Dict[str, Any]] = None
    next_retry: Optional[int] = None
    digital_goods: Optional[Dict[str, Any]] = None


# =============================================================================
# OAuth
# =============================================================================
class TokenExchange(_APIModel):
    access_token: str


__all__ = [
    "AccessScope",
    "OperationType",
    "join_ordered",
    "AccountId",
    "Email",
    "Phone",
    "UserId",
    "Net",
    "Total",
    "RequestAmount",
    "Secure3D",
    "Wallet",
    "Card",
    "MoneySource",
    "BalanceDetails",
    "LinkedCard",
    "AccountInfo",
    "Operation",
    "OperationHistory",
    "OperationDetails",
    "RequestPaymentResponse",
    "ProcessPaymentResponse",
    "TokenExchange",
]

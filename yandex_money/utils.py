from __future__ import annotations
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping

from .debug import dprint

# ==============================================================================
# Amounts
# ==============================================================================

def to_decimal(amount: Decimal | str | int | float) -> Decimal:
    """
    Coerce an amount to Decimal. Floats go through ``repr`` so ``0.1`` stays
    ``Decimal("0.1")``; strings may carry surrounding whitespace.
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool) or not isinstance(amount, (str, int, float)):
        raise TypeError(f"amount must be Decimal, str, int, or float, not {type(amount).__name__}")
    text = repr(amount) if isinstance(amount, float) else str(amount).strip()
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e


def positive_amount(amount: Decimal | str | int | float) -> Decimal:
    dec = to_decimal(amount)
    if not dec.is_finite() or dec <= 0:
        raise ValueError(f"amount must be a positive number, got {amount!r}")
    return dec


def format_amount(amount: Decimal) -> str:
    """
    Render an amount the way the API expects it: plain decimal notation,
    no exponent (``Decimal("1E+2")`` -> ``"100"``).
    """
    return format(amount, "f")


# ==============================================================================
# Form values
# ==============================================================================

def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_datetime(value: datetime) -> str:
    """
    RFC 3339 timestamp. Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def form_params(params: Mapping[str, Any]) -> Dict[str, str]:
    """
    Drop ``None`` values and stringify the rest for a form-encoded body.
    """
    out: Dict[str, str] = {}
    for k, v in params.items():
        if v is None:
            continue
        if isinstance(v, bool):
            out[k] = format_bool(v)
        elif isinstance(v, Decimal):
            out[k] = format_amount(v)
        elif isinstance(v, datetime):
            out[k] = format_datetime(v)
        else:
            out[k] = str(v)
    return out


# ==============================================================================
# Ids
# ==============================================================================

def uuid_str() -> str:
    u = str(uuid.uuid4())
    dprint("utils.uuid_str()", {"uuid": u})
    return u


__all__ = [
    "to_decimal",
    "positive_amount",
    "format_amount",
    "format_bool",
    "format_datetime",
    "form_params",
    "uuid_str",
]

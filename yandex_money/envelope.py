"""
Two-shape response envelope.

Every endpoint answers either with its payload or with ``{"error": "..."}``.
The shapes are told apart by the presence of a string ``error`` field, not by
a tag.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .debug import djson
from .errors import YandexMoneyAPIError, YandexMoneyParseError

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class Ok(Generic[T]):
    payload: T


@dataclass(frozen=True)
class ErrorEnvelope:
    error: str


Envelope = Union[Ok[T], ErrorEnvelope]


def decode(text: str, model: Type[T], *, endpoint: Optional[str] = None) -> Envelope:
    """
    Parse ``text`` into ``Ok(model)`` or ``ErrorEnvelope``.

    Raises ``YandexMoneyParseError`` when the body is not JSON or matches
    neither shape.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise YandexMoneyParseError(str(e), endpoint=endpoint, body=text) from e

    djson(f"Response body ({endpoint})", data)

    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return ErrorEnvelope(error=data["error"])

    try:
        return Ok(model.model_validate(data))
    except ValidationError as e:
        raise YandexMoneyParseError(
            f"expected {model.__name__}: {e.error_count()} validation error(s)",
            endpoint=endpoint,
            body=text,
        ) from e


def unwrap(envelope: Envelope, *, endpoint: Optional[str] = None) -> T:
    """Return the payload, or raise ``YandexMoneyAPIError`` for an error envelope."""
    if isinstance(envelope, ErrorEnvelope):
        raise YandexMoneyAPIError(envelope.error, endpoint=endpoint)
    return envelope.payload


__all__ = ["Ok", "ErrorEnvelope", "Envelope", "decode", "unwrap"]

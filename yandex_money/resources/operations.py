from __future__ import annotations
from datetime import datetime
from typing import AsyncIterator, Iterable, Optional

from ..client import YandexMoneyClient
from ..debug import dprint
from ..models import Operation, OperationDetails, OperationHistory, OperationType, join_ordered
from ..utils import form_params

HISTORY_ENDPOINT = "api/operation-history"
DETAILS_ENDPOINT = "api/operation-details"


def _validate_id(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required and must be a non-empty string.")


class OperationsAPI:
    """
    Operation history and details.

    ``history()`` pages through ``api/operation-history`` lazily; every call
    starts over from ``start_record``.
    """

    def __init__(self, client: YandexMoneyClient):
        self.client = client

    def history(
        self,
        *,
        types: Iterable[OperationType | str] = (),
        label: Optional[str] = None,
        from_: Optional[datetime] = None,
        till: Optional[datetime] = None,
        start_record: int = 0,
        details: bool = False,
        records: Optional[int] = None,
    ) -> AsyncIterator[Operation]:
        """
        Async iterator over operations, newest first.

        A failing page raises out of the iterator instead of yielding the
        next item.
        """
        if start_record < 0:
            raise ValueError("start_record must be >= 0")
        if records is not None and not 1 <= records <= 100:
            raise ValueError("records must be between 1 and 100")

        params = form_params({
            "type": join_ordered(types, OperationType) or None,
            "label": label,
            "from": from_,
            "till": till,
            "details": bool(details),
            "records": records,
        })
        return self._pages(params, start_record)

    async def _pages(self, params: dict, start_record: int) -> AsyncIterator[Operation]:
        while True:
            page_params = {**params, "start_record": str(start_record)}
            dprint("operations.history page", {"start_record": start_record})
            page = await self.client.call_model(HISTORY_ENDPOINT, page_params, OperationHistory)

            # an empty page ends the sequence even if a cursor came with it
            if not page.operations:
                return

            for op in page.operations:
                yield op

            if page.next_record is None:
                return
            start_record = page.next_record

    async def details(self, operation_id: str) -> OperationDetails:
        _validate_id("operation_id", operation_id)
        dprint("operations.details()", {"operation_id": operation_id})
        return await self.client.call_model(
            DETAILS_ENDPOINT, {"operation_id": operation_id}, OperationDetails
        )

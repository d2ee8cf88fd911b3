from datetime import datetime, timezone

import httpx
import pytest

from yandex_money import Client, OperationType
from yandex_money.errors import YandexMoneyAPIError, YandexMoneyParseError


def _op(op_id):
    return {
        "operation_id": op_id,
        "status": "success",
        "datetime": "2020-01-01T10:00:00Z",
        "title": f"op {op_id}",
        "direction": "in",
        "amount": 1.5,
        "type": "deposition",
    }


def _page(ids, next_record=None):
    body = {"operations": [_op(i) for i in ids]}
    if next_record is not None:
        body["next_record"] = str(next_record)
    return httpx.Response(200, json=body)


async def _collect(iterator):
    return [op.operation_id async for op in iterator]


@pytest.mark.asyncio
async def test_pages_are_chained_by_cursor(scripted):
    api = scripted(_page(["a", "b", "c"], next_record=5), _page(["d", "e"]))

    async with Client("tok", transport=api.transport) as client:
        ids = await _collect(client.operation_history())

    assert ids == ["a", "b", "c", "d", "e"]
    assert api.paths == ["/api/operation-history"] * 2
    assert api.form(0)["start_record"] == "0"
    assert api.form(1)["start_record"] == "5"


@pytest.mark.asyncio
async def test_empty_first_page_stops_immediately(scripted):
    api = scripted(_page([]))

    async with Client("tok", transport=api.transport) as client:
        ids = await _collect(client.operation_history(start_record=30))

    assert ids == []
    assert len(api.requests) == 1
    assert api.form()["start_record"] == "30"


@pytest.mark.asyncio
async def test_empty_page_wins_over_cursor(scripted):
    api = scripted(_page(["a"], next_record=1), _page([], next_record=2))

    async with Client("tok", transport=api.transport) as client:
        ids = await _collect(client.operation_history())

    assert ids == ["a"]
    assert len(api.requests) == 2


@pytest.mark.asyncio
async def test_pages_are_fetched_lazily(scripted):
    api = scripted(_page(["a", "b"], next_record=2), _page(["c"]))

    async with Client("tok", transport=api.transport) as client:
        history = client.operation_history()
        assert api.requests == []

        first = await history.__anext__()
        assert first.operation_id == "a"
        assert len(api.requests) == 1

        await history.__anext__()
        assert len(api.requests) == 1

        await history.__anext__()
        assert len(api.requests) == 2


@pytest.mark.asyncio
async def test_failure_mid_stream_surfaces_after_earlier_items(scripted):
    api = scripted(_page(["a"], next_record=1), httpx.Response(200, json={"error": "illegal_param_type"}))
    seen = []

    async with Client("tok", transport=api.transport) as client:
        with pytest.raises(YandexMoneyAPIError) as exc:
            async for op in client.operation_history():
                seen.append(op.operation_id)

    assert seen == ["a"]
    assert exc.value.description == "illegal_param_type"


@pytest.mark.asyncio
async def test_malformed_page_is_parse_failure(scripted):
    api = scripted(httpx.Response(200, text="{not json"))

    async with Client("tok", transport=api.transport) as client:
        with pytest.raises(YandexMoneyParseError):
            await _collect(client.operation_history())


@pytest.mark.asyncio
async def test_filter_params(scripted):
    api = scripted(_page([]))
    since = datetime(2020, 1, 1, tzinfo=timezone.utc)
    till = datetime(2020, 2, 1)  # naive -> UTC

    async with Client("tok", transport=api.transport) as client:
        await _collect(client.operation_history(
            types={OperationType.PAYMENT, OperationType.DEPOSITION},
            label="order-7",
            from_=since,
            till=till,
            details=True,
            records=50,
        ))

    assert api.form() == {
        "type": "deposition payment",
        "label": "order-7",
        "from": "2020-01-01T00:00:00+00:00",
        "till": "2020-02-01T00:00:00+00:00",
        "details": "true",
        "records": "50",
        "start_record": "0",
    }


@pytest.mark.asyncio
async def test_each_call_starts_a_fresh_sequence(scripted):
    api = scripted(_page(["a"]), _page(["a"]))

    async with Client("tok", transport=api.transport) as client:
        assert await _collect(client.operation_history()) == ["a"]
        assert await _collect(client.operation_history()) == ["a"]

    assert [api.form(i)["start_record"] for i in range(2)] == ["0", "0"]


def test_invalid_arguments(scripted):
    client = Client("tok", transport=scripted().transport)
    with pytest.raises(ValueError):
        client.operation_history(start_record=-1)
    with pytest.raises(ValueError):
        client.operation_history(records=0)

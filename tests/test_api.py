import httpx
import pytest

from yandex_money import Client
from yandex_money.errors import YandexMoneyConfigError, YandexMoneyHTTPError


ACCOUNT_INFO = {
    "account": "4100123456789",
    "balance": 1000.45,
    "currency": "643",
    "account_status": "named",
    "account_type": "personal",
    "balance_details": {"total": 1000.45, "available": 1000.45},
    "cards_linked": [{"pan_fragment": "510000******9999", "type": "MasterCard"}],
}


def test_client_requires_token():
    with pytest.raises(YandexMoneyConfigError):
        Client()


def test_client_reads_token_from_env(monkeypatch):
    monkeypatch.setenv("TOKEN", "env-token")
    assert Client().config.token == "env-token"


@pytest.mark.asyncio
async def test_account_info(scripted):
    api = scripted(httpx.Response(200, json=ACCOUNT_INFO))

    async with Client("tok", transport=api.transport) as client:
        info = await client.account_info()

    assert api.paths == ["/api/account-info"]
    assert api.form() == {}
    assert info.account == "4100123456789"
    assert info.account_status == "named"
    assert info.cards_linked[0].type == "MasterCard"


@pytest.mark.asyncio
async def test_operation_details(scripted):
    api = scripted(httpx.Response(200, json={
        "operation_id": "1234567",
        "status": "success",
        "datetime": "2011-07-11T20:43:00.000+04:00",
        "title": "Transfer",
        "direction": "out",
        "amount": 500.00,
        "fee": 2.50,
        "recipient": "4100123456789",
        "recipient_type": "account",
        "codepro": False,
    }))

    async with Client("tok", transport=api.transport) as client:
        details = await client.operation_details("1234567")

    assert api.paths == ["/api/operation-details"]
    assert api.form() == {"operation_id": "1234567"}
    assert details.recipient_type == "account"
    assert details.datetime.utcoffset().total_seconds() == 4 * 3600


@pytest.mark.asyncio
async def test_operation_details_requires_id(scripted):
    api = scripted()
    async with Client("tok", transport=api.transport) as client:
        with pytest.raises(ValueError):
            await client.operation_details("")
    assert api.requests == []


@pytest.mark.asyncio
async def test_revoke_token_accepts_empty_body(scripted):
    api = scripted(httpx.Response(200, text=""))

    async with Client("tok", transport=api.transport) as client:
        assert await client.revoke_token() is None

    assert api.paths == ["/api/revoke"]
    assert api.requests[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_revoking_twice_is_reported(scripted):
    # a revoked token is rejected with 401, revoke included
    api = scripted(
        httpx.Response(200, text=""),
        httpx.Response(401, headers={"WWW-Authenticate": 'Bearer error="invalid_token"'}),
    )

    async with Client("tok", transport=api.transport) as client:
        await client.revoke_token()
        with pytest.raises(YandexMoneyHTTPError) as exc:
            await client.revoke_token()

    assert exc.value.status == 401
    assert exc.value.endpoint == "api/revoke"

from decimal import Decimal

import httpx
import pytest

from yandex_money import (
    AccountId,
    Card,
    Client,
    Email,
    Net,
    Phone,
    Secure3D,
    TestPaymentRequest,
    Total,
    Wallet,
)
from yandex_money.errors import YandexMoneyAPIError, YandexMoneySDKError

REQUEST_OK = {
    "status": "success",
    "request_id": "req-1",
    "contract_amount": 100.50,
    "money_source": {"wallet": {"allowed": True}},
}


@pytest.mark.parametrize(
    "to, expected",
    [
        (AccountId(4100123456789), "4100123456789"),
        (Email("friend@example.com"), "friend@example.com"),
        (Phone.parse("+7 (921) 123-45-67"), "+79211234567"),
    ],
)
def test_transfer_recipient_is_one_stringified_param(scripted, to, expected):
    api = scripted()
    client = Client("tok", transport=api.transport)

    request = client.request_transfer(to, Total("10"))

    assert request.params["to"] == expected
    recipient_keys = {"to", "to_account", "to_email", "to_phone"} & set(request.params)
    assert recipient_keys == {"to"}


@pytest.mark.parametrize(
    "amount, key, other",
    [(Total("12.30"), "amount", "amount_due"), (Net(Decimal("7")), "amount_due", "amount")],
)
def test_amount_variant_picks_param_name(scripted, amount, key, other):
    client = Client("tok", transport=scripted().transport)

    request = client.request_transfer(AccountId(1), amount)

    assert request.params[key] == str(amount.value)
    assert other not in request.params


@pytest.mark.parametrize("bad", ["0", "-1", "abc"])
def test_amount_must_be_positive(bad):
    with pytest.raises(ValueError):
        Total(bad)


def test_invalid_phone_is_rejected():
    with pytest.raises(ValueError):
        Phone.parse("12345")


@pytest.mark.asyncio
async def test_transfer_round_trip_sends_only_given_params(scripted):
    api = scripted(httpx.Response(200, json=REQUEST_OK))

    async with Client("tok", transport=api.transport) as client:
        request = client.request_transfer(
            Email("friend@example.com"), Total("100.50"), comment="x", label="y"
        )
        assert api.requests == []
        response = await request.send()

    assert api.paths == ["/api/request-payment"]
    assert api.form() == {
        "pattern_id": "p2p",
        "to": "friend@example.com",
        "amount": "100.50",
        "comment": "x",
        "label": "y",
    }
    assert response.request_id == "req-1"
    assert response.contract_amount == Decimal("100.5")


def test_transfer_flags_are_rendered(scripted):
    client = Client("tok", transport=scripted().transport)

    request = client.request_transfer(
        AccountId(1),
        Net("5"),
        message="hi",
        codepro=True,
        hold_for_pickup=False,
        expire_period=3,
    )

    assert request.params == {
        "pattern_id": "p2p",
        "to": "1",
        "amount_due": "5",
        "message": "hi",
        "codepro": "true",
        "hold_for_pickup": "false",
        "expire_period": "3",
    }


def test_shop_and_mobile_constructors(scripted):
    client = Client("tok", transport=scripted().transport)

    shop = client.request_shop_payment("337", {"PROPERTY1": "921", "sum": 300})
    mobile = client.request_mobile_payment(Phone.parse("+79211234567"), "150")

    assert shop.params == {"pattern_id": "337", "PROPERTY1": "921", "sum": "300"}
    assert mobile.params == {"pattern_id": "phone-topup", "phone-number": "+79211234567", "amount": "150"}


@pytest.mark.asyncio
async def test_payment_request_is_sent_once(scripted):
    api = scripted(httpx.Response(200, json=REQUEST_OK))

    async with Client("tok", transport=api.transport) as client:
        request = client.request_shop_payment("337")
        await request.send()
        with pytest.raises(YandexMoneySDKError):
            await request.send()

    assert len(api.requests) == 1


@pytest.mark.asyncio
async def test_test_payment_marks_dry_run(scripted):
    api = scripted(httpx.Response(200, json=REQUEST_OK))

    async with Client("tok", transport=api.transport) as client:
        request = TestPaymentRequest(
            client.request_transfer(AccountId(1), Total("1")), test_result="not_enough_funds"
        )
        await request.send()

    form = api.form()
    assert form["test_payment"] == "true"
    assert form["test_result"] == "not_enough_funds"
    assert form["pattern_id"] == "p2p"


@pytest.mark.asyncio
async def test_refused_request_is_remote_rejection(scripted):
    api = scripted(httpx.Response(200, json={"status": "refused", "error": "not_enough_funds"}))

    async with Client("tok", transport=api.transport) as client:
        with pytest.raises(YandexMoneyAPIError) as exc:
            await client.request_transfer(AccountId(1), Total("1")).send()

    assert exc.value.description == "not_enough_funds"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "source, expected",
    [
        (Wallet(), {"money_source": "wallet"}),
        (Card("card-1"), {"money_source": "card-1"}),
        (
            Card("card-1", secure3d=Secure3D("https://ok.test", "https://fail.test"), csc="123"),
            {
                "money_source": "card-1",
                "csc": "123",
                "ext_auth_success_uri": "https://ok.test",
                "ext_auth_fail_uri": "https://fail.test",
            },
        ),
    ],
)
async def test_process_payment_money_sources(scripted, source, expected):
    api = scripted(httpx.Response(200, json={"status": "success", "payment_id": "p-1", "balance": 10}))

    async with Client("tok", transport=api.transport) as client:
        response = await client.process_payment("req-1", source)

    assert api.paths == ["/api/process-payment"]
    assert api.form() == {"request_id": "req-1", **expected}
    assert response.payment_id == "p-1"

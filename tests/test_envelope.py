import pytest

from yandex_money.envelope import ErrorEnvelope, Ok, decode, unwrap
from yandex_money.errors import YandexMoneyAPIError, YandexMoneyParseError
from yandex_money.models import AccountInfo, TokenExchange


def test_error_body_becomes_remote_rejection():
    envelope = decode('{"error":"some text"}', AccountInfo, endpoint="api/account-info")

    assert envelope == ErrorEnvelope(error="some text")
    with pytest.raises(YandexMoneyAPIError) as exc:
        unwrap(envelope, endpoint="api/account-info")
    assert exc.value.description == "some text"
    assert exc.value.endpoint == "api/account-info"


def test_success_body_becomes_payload():
    envelope = decode('{"access_token":"abc"}', TokenExchange)

    assert isinstance(envelope, Ok)
    assert unwrap(envelope).access_token == "abc"


def test_malformed_json_is_parse_failure():
    with pytest.raises(YandexMoneyParseError) as exc:
        decode("<html>oops</html>", TokenExchange, endpoint="oauth/token")
    assert exc.value.body == "<html>oops</html>"
    assert "oauth/token" in str(exc.value)


def test_body_matching_neither_shape_is_parse_failure():
    with pytest.raises(YandexMoneyParseError):
        decode('{"token":"abc"}', TokenExchange)


def test_non_string_error_field_is_not_an_error_envelope():
    with pytest.raises(YandexMoneyParseError):
        decode('{"error": {"code": 1}}', TokenExchange)


@pytest.mark.parametrize(
    "body",
    ['{"error":"denied"}', '{"access_token":"t"}', "not json", "[]"],
)
def test_outcomes_are_mutually_exclusive(body):
    outcomes = []
    try:
        envelope = decode(body, TokenExchange)
        outcomes.append(type(envelope).__name__)
    except YandexMoneyParseError:
        outcomes.append("parse")
    assert len(outcomes) == 1
    assert outcomes[0] in {"Ok", "ErrorEnvelope", "parse"}


def test_extra_fields_are_kept():
    info = unwrap(decode(
        '{"account":"4100123","balance":"10.50","currency":"643","new_field":1}',
        AccountInfo,
    ))
    assert str(info.balance) == "10.50"
    assert info.model_extra == {"new_field": 1}

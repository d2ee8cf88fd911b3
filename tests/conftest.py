"""Pytest fixtures: scripted HTTP backends and a clean environment."""

import httpx
import pytest

from yandex_money import YandexMoneyClient, YandexMoneyConfig

_ENV_VARS = (
    "TOKEN",
    "CLIENT_ID",
    "CLIENT_REDIRECT",
    "CLIENT_SECRET",
    "YANDEX_MONEY_BASE_URL",
    "YANDEX_MONEY_TIMEOUT",
    "YANDEX_MONEY_DEBUG",
)


class ScriptedAPI:
    """Answers requests with canned responses, in order, and records them."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request to {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def form(self, index: int = -1) -> dict:
        return dict(httpx.QueryParams(self.requests[index].content.decode()))

    @property
    def paths(self) -> list:
        return [r.url.path for r in self.requests]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def scripted():
    """Factory: ``scripted(httpx.Response(...), ...)``."""
    return lambda *responses: ScriptedAPI(responses)


@pytest.fixture
def config():
    return YandexMoneyConfig(token="test-token-0123456789", base_url="https://api.test")


@pytest.fixture
def make_client(config):
    def make(api: ScriptedAPI, **kwargs) -> YandexMoneyClient:
        return YandexMoneyClient(config, transport=api.transport, **kwargs)
    return make

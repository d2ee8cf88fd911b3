from __future__ import annotations

from typing import Dict, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from .config import YandexMoneyConfig
from .debug import dprint, djson, scrub_headers, scrub_params, set_debug
from .envelope import decode, unwrap
from .errors import YandexMoneyHTTPError

try:
    from importlib.metadata import version, PackageNotFoundError
    SDK_VERSION = version("yandex-money-python")
except PackageNotFoundError:
    SDK_VERSION = "0.0.0"

T = TypeVar("T", bound=BaseModel)

Params = Mapping[str, str]


class YandexMoneyClient:
    """
    Async transport for the Yandex.Money API.

    - POSTs form-encoded parameters to ``{base_url}/{endpoint}``.
    - Adds ``Authorization: Bearer <token>`` when a token is configured.
    - One HTTP request per call; nothing is retried.
    - Prints sanitized debug logs (token redacted).

    ``transport`` lets tests plug in ``httpx.MockTransport``; ``anonymous``
    suppresses the bearer header (OAuth endpoints).
    """

    def __init__(
        self,
        config: YandexMoneyConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        anonymous: bool = False,
    ):
        self.config = config
        self.anonymous = anonymous
        if config.debug:
            set_debug(True)
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            follow_redirects=False,
            transport=transport,
            headers={"User-Agent": f"yandex-money-python/{SDK_VERSION}"},
        )
        dprint(
            "Client init",
            {
                "base_url": self.config.base_url,
                "timeout": self.config.timeout,
                "authorized": bool(self.config.token) and not anonymous,
                "sdk_version": SDK_VERSION,
            },
        )

    # ------------ context manager support ------------
    async def __aenter__(self) -> "YandexMoneyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------ internal helpers ------------
    def _headers(self) -> Dict[str, str]:
        h: Dict[str, str] = {"Accept": "application/json"}
        if self.config.token and not self.anonymous:
            h["Authorization"] = f"Bearer {self.config.token}"
        djson("Request headers", scrub_headers(h))
        return h

    async def _post(self, endpoint: str, params: Params) -> httpx.Response:
        dprint("POST", {"endpoint": endpoint})
        djson("Request form", scrub_params(params))
        try:
            return await self._client.post(
                f"/{endpoint}",
                data=dict(params),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            dprint("Network error", {"endpoint": endpoint, "error": repr(e)})
            raise YandexMoneyHTTPError(-1, str(e) or repr(e), endpoint) from e

    # ------------ public request helpers ------------
    async def call(self, endpoint: str, params: Optional[Params] = None) -> str:
        """POST and return the response body; HTTP error statuses raise."""
        r = await self._post(endpoint, params or {})
        dprint("Response", {"endpoint": endpoint, "status": r.status_code})
        if r.is_error:
            raise YandexMoneyHTTPError(r.status_code, r.text, endpoint)
        return r.text

    async def call_model(self, endpoint: str, params: Optional[Params], model: Type[T]) -> T:
        """POST, decode the envelope, return the payload or raise the API error."""
        text = await self.call(endpoint, params)
        return unwrap(decode(text, model, endpoint=endpoint), endpoint=endpoint)

    async def call_empty(self, endpoint: str, params: Optional[Params] = None) -> None:
        """POST an endpoint whose successful answer carries no payload."""
        await self.call(endpoint, params)

    async def get_redirect(self, endpoint: str, params: Optional[Params] = None) -> str:
        """
        POST without following redirects and return the ``Location`` of the
        302 answer (made absolute against the request URL).
        """
        r = await self._post(endpoint, params or {})
        dprint("Response", {"endpoint": endpoint, "status": r.status_code})
        location = r.headers.get("Location")
        if r.status_code != httpx.codes.FOUND or not location:
            raise YandexMoneyHTTPError(
                r.status_code,
                f"Unexpected status code {r.status_code} (expected 302 redirect): {r.text}",
                endpoint,
            )
        return str(r.url.join(location))

    async def aclose(self) -> None:
        dprint("Client aclose()")
        await self._client.aclose()


__all__ = ["YandexMoneyClient", "SDK_VERSION"]

"""HTTP transport boundary used by the API client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .const import DEFAULT_TIMEOUT
from .errors import TransportError
from .result import Err, Ok, Result

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Decoded HTTP response handed back to the client."""

    body: Any
    status_code: int | None = None


class HttpClient(Protocol):
    """Capability the client needs to reach the API.

    Implementations must not raise; every failure is returned as
    ``Err(TransportError(...))``.
    """

    async def get(
        self, url: str, headers: Mapping[str, str], params: Mapping[str, Any]
    ) -> Result[RawResponse, TransportError]: ...

    async def put(
        self, url: str, headers: Mapping[str, str], json: Any
    ) -> Result[RawResponse, TransportError]: ...


class HttpxTransport:
    """``HttpClient`` backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Wrap ``client`` or lazily create an owned one on first use."""

        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def get(
        self, url: str, headers: Mapping[str, str], params: Mapping[str, Any]
    ) -> Result[RawResponse, TransportError]:
        """Issue a GET request."""

        return await self._request("GET", url, headers=dict(headers), params=params)

    async def put(
        self, url: str, headers: Mapping[str, str], json: Any
    ) -> Result[RawResponse, TransportError]:
        """Issue a PUT request with a JSON body."""

        return await self._request("PUT", url, headers=dict(headers), json=json)

    async def _request(
        self, method: str, url: str, **kwargs: Any
    ) -> Result[RawResponse, TransportError]:
        client = self._require_client()
        try:
            response = await client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as err:
            _LOGGER.warning("%s %s failed: %s", method, url, err)
            return Err(TransportError(err))
        _LOGGER.debug("%s %s returned HTTP %s", method, url, response.status_code)
        return Ok(
            RawResponse(body=_decode_body(response), status_code=response.status_code)
        )

    async def aclose(self) -> None:
        """Close the underlying client when this transport created it."""

        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def _decode_body(response: httpx.Response) -> Any:
    """Return the JSON body, or the raw text when it is not JSON."""

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text

"""Tests for the httpx-backed transport."""

from __future__ import annotations

import json

import httpx

from govee_lights.errors import TransportError
from govee_lights.result import Err, Ok
from govee_lights.transport import HttpxTransport, RawResponse


async def test_get_sends_headers_and_query_params() -> None:
    """GET requests carry headers and query parameters and decode JSON."""

    seen: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"data": {}})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    transport = HttpxTransport(client)

    result = await transport.get(
        "https://govee.test/v1/devices/state",
        {"Govee-API-Key": "key"},
        {"device": "dev", "model": "H6008"},
    )

    assert result == Ok(RawResponse(body={"data": {}}, status_code=200))
    request = seen["request"]
    assert request.method == "GET"
    assert request.headers["Govee-API-Key"] == "key"
    assert request.url.params["device"] == "dev"
    assert request.url.params["model"] == "H6008"
    await client.aclose()


async def test_put_sends_json_body() -> None:
    """PUT requests serialize the body as JSON."""

    seen: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"code": 200, "message": "Success"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    transport = HttpxTransport(client)
    body = {"device": "dev", "model": "H6008", "cmd": {"name": "turn", "value": "on"}}

    result = await transport.put("https://govee.test/v1/devices/control", {}, body)

    assert isinstance(result, Ok)
    assert result.value.body == {"code": 200, "message": "Success"}
    assert seen["request"].method == "PUT"
    assert json.loads(seen["request"].content) == body
    await client.aclose()


async def test_error_status_keeps_vendor_body() -> None:
    """HTTP error statuses are returned with their decoded body."""

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(
            lambda _: httpx.Response(400, json={"code": 400, "message": "bad"})
        )
    )
    transport = HttpxTransport(client)

    result = await transport.put("https://govee.test/v1/devices/control", {}, {})

    assert result == Ok(
        RawResponse(body={"code": 400, "message": "bad"}, status_code=400)
    )
    await client.aclose()


async def test_non_json_body_falls_back_to_text() -> None:
    """Bodies that are not JSON are surfaced as text."""

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda _: httpx.Response(502, text="Bad gateway"))
    )
    transport = HttpxTransport(client)

    result = await transport.get("https://govee.test/v1/devices", {}, {})

    assert result == Ok(RawResponse(body="Bad gateway", status_code=502))
    await client.aclose()


async def test_network_failures_become_transport_errors() -> None:
    """httpx errors are returned, never raised."""

    error = httpx.ConnectTimeout("timeout")

    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    transport = HttpxTransport(client)

    result = await transport.get("https://govee.test/v1/devices", {}, {})

    assert isinstance(result, Err)
    assert isinstance(result.reason, TransportError)
    assert isinstance(result.reason.underlying, httpx.ConnectTimeout)
    await client.aclose()


async def test_unencodable_header_becomes_transport_error() -> None:
    """Headers httpx cannot encode are returned as errors, not raised."""

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda _: httpx.Response(200, json={}))
    )
    transport = HttpxTransport(client)

    result = await transport.get(
        "https://govee.test/v1/devices", {"Govee-API-Key": "kl\u00e9"}, {}
    )

    assert isinstance(result, Err)
    assert isinstance(result.reason.underlying, UnicodeEncodeError)
    await client.aclose()


async def test_invalid_url_becomes_transport_error() -> None:
    """Malformed URLs are returned as errors, not raised."""

    transport = HttpxTransport(
        httpx.AsyncClient(transport=httpx.MockTransport(lambda _: httpx.Response(200)))
    )

    result = await transport.get("https://govee.test/v1/dev\x00ices", {}, {})

    assert isinstance(result, Err)
    assert isinstance(result.reason, TransportError)
    assert isinstance(result.reason.underlying, httpx.InvalidURL)


async def test_aclose_leaves_injected_client_open() -> None:
    """Only clients created by the transport are closed by it."""

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda _: httpx.Response(200, json={}))
    )
    transport = HttpxTransport(client)

    await transport.aclose()

    assert not client.is_closed
    await client.aclose()

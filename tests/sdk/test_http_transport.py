"""Tests for the HTTP transport."""

import httpx
import pytest

from hrana_sdk.connection.http import HTTPTransport, RawResponse
from hrana_sdk.exceptions import ConnectionError
from hrana_sdk.request import HttpRequest, PipelineRequestBuilder
from hrana_sdk.types import Close


def build_request() -> HttpRequest:
    return (
        PipelineRequestBuilder()
        .with_database("db")
        .with_organization("org")
        .with_token("secret")
        .with_statement(Close())
        .build()
    )


def mocked(transport: HTTPTransport, handler: httpx.MockTransport) -> HTTPTransport:
    transport._client = httpx.AsyncClient(transport=handler)
    return transport


class TestHTTPTransport:
    """Tests for HTTPTransport class."""

    @pytest.mark.asyncio
    async def test_connect_and_close(self) -> None:
        transport = HTTPTransport()

        assert not transport.is_connected
        await transport.connect()
        assert transport.is_connected

        await transport.close()
        assert not transport.is_connected

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        async with HTTPTransport(timeout=5.0) as transport:
            assert transport.is_connected

        assert not transport.is_connected

    @pytest.mark.asyncio
    async def test_send_not_connected(self) -> None:
        with pytest.raises(ConnectionError, match="Not connected"):
            await HTTPTransport().send(build_request())

    @pytest.mark.asyncio
    async def test_send_posts_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text='{"baton": null, "results": []}')

        transport = mocked(HTTPTransport(), httpx.MockTransport(handler))
        response = await transport.send(build_request())
        await transport.close()

        assert response == RawResponse(status=200, body='{"baton": null, "results": []}')
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "https://db-org.turso.io/v2/pipeline"
        assert seen[0].headers["Authorization"] == "Bearer secret"
        assert seen[0].content == b'{"baton":null,"requests":[{"type":"close"}]}'

    @pytest.mark.asyncio
    async def test_error_status_is_not_interpreted(self) -> None:
        transport = mocked(HTTPTransport(), httpx.MockTransport(lambda request: httpx.Response(400, text="bad")))

        response = await transport.send(build_request())
        await transport.close()

        assert response.status == 400
        assert response.body == "bad"

    @pytest.mark.asyncio
    async def test_request_error_becomes_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = mocked(HTTPTransport(), httpx.MockTransport(handler))

        with pytest.raises(ConnectionError, match="Request failed"):
            await transport.send(build_request())
        await transport.close()

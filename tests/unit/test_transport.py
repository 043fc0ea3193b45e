"""Unit tests for HTTPTransport."""

import asyncio
import json
from urllib.parse import parse_qs

import httpx
import pytest

from http_base_client.config import BasicAuthCredentials, ResponseType
from http_base_client.transport import (
    HTTPTransport,
    RequestCancelledError,
    TransportError,
    TransportRequest,
    TransportTimeoutError,
    wait_with_signal,
)

BASE_URL = "https://api.example.com/v1"


def make_transport(handler, **kwargs) -> HTTPTransport:
    return HTTPTransport(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestResponseDecoding:
    @pytest.mark.asyncio
    async def test_json_body(self):
        transport = make_transport(lambda r: httpx.Response(200, json={"id": 1}))
        response = await transport.request("/items/1")
        assert response.status == 200
        assert response.status_text == "OK"
        assert response.data == {"id": 1}

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self):
        transport = make_transport(lambda r: httpx.Response(204))
        response = await transport.request("/items/1", method="DELETE")
        assert response.data is None

    @pytest.mark.asyncio
    async def test_non_json_body_falls_back_to_text(self):
        transport = make_transport(lambda r: httpx.Response(200, text="plain"))
        response = await transport.request("/ping")
        assert response.data == "plain"

    @pytest.mark.asyncio
    async def test_text_response_type(self):
        transport = make_transport(
            lambda r: httpx.Response(200, json={"a": 1}), response_type=ResponseType.TEXT
        )
        response = await transport.request("/raw")
        assert isinstance(response.data, str)
        assert json.loads(response.data) == {"a": 1}

    @pytest.mark.asyncio
    async def test_bytes_response_type(self):
        transport = make_transport(
            lambda r: httpx.Response(200, content=b"\x00\x01"), response_type=ResponseType.BYTES
        )
        response = await transport.request("/blob")
        assert response.data == b"\x00\x01"

    @pytest.mark.asyncio
    async def test_response_encoding_override(self):
        transport = make_transport(
            lambda r: httpx.Response(200, content="héllo".encode("latin-1")),
            response_type=ResponseType.TEXT,
            response_encoding="latin-1",
        )
        response = await transport.request("/latin")
        assert response.data == "héllo"


class TestFailures:
    @pytest.mark.asyncio
    async def test_non_success_status_raises_with_response(self):
        transport = make_transport(lambda r: httpx.Response(404, json={"error": "not found"}))
        with pytest.raises(TransportError) as exc_info:
            await transport.request("/missing")
        error = exc_info.value
        assert error.response is not None
        assert error.response.status == 404
        assert error.response.status_text == "Not Found"
        assert error.response.data == {"error": "not found"}
        assert error.message == "Request failed with status code 404"
        assert error.request.url == "/missing"

    @pytest.mark.asyncio
    async def test_redirect_not_followed_when_disabled(self):
        transport = make_transport(
            lambda r: httpx.Response(302, headers={"Location": "/elsewhere"}), max_redirects=0
        )
        with pytest.raises(TransportError) as exc_info:
            await transport.request("/moved")
        assert exc_info.value.response.status == 302

    @pytest.mark.asyncio
    async def test_timeout_uses_configured_message(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        transport = make_transport(handler, timeout=1.0, timeout_error_message="upstream too slow")
        with pytest.raises(TransportTimeoutError) as exc_info:
            await transport.request("/slow")
        assert str(exc_info.value) == "upstream too slow"
        assert exc_info.value.response is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_timeout_default_message(self):
        def handler(request):
            raise httpx.ConnectTimeout("connect timed out", request=request)

        transport = make_transport(handler, timeout=2.5)
        with pytest.raises(TransportTimeoutError, match="timeout of 2.5s exceeded"):
            await transport.request("/slow")

    @pytest.mark.asyncio
    async def test_network_error_propagates_unchanged(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(httpx.ConnectError, match="connection refused"):
            await transport.request("/down")


class TestRequestEncoding:
    @pytest.mark.asyncio
    async def test_mapping_sent_as_json(self):
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            captured["content_type"] = request.headers["content-type"]
            return httpx.Response(201, json={})

        await make_transport(handler).request("/items", method="post", data={"name": "x"})
        assert captured == {"body": {"name": "x"}, "content_type": "application/json"}

    @pytest.mark.asyncio
    async def test_form_content_type_encodes_form(self):
        captured = {}

        def handler(request):
            captured["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={})

        await make_transport(handler).request(
            "/token",
            method="POST",
            data={"grant_type": "client_credentials"},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        assert captured["form"] == {"grant_type": ["client_credentials"]}

    @pytest.mark.asyncio
    async def test_string_body_sent_raw(self):
        captured = {}

        def handler(request):
            captured["body"] = request.content
            return httpx.Response(200)

        await make_transport(handler).request("/raw", method="PUT", data="<xml/>")
        assert captured["body"] == b"<xml/>"

    @pytest.mark.asyncio
    async def test_default_headers_and_basic_auth(self):
        captured = {}

        def handler(request):
            captured["headers"] = request.headers
            return httpx.Response(200)

        transport = make_transport(
            handler,
            headers={"X-Client": "tests"},
            basic_auth=BasicAuthCredentials("user", "pass"),
        )
        await transport.request("/me", headers={"X-Request": "1"})
        assert captured["headers"]["x-client"] == "tests"
        assert captured["headers"]["x-request"] == "1"
        assert captured["headers"]["authorization"] == "Basic dXNlcjpwYXNz"

    @pytest.mark.asyncio
    async def test_url_resolved_against_base(self):
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            return httpx.Response(200)

        await make_transport(handler).request("/users/1")
        assert captured["url"] == "https://api.example.com/v1/users/1"


class TestInterceptors:
    @pytest.mark.asyncio
    async def test_interceptors_run_in_order_sync_and_async(self):
        order = []
        captured = {}

        def first(request: TransportRequest) -> TransportRequest:
            order.append("first")
            request.headers["X-First"] = "1"
            return request

        async def second(request: TransportRequest) -> TransportRequest:
            await asyncio.sleep(0)
            order.append("second")
            request.headers["X-Second"] = "2"
            return request

        def handler(request):
            captured["headers"] = request.headers
            return httpx.Response(200)

        transport = make_transport(handler)
        transport.add_request_interceptor(first)
        transport.add_request_interceptor(second)
        await transport.request("/x")
        assert order == ["first", "second"]
        assert captured["headers"]["x-first"] == "1"
        assert captured["headers"]["x-second"] == "2"

    @pytest.mark.asyncio
    async def test_interceptor_error_propagates_without_dispatch(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        def failing(request):
            raise RuntimeError("no credentials")

        transport = make_transport(handler)
        transport.add_request_interceptor(failing)
        with pytest.raises(RuntimeError, match="no credentials"):
            await transport.request("/x")
        assert calls == []


class TestCancellation:
    @pytest.mark.asyncio
    async def test_already_set_signal_never_dispatches(self):
        calls = []
        transport = make_transport(lambda r: calls.append(r) or httpx.Response(200))
        signal = asyncio.Event()
        signal.set()
        with pytest.raises(RequestCancelledError):
            await transport.request("/x", signal=signal)
        assert calls == []

    @pytest.mark.asyncio
    async def test_signal_set_during_dispatch_cancels(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        transport = make_transport(handler)
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)
        with pytest.raises(RequestCancelledError):
            await transport.request("/slow", signal=signal)

    @pytest.mark.asyncio
    async def test_unset_signal_returns_result(self):
        transport = make_transport(lambda r: httpx.Response(200, json=[1]))
        response = await transport.request("/x", signal=asyncio.Event())
        assert response.data == [1]

    @pytest.mark.asyncio
    async def test_wait_with_signal_without_signal(self):
        async def value():
            return 42

        assert await wait_with_signal(value(), None) == 42


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        transport = make_transport(lambda r: httpx.Response(200))
        async with transport as t:
            assert t is transport
        assert transport.client.is_closed

    def test_base_url_exposed(self):
        transport = make_transport(lambda r: httpx.Response(200))
        assert transport.base_url.startswith("https://api.example.com/v1")

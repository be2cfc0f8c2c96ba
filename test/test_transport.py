"""
Tests for the httpx transport (sync, no network).
"""

import httpx
import pytest

from voipms.api.errors import TransportError
from voipms.api.transport import HttpTransport
from voipms.config import VoipMsConfig

PARAMS = {"api_username": "a@x.com", "api_password": "k", "method": "getServersInfo"}


class TestHttpTransportSend:
    def test_sends_query_string_and_accept_header(self, voipms_config: VoipMsConfig) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b'{"status": "success"}')

        transport = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler))
        body = transport.send("GET", PARAMS)

        assert body == b'{"status": "success"}'
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "voip.example.com"
        assert request.url.path == "/api/v1/rest.php"
        assert request.url.params["api_username"] == "a@x.com"
        assert request.url.params["api_password"] == "k"
        assert request.url.params["method"] == "getServersInfo"
        assert request.headers["Accept"] == "application/json"
        assert request.content == b""

    def test_applies_configured_timeout(self) -> None:
        config = VoipMsConfig(username="u", api_key="k", api_timeout="500ms")
        timeouts: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            timeouts.append(request.extensions["timeout"])
            return httpx.Response(200, content=b"{}")

        HttpTransport(config, http_transport=httpx.MockTransport(handler)).send("GET", PARAMS)

        assert timeouts[0]["read"] == pytest.approx(0.5)
        assert timeouts[0]["connect"] == pytest.approx(0.5)

    def test_uses_mutating_verb(self, voipms_config: VoipMsConfig) -> None:
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200, content=b'{"status": "success"}')

        HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler)).send(
            "PATCH", {**PARAMS, "method": "setDIDPOP", "did": "5551234567", "pop": "1"}
        )

        assert methods == ["PATCH"]

    def test_returns_body_regardless_of_http_status(self, voipms_config: VoipMsConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, content=b"internal error")

        body = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler)).send("GET", PARAMS)

        assert body == b"internal error"

    def test_each_call_is_a_separate_round_trip(self, voipms_config: VoipMsConfig) -> None:
        count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal count
            count += 1
            return httpx.Response(200, content=b"{}")

        transport = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler))
        transport.send("GET", PARAMS)
        transport.send("GET", PARAMS)

        assert count == 2


class TestHttpTransportErrors:
    def test_connection_refused(self, voipms_config: VoipMsConfig) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("Connection refused")

        transport = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            transport.send("GET", PARAMS)

        assert exc_info.value.error_code == "HTTP_ERROR"
        assert "Connection refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert calls == 1

    def test_timeout(self, voipms_config: VoipMsConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out")

        transport = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            transport.send("GET", PARAMS)

        assert exc_info.value.error_code == "TIMEOUT"
        assert "getServersInfo" in str(exc_info.value)

    def test_invalid_url(self) -> None:
        config = VoipMsConfig(username="a@x.com", api_key="k", api_url="https://exa\x00mple.com/x")

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("request should not be sent")

        transport = HttpTransport(config, http_transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            transport.send("GET", PARAMS)

        assert exc_info.value.error_code == "INVALID_URL"
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    def test_credentials_not_in_error_message(self, voipms_config: VoipMsConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known")

        transport = HttpTransport(voipms_config, http_transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            transport.send("GET", {**PARAMS, "api_password": "s3cr3t"})

        assert "s3cr3t" not in str(exc_info.value)

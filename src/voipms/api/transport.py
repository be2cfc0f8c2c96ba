"""
HTTP transport for the VoIP.ms REST endpoint.

One network round trip per call, no retries, no connection reuse. The raw
body is returned whatever the HTTP status: VoIP.ms reports business
failures inside 200 responses.
"""

import time
from abc import ABC, abstractmethod

import httpx

from voipms.api.errors import TransportError
from voipms.config import VoipMsConfig
from voipms.shared.logging import get_logger

logger = get_logger(__name__)

ACCEPT_HEADERS = {"Accept": "application/json"}


class Transport(ABC):
    """Sends one request and returns the raw response body."""

    @abstractmethod
    def send(self, verb: str, params: dict[str, str]) -> bytes:
        ...


class HttpTransport(Transport):
    """httpx-backed transport.

    A fresh ``httpx.Client`` is opened for every call. ``http_transport``
    lets tests plug an ``httpx.MockTransport`` underneath.
    """

    def __init__(
        self,
        config: VoipMsConfig,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http_transport = http_transport

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self._config.api_timeout),
            headers=ACCEPT_HEADERS,
            transport=self._http_transport,
        )

    def send(self, verb: str, params: dict[str, str]) -> bytes:
        api_method = params.get("method", "")
        started = time.monotonic()

        try:
            with self._build_client() as client:
                response = client.request(verb, self._config.api_url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(
                "VoIP.ms request timed out",
                extra={"verb": verb, "api_method": api_method, "timeout_seconds": self._config.api_timeout},
            )
            raise TransportError(
                message=f"timeout calling {api_method} after {self._config.api_timeout}s: {e!s}",
                error_code="TIMEOUT",
            ) from e
        except httpx.InvalidURL as e:
            raise TransportError(
                message=f"invalid API URL for {api_method}: {e!s}",
                error_code="INVALID_URL",
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "HTTP error during VoIP.ms request",
                extra={"verb": verb, "api_method": api_method, "error": str(e)},
            )
            raise TransportError(
                message=f"HTTP error calling {api_method}: {e!s}",
                error_code="HTTP_ERROR",
            ) from e

        logger.debug(
            "VoIP.ms request completed",
            extra={
                "verb": verb,
                "api_method": api_method,
                "status_code": response.status_code,
                "elapsed_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )
        return response.content

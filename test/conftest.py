"""
Pytest configuration and fixtures for the VoIP.ms client tests.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from voipms.api.client import VoipMsClient
from voipms.api.transport import Transport
from voipms.config import VoipMsConfig


class RecordingTransport(Transport):
    """Transport double: records (verb, params) and replays canned bodies.

    Each canned item is a dict (sent as JSON), raw bytes, or an exception
    to raise instead of answering.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, str]]] = []

    def send(self, verb: str, params: dict[str, str]) -> bytes:
        self.calls.append((verb, dict(params)))
        if not self.responses:
            raise AssertionError(f"unexpected call {verb} {params.get('method')}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, bytes):
            return item
        return json.dumps(item).encode("utf-8")


@pytest.fixture
def voipms_config() -> VoipMsConfig:
    return VoipMsConfig(
        username="a@x.com",
        api_key="k",
        api_url="https://voip.example.com/api/v1/rest.php",
        api_timeout=2.0,
        log_level="WARNING",
    )


@pytest.fixture
def make_client(voipms_config: VoipMsConfig):
    """Return a factory building (client, transport) from canned responses."""

    def _make(*responses: Any) -> tuple[VoipMsClient, RecordingTransport]:
        transport = RecordingTransport(*responses)
        return VoipMsClient(voipms_config, transport=transport), transport

    return _make


@pytest.fixture
def servers_payload() -> dict[str, Any]:
    return {
        "status": "success",
        "servers": [
            {
                "server_name": "Atlanta",
                "server_shortname": "atl1",
                "server_hostname": "atl1",
                "server_ip": "10.0.0.1",
                "server_country": "USA",
                "server_pop": "1",
                "server_recommended": "Yes",
            },
            {
                "server_name": "New York",
                "server_shortname": "nyc1",
                "server_hostname": "nyc1",
                "server_ip": "10.0.0.2",
                "server_country": "USA",
                "server_pop": 2,
                "server_recommended": "No",
            },
        ],
    }

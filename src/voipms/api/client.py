"""
VoIP.ms endpoint operations.

Each operation builds a request value, decorates a copy with the shared
envelope, sends it through the transport and decodes the body. Lookups the
provider does not offer (server by hostname, exact DID match) are done
client side on top of the list calls.
"""

from dataclasses import replace
from typing import Any, TypeVar

from voipms.api.encoder import encode_params
from voipms.api.errors import NotFoundError, UnexpectedResultCountError
from voipms.api.models import (
    DidInfo,
    GetDidsInfoResponse,
    GetRegistrationStatusResponse,
    GetServersInfoResponse,
    ResponseEnvelope,
    ServerInfo,
    decode_response,
)
from voipms.api.requests import (
    GetClientsRequest,
    GetDidsInfoRequest,
    GetRegistrationStatusRequest,
    GetServersInfoRequest,
    RequestEnvelope,
    SetDidPopRequest,
)
from voipms.api.transport import HttpTransport, Transport
from voipms.config import VoipMsConfig
from voipms.shared.logging import get_logger

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT")


class VoipMsClient:
    """Synchronous client for the VoIP.ms REST API.

    The configuration is read-only after construction; every operation
    performs its own network call(s) and returns freshly decoded values.
    """

    def __init__(
        self,
        config: VoipMsConfig,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or HttpTransport(config)

    @property
    def config(self) -> VoipMsConfig:
        return self._config

    def _envelope(self, method: str) -> RequestEnvelope:
        return RequestEnvelope(
            api_username=self._config.username,
            api_password=self._config.api_key,
            method=method,
        )

    def _dispatch(self, request: Any, model: type[ResponseT]) -> ResponseT:
        # Credentials live only on this copy, never on the caller's value.
        decorated = replace(request, envelope=self._envelope(request.METHOD))
        body = self._transport.send(request.HTTP_VERB, encode_params(decorated))
        return decode_response(body, model)  # type: ignore[type-var]

    # DIDs

    def get_dids_info(self, client: str | None = None, did: str | None = None) -> GetDidsInfoResponse:
        """List DIDs, optionally filtered server side by client and/or DID."""
        return self._dispatch(GetDidsInfoRequest(client=client, did=did), GetDidsInfoResponse)

    def get_did_info(self, did: str, client: str | None = None) -> DidInfo:
        """Return the single DID record matching ``did`` exactly.

        The server side filter may return more than the requested DID, so
        the result is scanned for an exact match.
        """
        response = self.get_dids_info(client=client, did=did)
        for record in response.dids:
            if record.did == did:
                return record
        raise NotFoundError(f"couldn't find did {did}", identifier=did)

    def set_did_pop(self, did: str, pop: int) -> ResponseEnvelope:
        """Route ``did`` through POP ``pop``. Inspect the returned envelope for success."""
        logger.info("Setting DID POP", extra={"did": did, "pop": pop})
        return self._dispatch(SetDidPopRequest(did=did, pop=pop), ResponseEnvelope)

    def set_did_pop_by_hostname(self, did: str, hostname: str) -> ResponseEnvelope:
        """Resolve ``hostname`` to its POP id, then update the DID."""
        server = self.get_server_by_hostname(hostname)
        if server.server_pop < 0:
            raise NotFoundError(f"couldn't find POP for {hostname}", identifier=hostname)
        return self.set_did_pop(did, server.server_pop)

    # Servers

    def get_servers_info(self, server_pop: int | None = None) -> GetServersInfoResponse:
        return self._dispatch(GetServersInfoRequest(server_pop=server_pop), GetServersInfoResponse)

    def get_server_by_pop(self, pop: int) -> ServerInfo:
        response = self.get_servers_info(server_pop=pop)
        count = len(response.servers)
        if count != 1:
            raise UnexpectedResultCountError(
                f"couldn't find exactly 1 server with POP {pop}, found {count}",
                count=count,
            )
        return response.servers[0]

    def get_server_by_hostname(self, hostname: str) -> ServerInfo:
        """Find a server by exact (case-sensitive) hostname.

        getServersInfo has no hostname filter: always lists every server.
        """
        response = self.get_servers_info()
        for server in response.servers:
            if server.server_hostname == hostname:
                return server
        raise NotFoundError(f"couldn't find server {hostname}", identifier=hostname)

    # Accounts

    def get_registration_status(self, account: str) -> GetRegistrationStatusResponse:
        return self._dispatch(GetRegistrationStatusRequest(account=account), GetRegistrationStatusResponse)

    def get_clients(self, client: str | None = None) -> ResponseEnvelope:
        """List reseller clients. Client data is kept in ``extra_fields``."""
        return self._dispatch(GetClientsRequest(client=client), ResponseEnvelope)

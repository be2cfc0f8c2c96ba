"""
Request values for the modelled VoIP.ms methods.

Each request carries its own fields plus an ``envelope`` slot for the
shared credentials/method group. The slot stays None on values built by
callers: the client fills it on a copy right before dispatch.
"""

from dataclasses import dataclass
from typing import ClassVar

from voipms.api.encoder import Param, embed, param

HTTP_GET = "GET"
HTTP_PATCH = "PATCH"


@dataclass(frozen=True)
class RequestEnvelope:
    """Fields sent with every request."""

    api_username: str
    api_password: str
    method: str

    PARAMS: ClassVar[tuple[Param, ...]] = (
        param("api_username", "api_username"),
        param("api_password", "api_password"),
        param("method", "method"),
    )

    def __repr__(self) -> str:
        return f"RequestEnvelope(api_username={self.api_username!r}, api_password='***', method={self.method!r})"


@dataclass(frozen=True)
class GetDidsInfoRequest:
    client: str | None = None
    did: str | None = None
    envelope: RequestEnvelope | None = None

    METHOD: ClassVar[str] = "getDIDsInfo"
    HTTP_VERB: ClassVar[str] = HTTP_GET
    PARAMS: ClassVar[tuple[Param, ...]] = (
        embed("envelope"),
        param("client", "client", omit_empty=True),
        param("did", "did", omit_empty=True),
    )


@dataclass(frozen=True)
class SetDidPopRequest:
    did: str
    pop: int
    envelope: RequestEnvelope | None = None

    METHOD: ClassVar[str] = "setDIDPOP"
    HTTP_VERB: ClassVar[str] = HTTP_PATCH
    PARAMS: ClassVar[tuple[Param, ...]] = (
        embed("envelope"),
        param("did", "did"),
        param("pop", "pop"),
    )


@dataclass(frozen=True)
class GetServersInfoRequest:
    server_pop: int | None = None
    envelope: RequestEnvelope | None = None

    METHOD: ClassVar[str] = "getServersInfo"
    HTTP_VERB: ClassVar[str] = HTTP_GET
    PARAMS: ClassVar[tuple[Param, ...]] = (
        embed("envelope"),
        param("server_pop", "server_pop", omit_none=True),
    )


@dataclass(frozen=True)
class GetRegistrationStatusRequest:
    account: str
    envelope: RequestEnvelope | None = None

    METHOD: ClassVar[str] = "getRegistrationStatus"
    HTTP_VERB: ClassVar[str] = HTTP_GET
    PARAMS: ClassVar[tuple[Param, ...]] = (
        embed("envelope"),
        param("account", "account"),
    )


@dataclass(frozen=True)
class GetClientsRequest:
    client: str | None = None
    envelope: RequestEnvelope | None = None

    METHOD: ClassVar[str] = "getClients"
    HTTP_VERB: ClassVar[str] = HTTP_GET
    PARAMS: ClassVar[tuple[Param, ...]] = (
        embed("envelope"),
        param("client", "client", omit_empty=True),
    )

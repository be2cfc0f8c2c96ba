"""
Response models for the modelled VoIP.ms methods.

Every response is first decoded into a ResponseEnvelope (success, status,
message, raw body). Endpoint responses hold that envelope by reference in
their ``envelope`` field next to the endpoint specific data.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from voipms.api.errors import DecodeError, ProviderError
from voipms.api.wire import (
    StringBool,
    StringFloat,
    StringInt,
    VoipMsDate,
    VoipMsDateTime,
)

ENVELOPE_FIELDS = ("success", "status", "message")
SUCCESS_STATUS = "success"
_TRUTHY_TOKENS = {"1", "yes", "true"}


class ResponseEnvelope(BaseModel):
    """Fields present on every VoIP.ms response.

    ``success`` is kept as the provider's token, not coerced to bool.
    Unrecognized fields are retained and available via ``extra_fields``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    success: str = ""
    status: str = ""
    message: str = ""
    raw_text: str = Field(default="", repr=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def require_envelope_field(cls, data: Any) -> Any:
        if isinstance(data, dict) and not any(key in data for key in ENVELOPE_FIELDS):
            raise DecodeError(
                "response has none of the envelope fields success, status, message",
                raw_text=str(data.get("raw_text", "")),
            )
        return data

    @field_validator("success", "status", "message", mode="before")
    @classmethod
    def stringify_token(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (bool, int, float)):
            return json.dumps(v)
        return v

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS or self.success.lower() in _TRUTHY_TOKENS

    def ensure_success(self) -> "ResponseEnvelope":
        """Raise ProviderError unless the provider reported success."""
        if not self.is_success:
            raise ProviderError(
                f"provider reported failure: status={self.status!r} message={self.message!r}",
                status=self.status,
                provider_response={"success": self.success, "status": self.status, "message": self.message},
            )
        return self


class DidInfo(BaseModel):
    """A DID (phone number) record from getDIDsInfo."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    did: str
    description: str = ""
    routing: str = ""
    failover_busy: str = ""
    failover_unreachable: str = ""
    failover_noanswer: str = ""
    voicemail: str = ""
    pop: StringInt | None = None
    dialtime: StringInt | None = None
    cnam: StringInt | None = None
    e911: StringInt | None = None
    callerid_prefix: str = ""
    record_calls: StringInt | None = None
    note: str = ""
    billing_type: StringInt | None = None
    next_billing: VoipMsDate | None = None
    order_date: VoipMsDateTime | None = None
    reseller_account: StringInt | None = None
    reseller_next_billing: VoipMsDate | None = None
    reseller_monthly: StringFloat | None = None
    reseller_minute: StringFloat | None = None
    reseller_setup: StringFloat | None = None
    sms_available: StringInt | None = None
    sms_enabled: StringInt | None = None
    transcribe: StringInt | None = None
    transcription_locale: str = ""
    transcription_email: str = ""
    mms_available: StringInt | None = None
    sms_email: str = ""
    sms_email_enabled: StringInt | None = None
    sms_forward: str = ""
    sms_forward_enabled: StringInt | None = None
    sms_url_callback: str = ""
    sms_url_callback_enabled: StringInt | None = None
    sms_url_callback_retry: StringInt | None = None
    smpp_enabled: StringInt | None = None
    smpp_url: str = ""
    smpp_user: str = ""
    smpp_pass: str = Field(default="", repr=False)


class ServerInfo(BaseModel):
    """A POP server record from getServersInfo."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    server_name: str = ""
    server_shortname: str = ""
    server_hostname: str = ""
    server_ip: str = ""
    server_country: str = ""
    server_pop: StringInt
    server_recommended: str = ""

    @field_validator("server_recommended", mode="before")
    @classmethod
    def stringify_recommended(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return "1" if v else "0"
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def recommended(self) -> bool:
        return self.server_recommended.strip().lower() in _TRUTHY_TOKENS


class RegistrationStatus(BaseModel):
    """One registration entry from getRegistrationStatus."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    account: str = ""
    server_name: str = ""
    server_shortname: str = ""
    server_hostname: str = ""
    server_ip: str = ""
    server_country: str = ""
    server_pop: StringInt | None = None
    register_ip: str = ""
    register_port: str = ""
    register_next: VoipMsDateTime | None = None
    register_protocol: str = ""
    register_transport: str = ""
    register_useragent: str = ""
    rerouted: StringInt | None = None
    from_server_pop: StringInt | None = None

    @field_validator("register_port", mode="before")
    @classmethod
    def stringify_port(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class GetDidsInfoResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    envelope: ResponseEnvelope
    dids: list[DidInfo] = Field(default_factory=list)


class GetServersInfoResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    envelope: ResponseEnvelope
    servers: list[ServerInfo] = Field(default_factory=list)


class GetRegistrationStatusResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    envelope: ResponseEnvelope
    registered: StringBool | None = None
    rerouted: StringInt | None = None
    from_server_pop: StringInt | None = None
    registrations: list[RegistrationStatus] = Field(default_factory=list)


ResponseT = TypeVar("ResponseT", bound=BaseModel)


def _validate(model: type[ResponseT], data: dict[str, Any], text: str) -> ResponseT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"cannot decode {model.__name__}: {e}", raw_text=text) from e


def decode_envelope(body: bytes) -> tuple[dict[str, Any], ResponseEnvelope]:
    """Decode the shared envelope; return it with the parsed JSON object."""
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"response body is not valid JSON: {e.msg}", raw_text=text) from e

    if not isinstance(data, dict):
        raise DecodeError("response body is not a JSON object", raw_text=text)

    envelope = _validate(ResponseEnvelope, {**data, "raw_text": text}, text)
    return data, envelope


def decode_response(body: bytes, model: type[ResponseT]) -> ResponseT:
    """Decode a raw body into ``model``, composing the shared envelope.

    ``model`` is either ResponseEnvelope itself or an endpoint response
    with an ``envelope`` field.
    """
    data, envelope = decode_envelope(body)
    if model is ResponseEnvelope:
        return envelope  # type: ignore[return-value]
    return _validate(model, {**data, "envelope": envelope}, envelope.raw_text)

"""
Wire-value adapters.

VoIP.ms wraps most scalars in JSON strings ("1", "Yes", "2024-03-01") but
some endpoints return native JSON values for the same fields. Each adapter
tries the string form first, then the native form, and fails with a
DecodeError carrying the raw JSON text otherwise.
"""

import json
import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator

from voipms.api.errors import DecodeError

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DATETIME_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def raw_text(value: Any) -> str:
    """Render a decoded JSON value back to its JSON text."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def parse_string_bool(value: Any) -> bool:
    if isinstance(value, str):
        if value == "Yes":
            return True
        if value == "No":
            return False
        raise DecodeError(
            f"value for bool was {raw_text(value)}, expecting Yes or No",
            raw_text=raw_text(value),
        )
    if isinstance(value, bool):
        return value
    raise DecodeError(f"cannot decode {raw_text(value)} as bool", raw_text=raw_text(value))


def parse_string_int(value: Any) -> int:
    if isinstance(value, str):
        if not _INT_PATTERN.fullmatch(value):
            raise DecodeError(f"cannot decode {raw_text(value)} as integer", raw_text=raw_text(value))
        number = int(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        raise DecodeError(f"cannot decode {raw_text(value)} as integer", raw_text=raw_text(value))

    if not INT64_MIN <= number <= INT64_MAX:
        raise DecodeError(f"integer {raw_text(value)} out of 64-bit range", raw_text=raw_text(value))
    return number


def parse_string_float(value: Any) -> float:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as e:
            raise DecodeError(f"cannot decode {raw_text(value)} as number", raw_text=raw_text(value)) from e
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise DecodeError(f"cannot decode {raw_text(value)} as number", raw_text=raw_text(value))


def parse_date(value: Any) -> date:
    """Parse a provider-local ``YYYY-MM-DD`` date."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and _DATE_PATTERN.fullmatch(value):
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as e:
            raise DecodeError(f"invalid date {raw_text(value)}", raw_text=raw_text(value)) from e
    raise DecodeError(f"cannot decode {raw_text(value)} as date, expecting YYYY-MM-DD", raw_text=raw_text(value))


def parse_datetime(value: Any) -> datetime:
    """Parse a provider-local ``YYYY-MM-DD HH:MM:SS`` timestamp (naive, not converted)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and _DATETIME_PATTERN.fullmatch(value):
        try:
            return datetime.strptime(value, DATETIME_FORMAT)
        except ValueError as e:
            raise DecodeError(f"invalid datetime {raw_text(value)}", raw_text=raw_text(value)) from e
    raise DecodeError(
        f"cannot decode {raw_text(value)} as datetime, expecting YYYY-MM-DD HH:MM:SS",
        raw_text=raw_text(value),
    )


StringBool = Annotated[bool, BeforeValidator(parse_string_bool)]
StringInt = Annotated[int, BeforeValidator(parse_string_int)]
StringFloat = Annotated[float, BeforeValidator(parse_string_float)]
VoipMsDate = Annotated[date, BeforeValidator(parse_date)]
VoipMsDateTime = Annotated[datetime, BeforeValidator(parse_datetime)]

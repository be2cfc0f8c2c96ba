"""
Query parameter encoder.

Request values declare their wire parameters explicitly in a ``PARAMS``
class attribute instead of relying on runtime introspection:

    PARAMS = (
        embed("envelope"),
        param("client", "client", omit_empty=True),
        param("did", "did", omit_empty=True),
    )

``encode_params`` walks that declaration depth first and produces a flat
``{wire_name: str}`` mapping ready for the query string.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Protocol


@dataclass(frozen=True)
class Param:
    """One entry of a request's parameter declaration.

    ``name`` is None for embedded groups, which are flattened recursively.
    """

    attr: str
    name: str | None = None
    omit_empty: bool = False
    omit_none: bool = False

    @property
    def embedded(self) -> bool:
        return self.name is None


def param(attr: str, name: str, *, omit_empty: bool = False, omit_none: bool = False) -> Param:
    return Param(attr=attr, name=name, omit_empty=omit_empty, omit_none=omit_none)


def embed(attr: str) -> Param:
    return Param(attr=attr)


class Encodable(Protocol):
    PARAMS: ClassVar[tuple[Param, ...]]


def is_empty(value: Any) -> bool:
    """Zero value check used by omit-when-empty parameters."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        return value == ""
    return False


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    return str(value)


def encode_params(value: Encodable) -> dict[str, str]:
    """Flatten a request value into query parameters.

    Later-visited entries win on name collisions; embedded groups are
    conventionally declared first so specific fields override them.
    An embedded group that is None contributes nothing.
    """
    declaration = getattr(type(value), "PARAMS", None)
    if declaration is None:
        raise TypeError(f"{type(value).__name__} does not declare PARAMS")

    out: dict[str, str] = {}
    for entry in declaration:
        field_value = getattr(value, entry.attr)

        if entry.embedded:
            if field_value is not None:
                out.update(encode_params(field_value))
            continue

        if entry.omit_empty and is_empty(field_value):
            continue
        if entry.omit_none and field_value is None:
            continue
        out[entry.name] = stringify(field_value)  # type: ignore[index]

    return out

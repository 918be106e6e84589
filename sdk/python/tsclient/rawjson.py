"""Deferred JSON decoding for payloads whose shape the caller owns."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Callable, Union

from .errors import DecodeError

Target = Union[type, Callable[[Any], Any], None]


class RawJSON:
    """Serialized JSON kept as bytes until the caller asks for it.

    Search hits carry documents of a caller-defined schema, so the client
    never decodes them itself. Use :meth:`decode` to turn the bytes into a
    mapping, a dataclass instance or whatever a callable target builds.

    Payloads built from a decoded response with :meth:`from_value` are
    re-encoded, not the bytes the server sent: spacing differs, duplicate
    keys collapse and floats keep only Python's precision.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Union[bytes, str] = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)

    @classmethod
    def from_value(cls, value: Any) -> "RawJSON":
        """Re-serializes an already decoded value; None gives an empty payload."""
        if value is None:
            return cls()
        return cls(json.dumps(value, separators=(",", ":")).encode("utf-8"))

    def __bytes__(self) -> bytes:
        return self._data

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawJSON):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"RawJSON({self._data!r})"

    def decode(self, into: Target = None) -> Any:
        """Decodes the payload; an empty payload decodes to None."""
        if not self._data:
            return None
        try:
            value = json.loads(self._data)
        except ValueError as exc:
            raise DecodeError(f"invalid JSON payload: {self._data!r}") from exc
        if value is None:
            return {} if into is dict else None
        return decode_into(value, into)


def decode_into(value: Any, into: Target) -> Any:
    """Binds a decoded JSON value to an output target.

    `None` and `dict` return the value as decoded. A dataclass type is built
    from the keys it declares; other keys are ignored. Any other callable is
    called with the decoded value.
    """
    if into is None:
        return value
    if into is dict:
        if not isinstance(value, dict):
            raise DecodeError(f"expected a JSON object, got: {value!r}")
        return value
    if isinstance(into, type) and dataclasses.is_dataclass(into):
        if not isinstance(value, dict):
            raise DecodeError(f"expected a JSON object, got: {value!r}")
        names = {field.name for field in dataclasses.fields(into) if field.init}
        try:
            return into(**{k: v for k, v in value.items() if k in names})
        except TypeError as exc:
            raise DecodeError(f"cannot build {into.__name__} from {value!r}") from exc
    return into(value)


def parse_body(body: bytes) -> Any:
    """Decodes a whole response body; an empty body decodes to None."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON response: {body!r}") from exc

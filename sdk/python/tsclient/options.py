"""Request options applied to a request before it is sent.

An option is any callable taking the in-progress :class:`requests.Request`.
Options are applied left to right, so a later option overwrites what an
earlier one set for the query string or body.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import IO, Any, Callable, Union

import requests

RequestOption = Callable[[requests.Request], None]

HeaderValue = Union[str, Iterable[str]]
Body = Union[bytes, str, IO[bytes], None]


def with_header(headers: Mapping[str, HeaderValue]) -> RequestOption:
    """Adds headers, keeping any value already set under the same name."""

    def apply(request: requests.Request) -> None:
        for name, value in headers.items():
            values = [value] if isinstance(value, str) else list(value)
            existing = request.headers.get(name)
            if existing:
                values.insert(0, existing)
            if values:
                request.headers[name] = ", ".join(values)

    return apply


def with_url_values(values: Mapping[str, Union[str, Iterable[Any]]]) -> RequestOption:
    """Replaces the query string with `values`, in mapping order.

    A string value is sent as a single item.
    """

    def apply(request: requests.Request) -> None:
        request.params = [
            (key, str(item))
            for key, items in values.items()
            for item in ([items] if isinstance(items, str) else items)
        ]

    return apply


def with_body(body: Body) -> RequestOption:
    """Replaces the request body."""

    def apply(request: requests.Request) -> None:
        request.data = body

    return apply


def with_json_body(value: Any) -> RequestOption:
    """Replaces the body with `value` encoded as JSON.

    Encoding happens when the option is applied, so a value that cannot be
    serialized fails the request that uses it. `None` gives an option that
    does nothing.
    """
    if value is None:
        return _noop

    def apply(request: requests.Request) -> None:
        request.data = json.dumps(value).encode("utf-8")
        request.headers["Content-Type"] = "application/json"

    return apply


def _noop(request: requests.Request) -> None:
    return None

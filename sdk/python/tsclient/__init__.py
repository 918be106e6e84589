"""Python client for the Typesense search engine."""

import logging

from ._version import __version__
from .client import TypesenseClient
from .errors import (
    AlreadyExistsError,
    APIError,
    DecodeError,
    NotFoundError,
    NotSequenceError,
    StatusError,
    TypesenseError,
    UnauthorizedError,
    UnavailableError,
    UnprocessableError,
)
from .models import (
    Collection,
    CreateFieldData,
    Field,
    Highlight,
    SearchHit,
    SearchParameters,
    SearchResult,
)
from .options import (
    RequestOption,
    with_body,
    with_header,
    with_json_body,
    with_url_values,
)
from .rawjson import RawJSON

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "TypesenseClient",
    "TypesenseError",
    "StatusError",
    "UnauthorizedError",
    "NotFoundError",
    "AlreadyExistsError",
    "UnprocessableError",
    "UnavailableError",
    "APIError",
    "DecodeError",
    "NotSequenceError",
    "Collection",
    "CreateFieldData",
    "Field",
    "Highlight",
    "SearchHit",
    "SearchParameters",
    "SearchResult",
    "RawJSON",
    "RequestOption",
    "with_body",
    "with_header",
    "with_json_body",
    "with_url_values",
]

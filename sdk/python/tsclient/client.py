"""HTTP client for the Typesense search engine."""

from __future__ import annotations

import json
import logging
import os
import urllib.parse
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable

import requests
from requests.structures import CaseInsensitiveDict

from ._params import build_collection_body, build_delete_query, build_search_query
from ._parsers import (
    parse_collection_body,
    parse_collections_body,
    parse_document_id,
    parse_health,
    parse_import_results,
    parse_num_deleted,
    parse_search,
)
from ._version import __version__
from .errors import STATUS_ERRORS, APIError, DecodeError, NotSequenceError
from .models import Collection, CreateFieldData, SearchParameters, SearchResult
from .options import RequestOption, with_body, with_header, with_json_body, with_url_values
from .rawjson import Target, decode_into, parse_body

logger = logging.getLogger(__name__)

DebugHook = Callable[..., None]

USER_AGENT = f"python/tsclient {__version__}"
API_KEY_HEADER = "X-TYPESENSE-API-KEY"

_SUCCESS_STATUSES = frozenset({200, 201, 204})
_BAD_REQUEST = 400


def _no_debug(message: str, *args: Any) -> None:
    return None


class TypesenseClient:
    """Typesense API client.

    Creating a client performs a health check against the server and fails
    with the same error `health()` would raise. The client keeps no state
    between calls, so one instance can be shared by several threads as long
    as the underlying `requests.Session` is.

    `debug` receives printf-style arguments, so a `logging.Logger.debug`
    bound method can be passed as is.

    Every operation takes an optional `timeout` in seconds; when left out the
    timeout given at construction applies.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        session: requests.Session | None = None,
        debug: DebugHook | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._session = session if session is not None else requests.Session()
        self._debug = debug if debug is not None else _no_debug
        self._user_agent = user_agent or USER_AGENT
        self._timeout = timeout

        self.health()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "TypesenseClient":
        """Builds a client from TYPESENSE_URL and TYPESENSE_API_KEY."""
        try:
            base_url = os.environ["TYPESENSE_URL"]
            api_key = os.environ["TYPESENSE_API_KEY"]
        except KeyError as exc:
            raise ValueError(f"environment variable {exc.args[0]} is not set") from exc
        return cls(base_url, api_key, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def health(self, *, timeout: float | None = None) -> bool:
        """Returns whether the server reports itself healthy."""
        return parse_health(self.request("GET", "/health", timeout=timeout))

    # Collections

    def collection(self, name: str, *, timeout: float | None = None) -> Collection:
        """Reads collection metadata."""
        return parse_collection_body(
            self.request(
                "GET", f"/collections/{self._escaped(name)}", timeout=timeout
            )
        )

    def collections(self, *, timeout: float | None = None) -> list[Collection]:
        """Lists all collections, most recently created first."""
        return parse_collections_body(
            self.request("GET", "/collections", timeout=timeout)
        )

    def create_collection(
        self,
        name: str,
        default_sorting_field: str = "",
        fields: Iterable[CreateFieldData] = (),
        *,
        timeout: float | None = None,
    ) -> Collection:
        """Creates a collection. `default_sorting_field` may be left empty."""
        body = build_collection_body(name, default_sorting_field, fields)
        return parse_collection_body(
            self.request(
                "POST", "/collections", with_json_body(body), timeout=timeout
            )
        )

    def delete_collection(
        self, name: str, *, timeout: float | None = None
    ) -> Collection:
        """Permanently drops a collection and returns its last metadata."""
        return parse_collection_body(
            self.request(
                "DELETE", f"/collections/{self._escaped(name)}", timeout=timeout
            )
        )

    # Documents

    def insert(
        self,
        collection: str,
        document: Any,
        into: Target = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Inserts a document.

        The stored document is decoded into `into` when one is given,
        otherwise None is returned.
        """
        body = self.request(
            "POST",
            self._documents_path(collection),
            with_json_body(document),
            timeout=timeout,
        )
        return self._decode(body, into)

    def upsert(
        self,
        collection: str,
        document: Any,
        into: Target = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Inserts a document, replacing it if it already exists."""
        body = self.request(
            "POST",
            self._documents_path(collection),
            with_json_body(document),
            with_url_values({"action": ["upsert"]}),
            timeout=timeout,
        )
        return self._decode(body, into)

    def document(
        self,
        collection: str,
        document_id: str,
        into: Target = None,
        *,
        timeout: float | None = None,
    ) -> tuple[str, Any]:
        """Reads a document by id.

        Returns the id the server reported together with the document
        decoded into `into`, or None when no target is given. When decoding
        into the target fails, the raised `DecodeError` carries the id as
        `document_id`.
        """
        body = self.request(
            "GET", self._document_path(collection, document_id), timeout=timeout
        )
        doc_id = parse_document_id(body)
        if into is None:
            return doc_id, None
        try:
            return doc_id, self._decode(body, into)
        except DecodeError as exc:
            exc.document_id = doc_id
            raise

    def update_document(
        self,
        collection: str,
        document_id: str,
        document: Any,
        into: Target = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Applies a partial update to a document."""
        body = self.request(
            "PATCH",
            self._document_path(collection, document_id),
            with_json_body(document),
            timeout=timeout,
        )
        return self._decode(body, into)

    def delete_document(
        self,
        collection: str,
        document_id: str,
        into: Target = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Deletes a document and optionally decodes what was deleted."""
        body = self.request(
            "DELETE", self._document_path(collection, document_id), timeout=timeout
        )
        return self._decode(body, into)

    def delete_query(
        self,
        collection: str,
        filter_by: str,
        batch_size: int = 0,
        *,
        timeout: float | None = None,
    ) -> int:
        """Deletes every document matching `filter_by`.

        `batch_size` is only sent when non-zero. Returns the number of
        deleted documents.
        """
        body = self.request(
            "DELETE",
            self._documents_path(collection),
            with_url_values(build_delete_query(filter_by, batch_size)),
            timeout=timeout,
        )
        return parse_num_deleted(body)

    def import_documents(
        self,
        collection: str,
        documents: Sequence[Any],
        action: str = "",
        *,
        timeout: float | None = None,
    ) -> list[bool]:
        """Imports documents in one request.

        Returns one success flag per document, in input order. A failed
        document does not raise; check the flags.
        """
        if isinstance(documents, (str, bytes, bytearray, Mapping)) or not isinstance(
            documents, Sequence
        ):
            raise NotSequenceError(
                f"sequence of documents expected, got {type(documents).__name__}"
            )

        lines = [json.dumps(document) + "\n" for document in documents]
        options: list[RequestOption] = [
            with_body("".join(lines).encode("utf-8")),
            with_header({"Content-Type": "application/json"}),
        ]
        if action:
            options.append(with_url_values({"action": [action]}))

        body = self.request(
            "POST",
            f"{self._documents_path(collection)}/import",
            *options,
            timeout=timeout,
        )
        return parse_import_results(body)

    # Search

    def search(
        self,
        collection: str,
        params: SearchParameters,
        *,
        timeout: float | None = None,
    ) -> SearchResult:
        """Searches a collection."""
        body = self.request(
            "GET",
            f"{self._documents_path(collection)}/search",
            with_url_values(build_search_query(params)),
            timeout=timeout,
        )
        return parse_search(body)

    # Transport

    def request(
        self,
        method: str,
        path: str,
        *options: RequestOption,
        timeout: float | None = None,
    ) -> bytes:
        """Sends one request and returns the raw response body.

        A 400 response is returned like a success so the caller can read the
        server's message. 401, 404, 409, 422 and 503 raise their dedicated
        errors and any other unexpected status raises `APIError`.
        """
        self._debug("Request to %s (%s)", path, method)

        request = requests.Request(
            method, f"{self._base_url}{path}", headers=CaseInsensitiveDict()
        )
        for option in options:
            option(request)

        request.headers["User-Agent"] = self._user_agent
        request.headers[API_KEY_HEADER] = self._api_key

        status, body = self._send(
            request, self._timeout if timeout is None else timeout
        )

        if status in _SUCCESS_STATUSES:
            return body
        logger.debug("%s %s answered %d", method, path, status)
        if status == _BAD_REQUEST:
            return body
        error = STATUS_ERRORS.get(status)
        if error is not None:
            raise error()
        raise APIError(status)

    def _send(
        self, request: requests.Request, timeout: float | None
    ) -> tuple[int, bytes]:
        prepared = self._session.prepare_request(request)
        # stream=True defers reading the body into the try block.
        response = self._session.send(prepared, timeout=timeout, stream=True)
        try:
            return response.status_code, response.content
        finally:
            try:
                response.close()
            except (OSError, requests.RequestException) as exc:
                self._debug("error closing response body: %s", exc)

    def _decode(self, body: bytes, into: Target) -> Any:
        if into is None:
            return None
        return decode_into(parse_body(body), into)

    def _documents_path(self, collection: str) -> str:
        return f"/collections/{self._escaped(collection)}/documents"

    def _document_path(self, collection: str, document_id: str) -> str:
        return f"{self._documents_path(collection)}/{self._escaped(document_id)}"

    @staticmethod
    def _escaped(value: str) -> str:
        return urllib.parse.quote(value, safe="")

"""Response parsers for the Typesense client.

Missing keys decode to their zero value, the way the server's own clients
read its responses. Malformed values raise :class:`DecodeError`.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import DecodeError
from .models import Collection, Field, Highlight, SearchHit, SearchResult
from .rawjson import RawJSON, parse_body


def _object(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"invalid {what} response: {payload!r}")
    return payload


def parse_health(body: bytes) -> bool:
    payload = _object(parse_body(body), "health")
    return bool(payload.get("ok", False))


def parse_field(payload: Any) -> Field:
    return Field(
        name=str(payload.get("name", "")),
        type=str(payload.get("type", "")),
        facet=bool(payload.get("facet", False)),
        index=bool(payload.get("index", False)),
        infix=bool(payload.get("infix", False)),
    )


def parse_collection(payload: Any) -> Collection:
    payload = _object(payload, "collection")
    try:
        return Collection(
            name=str(payload.get("name", "")),
            fields=[parse_field(item) for item in payload.get("fields") or []],
            default_sorting_field=str(payload.get("default_sorting_field", "")),
            num_documents=int(payload.get("num_documents", 0)),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise DecodeError(f"invalid collection response: {payload}") from exc


def parse_collection_body(body: bytes) -> Collection:
    return parse_collection(parse_body(body))


def parse_collections_body(body: bytes) -> list[Collection]:
    payload = parse_body(body)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(f"invalid list collections response: {payload!r}")
    return [parse_collection(item) for item in payload]


def parse_document_id(body: bytes) -> str:
    payload = _object(parse_body(body), "document")
    doc_id = payload.get("id", "")
    if not isinstance(doc_id, str):
        raise DecodeError(f"invalid document id: {doc_id!r}")
    return doc_id


def parse_num_deleted(body: bytes) -> int:
    payload = _object(parse_body(body), "delete by query")
    try:
        return int(payload.get("num_deleted", 0))
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"invalid delete by query response: {payload}") from exc


def parse_import_results(body: bytes) -> list[bool]:
    """Reads one `{"success": bool}` record per line."""
    results: list[bool] = []
    for line in body.splitlines():
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except ValueError as exc:
            raise DecodeError(f"invalid import response line: {line!r}") from exc
        results.append(bool(_object(record, "import").get("success", False)))
    return results


def parse_highlight(payload: Any) -> Highlight:
    snippets = payload.get("snippets")
    snippet = payload.get("snippet")
    return Highlight(
        field=str(payload.get("field", "")),
        indices=[int(index) for index in payload.get("indices") or []],
        matched_tokens=RawJSON.from_value(payload.get("matched_tokens")),
        snippet=None if snippet is None else str(snippet),
        snippets=None if snippets is None else [str(item) for item in snippets],
    )


def parse_search_hit(payload: Any) -> SearchHit:
    return SearchHit(
        document=RawJSON.from_value(payload.get("document")),
        highlights=[parse_highlight(item) for item in payload.get("highlights") or []],
        text_match=int(payload.get("text_match", 0)),
    )


def parse_search(body: bytes) -> SearchResult:
    payload = _object(parse_body(body), "search")
    try:
        return SearchResult(
            found=int(payload.get("found", 0)),
            out_of=int(payload.get("out_of", 0)),
            page=int(payload.get("page", 0)),
            search_time_ms=int(payload.get("search_time_ms", 0)),
            hits=[parse_search_hit(hit) for hit in payload.get("hits") or []],
            facet_counts=list(payload.get("facet_counts") or []),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise DecodeError(f"invalid search response: {payload}") from exc

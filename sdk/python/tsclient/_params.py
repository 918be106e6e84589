"""Request builders for the Typesense client."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import CreateFieldData, SearchParameters


def build_collection_body(
    name: str, default_sorting_field: str, fields: Iterable[CreateFieldData]
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "name": name,
        "fields": [
            {
                "name": f.name,
                "type": f.type,
                "facet": f.facet,
                "index": not f.no_index,
                "infix": f.infix,
            }
            for f in fields
        ],
    }
    if default_sorting_field:
        body["default_sorting_field"] = default_sorting_field
    return body


def build_delete_query(filter_by: str, batch_size: int) -> dict[str, list[str]]:
    values = {"filter_by": [filter_by]}
    if batch_size != 0:
        values["batch_size"] = [str(int(batch_size))]
    return values


def build_search_query(params: SearchParameters) -> dict[str, list[str]]:
    """Builds the query string values of a search request.

    `q`, `query_by` and the four boolean knobs are always sent; everything
    else only when set.
    """
    values: dict[str, list[str]] = {
        "q": [params.query],
        "query_by": [_joined(params.query_by)],
        "prefix": [_flag(not params.no_prefix)],
        "prioritize_exact_match": [_flag(not params.no_prioritize_exact_match)],
        "enable_overrides": [_flag(not params.disable_overrides)],
        "pre_segmented_query": [_flag(not params.no_pre_segmented_query)],
    }

    def put(key: str, value: Any) -> None:
        values[key] = [str(value)]

    if params.query_by_weights:
        put("query_by_weights", _joined(int(w) for w in params.query_by_weights))
    if params.filter_by:
        put("filter_by", params.filter_by)
    if params.sort_by:
        put("sort_by", _joined(params.sort_by))
    if params.facet_by:
        put("facet_by", _joined(params.facet_by))
    if params.max_facet_values != 0:
        put("max_facet_values", int(params.max_facet_values))
    if params.facet_query:
        put("facet_query", params.facet_query)
    if params.page is not None:
        put("page", int(params.page))
    if params.per_page is not None:
        put("per_page", int(params.per_page))
    if params.group_by:
        put("group_by", _joined(params.group_by))
    if params.group_limit != 0:
        put("group_limit", int(params.group_limit))
    if params.include_fields:
        put("include_fields", _joined(params.include_fields))
    if params.exclude_fields:
        put("exclude_fields", _joined(params.exclude_fields))
    if params.highlight_fields:
        put("highlight_fields", _joined(params.highlight_fields))
    if params.highlight_full_fields:
        put("highlight_full_fields", _joined(params.highlight_full_fields))
    if params.highlight_affix_num_tokens != 0:
        put("highlight_affix_num_tokens", int(params.highlight_affix_num_tokens))
    if params.highlight_start_tag is not None:
        put("highlight_start_tag", params.highlight_start_tag)
    if params.highlight_end_tag is not None:
        put("highlight_end_tag", params.highlight_end_tag)
    if params.snippet_threshold != 0:
        put("snippet_threshold", int(params.snippet_threshold))
    if params.num_typos is not None:
        put("num_typos", int(params.num_typos))
    if params.typo_tokens_threshold is not None:
        put("typo_tokens_threshold", int(params.typo_tokens_threshold))
    if params.drop_tokens_threshold is not None:
        put("drop_tokens_threshold", int(params.drop_tokens_threshold))
    if params.pinned_hits:
        put("pinned_hits", _joined(params.pinned_hits))
    if params.hidden_hits:
        put("hidden_hits", _joined(params.hidden_hits))
    if params.limit_hits > 0:
        put("limit_hits", int(params.limit_hits))
    return values


def _joined(items: Iterable[Any]) -> str:
    return ",".join(str(item) for item in items)


def _flag(value: bool) -> str:
    return "true" if value else "false"

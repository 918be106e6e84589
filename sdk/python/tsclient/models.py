"""SDK data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .rawjson import RawJSON, Target


@dataclass(frozen=True)
class Field:
    """A collection field as the server describes it."""

    name: str
    type: str
    facet: bool = False
    index: bool = True
    infix: bool = False


@dataclass(frozen=True)
class CreateFieldData:
    """Field definition passed to `create_collection`.

    `no_index` is the inverse of the server's `index` flag so that every
    field is indexed unless asked otherwise.
    """

    name: str
    type: str
    facet: bool = False
    no_index: bool = False
    infix: bool = False


@dataclass(frozen=True)
class Collection:
    """Represents collection metadata returned by the server."""

    name: str
    fields: list[Field] = field(default_factory=list)
    default_sorting_field: str = ""
    num_documents: int = 0


@dataclass
class SearchParameters:
    """Parameters of a search request.

    Unset parameters are left out of the request so the server default
    applies. Boolean knobs are named for the non-default behaviour
    (`no_prefix`, `disable_overrides`, ...) so that a bare instance matches
    the server's own defaults.
    """

    # Text to search for.
    query: str = ""
    # Fields to query against.
    query_by: list[str] = field(default_factory=list)
    # Relative weight of each `query_by` field.
    query_by_weights: list[int] = field(default_factory=list)
    # Treat the last query word as a whole word instead of a prefix.
    no_prefix: bool = False

    filter_by: str = ""
    # Up to 3 sort expressions, e.g. "rating:desc".
    sort_by: list[str] = field(default_factory=list)

    facet_by: list[str] = field(default_factory=list)
    max_facet_values: int = 0
    facet_query: str = ""

    no_prioritize_exact_match: bool = False

    page: int | None = None
    per_page: int | None = None

    # Grouping fields must be faceted.
    group_by: list[str] = field(default_factory=list)
    group_limit: int = 0

    include_fields: list[str] = field(default_factory=list)
    exclude_fields: list[str] = field(default_factory=list)

    highlight_fields: list[str] = field(default_factory=list)
    highlight_full_fields: list[str] = field(default_factory=list)
    highlight_affix_num_tokens: int = 0
    highlight_start_tag: str | None = None
    highlight_end_tag: str | None = None
    snippet_threshold: int = 0

    # Maximum typos tolerated (0, 1 or 2).
    num_typos: int | None = None
    # 0 disables typo tolerance.
    typo_tokens_threshold: int | None = None
    # 0 disables dropping of tokens.
    drop_tokens_threshold: int | None = None

    # "record_id:position" entries, e.g. "123:1".
    pinned_hits: list[str] = field(default_factory=list)
    hidden_hits: list[str] = field(default_factory=list)
    disable_overrides: bool = False
    # Split the query on spaces only instead of using the tokenizer.
    no_pre_segmented_query: bool = False

    # page * per_page must stay below this for results to be returned.
    limit_hits: int = 0


@dataclass(frozen=True)
class Highlight:
    """Highlight span of one field in a search hit.

    `snippet` is set for scalar string fields and `snippets` for string
    array fields.
    """

    field: str
    indices: list[int] = field(default_factory=list)
    matched_tokens: RawJSON = field(default_factory=RawJSON)
    snippet: str | None = None
    snippets: list[str] | None = None


@dataclass(frozen=True)
class SearchHit:
    """A single matched document.

    The document is kept as raw JSON; call :meth:`decode` or :meth:`to_dict`
    to read it.
    """

    document: RawJSON
    highlights: list[Highlight] = field(default_factory=list)
    text_match: int = 0

    def decode(self, into: Target = None) -> Any:
        return self.document.decode(into)

    def to_dict(self) -> dict[str, Any]:
        return self.document.decode(dict) or {}


@dataclass(frozen=True)
class SearchResult:
    """Represents a search response."""

    found: int
    out_of: int
    page: int
    # Server-side latency in milliseconds.
    search_time_ms: int
    hits: list[SearchHit] = field(default_factory=list)
    facet_counts: list[dict[str, Any]] = field(default_factory=list)

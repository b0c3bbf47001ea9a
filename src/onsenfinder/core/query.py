"""Query builder — turns the optional search term into an Elasticsearch query clause."""

from __future__ import annotations

from typing import Any

SEARCH_FIELDS: tuple[str, ...] = ("name", "address")


def build_query(term: str | None) -> dict[str, Any]:
    """Build the ``query`` clause for a search.

    An absent or empty term lists every document, so an empty search box
    returns the full listing. Any other term becomes an OR-style relevance
    match over ``name`` and ``address``; it is passed through unescaped.

    Args:
        term: The free-text search term, if any.

    Returns:
        A query DSL clause.
    """
    if not term:
        return {"match_all": {}}
    return {"multi_match": {"query": term, "fields": list(SEARCH_FIELDS)}}

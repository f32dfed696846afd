"""Substring search over a catalog snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from models import Paper, PaperRequest, SearchResult


def search(catalog: Mapping[str, Paper], query: str, max_results: int) -> SearchResult:
    """Return papers whose name, title or author contains ``query``.

    Matching is case-insensitive and keeps the catalog's iteration order.
    Entries that are not complete papers are skipped. At most ``max_results``
    papers are returned; ``capped`` tells whether any further match existed.
    """
    needle = query.casefold()
    found: list[Paper] = []

    for name, paper in catalog.items():
        if not paper.is_searchable:
            continue
        if not (
            needle in name.casefold()
            or needle in paper.title.casefold()
            or needle in paper.author.casefold()
        ):
            continue
        if len(found) >= max_results:
            return SearchResult(papers=tuple(found), capped=True)
        found.append(paper)

    return SearchResult(papers=tuple(found), capped=False)


def search_by_number(
    catalog: Mapping[str, Paper],
    requests: Iterable[PaperRequest],
    max_results: int,
) -> SearchResult:
    """Look up inline paper references by name only.

    Results of all requests share one cap and are returned in request order.
    """
    found: list[Paper] = []

    for request in requests:
        needle = request.pattern.casefold()
        for name, paper in catalog.items():
            if not paper.is_searchable or needle not in name.casefold():
                continue
            if len(found) >= max_results:
                return SearchResult(papers=tuple(found), capped=True)
            found.append(paper)

    return SearchResult(papers=tuple(found), capped=False)

"""Substring search over the flat search index."""

from collections.abc import Iterable

from runbooks_knowledgebase.models import SearchEntry

MAX_RESULTS = 10


def search_entries(entries: Iterable[SearchEntry], query: str, limit: int = MAX_RESULTS) -> list[SearchEntry]:
    """Filter search entries whose title or keywords contain the query.

    Matching is case-insensitive and keeps index order; there is no ranking.

    Args:
        entries: Search entries as written by the indexer.
        query: Text typed by the user.
        limit: Maximum number of results.

    Returns:
        Up to ``limit`` matching entries, empty for an empty query.
    """
    if not query:
        return []

    needle = query.lower()
    results: list[SearchEntry] = []
    for entry in entries:
        if needle in entry.title.lower() or needle in entry.keywords.lower():
            results.append(entry)
            if len(results) >= limit:
                break
    return results

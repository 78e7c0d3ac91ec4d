"""Case-insensitive substring search shared by the list endpoints."""

from typing import Optional


def normalize_query(query: Optional[str]) -> str:
    if not query:
        return ""
    return query.strip().lower()


def matches_query(query: Optional[str], *fields: Optional[str]) -> bool:
    """True when any field contains query (ignoring case); an empty query matches all."""
    needle = normalize_query(query)
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in fields)

from __future__ import annotations

from typing import Iterable, List

TAG_QUERY_PREFIX = "tag:"


def host_matches(entry, query: str) -> bool:
    """Return True if a host entry matches the search query.

    The search checks the entry's name, hostname, user and tags in a
    case-insensitive manner. A query of the form ``tag:<label>`` only
    matches entries carrying that exact tag.
    """
    if not query or not query.strip():
        return True
    text = query.strip().lower()
    tags = [str(tag).lower() for tag in (getattr(entry, "tags", None) or [])]
    if text.startswith(TAG_QUERY_PREFIX):
        wanted = text[len(TAG_QUERY_PREFIX):].strip()
        return not wanted or wanted in tags
    fields = [
        getattr(entry, "name", ""),
        getattr(entry, "hostname", ""),
        getattr(entry, "user", ""),
    ]
    if any(text in (field or "").lower() for field in fields):
        return True
    return any(text in tag for tag in tags)


def filter_hosts(entries: Iterable, query: str) -> List:
    return [entry for entry in entries if host_matches(entry, query)]


def collect_tags(entries: Iterable) -> List[str]:
    """Return the sorted set of tags used by *entries*."""
    tags = set()
    for entry in entries:
        tags.update(getattr(entry, "tags", None) or [])
    return sorted(tags, key=str.casefold)


__all__ = ["host_matches", "filter_hosts", "collect_tags"]

"""
Bookmark extraction from Linkding webhook payloads.

Linkding's webhook body is not a stable schema: depending on version and how
the webhook was configured, the bookmark arrives at the top level or nested
under `data`, `bookmark` or `object`. Each location is probed in order and the
first one holding a usable `url` wins.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

DEFAULT_TITLE = "Untitled"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Bookmark:
    url: str
    title: str = DEFAULT_TITLE
    description: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    date_added: str = field(default_factory=lambda: now_utc().isoformat())


def _has_url(candidate: Any) -> bool:
    if not isinstance(candidate, Mapping):
        return False
    url = candidate.get("url")
    return isinstance(url, str) and url.strip() != ""


def _top_level(payload: Mapping) -> Optional[Mapping]:
    return payload if _has_url(payload) else None


def _nested(key: str) -> Callable[[Mapping], Optional[Mapping]]:
    def match(payload: Mapping) -> Optional[Mapping]:
        candidate = payload.get(key)
        return candidate if _has_url(candidate) else None

    match.__name__ = f"_nested_{key}"
    return match


CANDIDATE_MATCHERS: tuple[Callable[[Mapping], Optional[Mapping]], ...] = (
    _top_level,
    _nested("data"),
    _nested("bookmark"),
    _nested("object"),  # event-style webhooks
)


def _first_set(source: Mapping, *keys: str) -> Any:
    """First value that is set. Falsy scalars count as unset; empty containers do not."""
    for key in keys:
        value = source.get(key)
        if isinstance(value, (list, tuple, dict)) or value:
            return value
    return None


def _as_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return ()
    return tuple(str(tag) for tag in value if tag is not None)


def find_bookmark_source(payload: Any) -> Optional[Mapping]:
    """Return the sub-object of `payload` that holds the bookmark, if any."""
    if not isinstance(payload, Mapping):
        return None
    for matcher in CANDIDATE_MATCHERS:
        candidate = matcher(payload)
        if candidate is not None:
            return candidate
    return None


def extract_bookmark(payload: Any) -> Optional[Bookmark]:
    """Normalize a webhook payload into a Bookmark, or None when it has none."""
    source = find_bookmark_source(payload)
    if source is None:
        return None

    title = _first_set(source, "title", "website_title")
    description = _first_set(source, "description", "website_description")
    date_added = _first_set(source, "date_added", "created")

    return Bookmark(
        url=source["url"],
        title=str(title) if title is not None else DEFAULT_TITLE,
        description=str(description) if description is not None else "",
        tags=_as_tags(_first_set(source, "tag_names", "tags")),
        date_added=str(date_added) if date_added is not None else now_utc().isoformat(),
    )

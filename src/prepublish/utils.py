"""Utility helpers for caption text and hashtags."""

from __future__ import annotations

import re
from typing import Iterable, List

ELLIPSIS = "..."

_HASHTAG_RE = re.compile(r"(?<![\w#])#(\w+)", re.UNICODE)
_MENTION_RE = re.compile(r"(?<![\w@])@([\w.]+)", re.UNICODE)


def normalize_hashtag(tag: str) -> str:
    """Lowercased tag with a single leading '#' removed."""
    return tag.strip().lower().removeprefix("#")


def is_banned(tag: str, banned: Iterable[str]) -> bool:
    return normalize_hashtag(tag) in banned


def truncate_to_limit(content: str, limit: int) -> str:
    if len(content) <= limit:
        return content
    if limit <= len(ELLIPSIS):
        return content[:limit]
    return content[: limit - len(ELLIPSIS)] + ELLIPSIS


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        ordered.append(item)
    return ordered


def extract_hashtags(text: str) -> List[str]:
    return _unique(f"#{m.group(1)}" for m in _HASHTAG_RE.finditer(text or ""))


def extract_mentions(text: str) -> List[str]:
    return _unique(f"@{m.group(1).rstrip('.')}" for m in _MENTION_RE.finditer(text or ""))

"""Loads post descriptions from YAML or JSON files into validation contexts."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .limits import EXTRA_PLATFORMS, PLATFORMS
from .types import MEDIA_TYPES, InvalidPostError, MediaInfo, ValidationContext
from .utils import extract_hashtags, extract_mentions

KNOWN_PLATFORMS = set(PLATFORMS) | set(EXTRA_PLATFORMS)


def _parse_media(index: int, raw: Any) -> MediaInfo:
    if not isinstance(raw, dict):
        raise InvalidPostError(f"media[{index}] must be a mapping")
    media_type = str(raw.get("type", "")).lower()
    if media_type not in MEDIA_TYPES:
        raise InvalidPostError(f"media[{index}] has unknown type: {raw.get('type')!r}")
    if "width" not in raw or "height" not in raw:
        raise InvalidPostError(f"media[{index}] requires width and height")

    duration = raw.get("duration")
    try:
        return MediaInfo(
            id=str(raw.get("id") or f"media-{index + 1}"),
            type=media_type,
            width=int(raw["width"]),
            height=int(raw["height"]),
            size=int(raw.get("size", 0)),
            duration=float(duration) if duration is not None else None,
            mime_type=str(raw.get("mime_type") or raw.get("mimeType") or ""),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidPostError(f"media[{index}] has a non-numeric field: {exc}") from exc


def _parse_platforms(raw: Any) -> List[str]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        raise InvalidPostError("platforms must be a non-empty list")
    platforms: List[str] = []
    for item in raw:
        platform = str(item).strip().lower()
        if platform not in KNOWN_PLATFORMS:
            raise InvalidPostError(f"Unknown platform: {item}")
        if platform not in platforms:
            platforms.append(platform)
    return platforms


def _parse_tags(key: str, raw: Any, fallback: List[str]) -> List[str]:
    if raw is None:
        return fallback
    # A single tag written without list syntax.
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise InvalidPostError(f"{key} must be a list of strings")
    return list(raw)


def _parse_scheduled_at(raw: Any) -> datetime | None:
    if raw is None or isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError as exc:
        raise InvalidPostError(f"scheduled_at is not ISO-8601: {raw}") from exc


def context_from_dict(data: Dict[str, Any]) -> ValidationContext:
    caption = str(data.get("caption") or "")
    post_types = data.get("post_types") or data.get("postTypes") or {}
    if not isinstance(post_types, dict):
        raise InvalidPostError("post_types must map platform to post type")

    media = [_parse_media(idx, item) for idx, item in enumerate(data.get("media") or [])]

    return ValidationContext(
        caption=caption,
        hashtags=_parse_tags("hashtags", data.get("hashtags"), extract_hashtags(caption)),
        mentions=_parse_tags("mentions", data.get("mentions"), extract_mentions(caption)),
        media=media,
        platforms=_parse_platforms(data.get("platforms")),
        post_types={str(k).lower(): str(v).lower() for k, v in post_types.items()},
        scheduled_at=_parse_scheduled_at(data.get("scheduled_at") or data.get("scheduledAt")),
    )


def load_post(path: str) -> ValidationContext:
    post_path = Path(path)
    if not post_path.exists():
        raise FileNotFoundError(f"Post file not found: {post_path}")
    with post_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InvalidPostError(f"Could not parse {post_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidPostError(f"Post file must contain a mapping: {post_path}")
    return context_from_dict(data)

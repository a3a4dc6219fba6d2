"""Per-platform publishing limits and the banned hashtag set."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

MB = 1024 * 1024
GB = 1024 * MB

PLATFORMS = (
    "instagram",
    "tiktok",
    "youtube",
    "facebook",
    "pinterest",
    "linkedin",
    "bluesky",
    "google_business",
)

# Validation-only entries, known to the limit table and inline helpers.
EXTRA_PLATFORMS = ("twitter",)

ALL_PLATFORMS = "all"


@dataclass(frozen=True)
class TextLimits:
    max: int
    recommended: Optional[int] = None


@dataclass(frozen=True)
class ImageLimits:
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    aspect_ratios: Tuple[str, ...] = ()
    max_size: Optional[int] = None
    formats: Tuple[str, ...] = ()
    max_files: Optional[int] = None


@dataclass(frozen=True)
class VideoLimits:
    min_duration: Optional[float] = None
    max_duration: Optional[float] = None
    aspect_ratios: Tuple[str, ...] = ()
    max_size: Optional[int] = None
    formats: Tuple[str, ...] = ()
    min_width: Optional[int] = None
    max_width: Optional[int] = None


@dataclass(frozen=True)
class PlatformLimits:
    caption: Optional[TextLimits] = None
    hashtags: Optional[TextLimits] = None
    title: Optional[TextLimits] = None
    description: Optional[TextLimits] = None
    image: Optional[ImageLimits] = None
    video: Optional[VideoLimits] = None


PLATFORM_LIMITS: Mapping[str, PlatformLimits] = MappingProxyType(
    {
        "instagram": PlatformLimits(
            caption=TextLimits(max=2200, recommended=125),
            hashtags=TextLimits(max=30, recommended=5),
            image=ImageLimits(
                min_width=320,
                max_width=1440,
                aspect_ratios=("1:1", "1.91:1", "4:5"),
                max_size=30 * MB,
                formats=("jpg", "jpeg", "png"),
            ),
            video=VideoLimits(
                min_duration=3,
                max_duration=60,  # Reels allow 90s
                max_size=100 * MB,
                formats=("mp4", "mov"),
            ),
        ),
        "tiktok": PlatformLimits(
            caption=TextLimits(max=2200, recommended=150),
            hashtags=TextLimits(max=100, recommended=5),
            video=VideoLimits(
                min_duration=1,
                max_duration=600,
                aspect_ratios=("9:16",),
                max_size=287 * MB,
                formats=("mp4", "mov", "webm"),
            ),
        ),
        "youtube": PlatformLimits(
            title=TextLimits(max=100),
            description=TextLimits(max=5000),
            video=VideoLimits(
                max_duration=12 * 60 * 60,
                max_size=256 * GB,
                formats=("mp4", "mov", "avi", "wmv", "flv", "webm"),
            ),
        ),
        "facebook": PlatformLimits(
            caption=TextLimits(max=63206),
            hashtags=TextLimits(max=30, recommended=3),
            image=ImageLimits(
                min_width=600,
                max_width=2048,
                max_size=4 * MB,
                formats=("jpg", "jpeg", "png", "gif"),
            ),
            video=VideoLimits(
                max_duration=240 * 60,
                max_size=10 * GB,
            ),
        ),
        "pinterest": PlatformLimits(
            description=TextLimits(max=500),
            image=ImageLimits(
                aspect_ratios=("2:3",),
                min_width=600,
                formats=("jpg", "jpeg", "png"),
            ),
        ),
        "linkedin": PlatformLimits(
            caption=TextLimits(max=3000, recommended=150),
            hashtags=TextLimits(max=5, recommended=3),
            image=ImageLimits(
                min_width=552,
                max_width=2048,
                max_size=8 * MB,
                formats=("jpg", "jpeg", "png", "gif"),
            ),
            video=VideoLimits(
                max_duration=10 * 60,
                max_size=5 * GB,
            ),
        ),
        "bluesky": PlatformLimits(
            caption=TextLimits(max=300),
            # No traditional hashtags on Bluesky.
            hashtags=TextLimits(max=0),
            image=ImageLimits(
                max_files=4,
                max_size=1 * MB,
                formats=("jpg", "jpeg", "png", "webp"),
            ),
        ),
        "twitter": PlatformLimits(
            caption=TextLimits(max=280, recommended=100),
            hashtags=TextLimits(max=10, recommended=2),
            image=ImageLimits(
                max_files=4,
                max_size=5 * MB,
                formats=("jpg", "jpeg", "png", "gif", "webp"),
            ),
            video=VideoLimits(
                max_duration=140,
                max_size=512 * MB,
                formats=("mp4", "mov"),
            ),
        ),
        "google_business": PlatformLimits(
            caption=TextLimits(max=1500),
            image=ImageLimits(
                min_width=400,
                max_width=4096,
                max_size=5 * MB,
                formats=("jpg", "jpeg", "png"),
            ),
            video=VideoLimits(
                min_duration=1,
                max_duration=30,
                max_size=75 * MB,
                formats=("mp4", "mov"),
            ),
        ),
    }
)

# Sample of shadowban-prone tags, lowercase and without the leading '#'.
BANNED_HASHTAGS = frozenset(
    {
        "followforfollow",
        "f4f",
        "like4like",
        "l4l",
        "follow4follow",
    }
)


def get_limits(platform: str) -> PlatformLimits:
    return PLATFORM_LIMITS[platform]


def caption_limit(platform: str) -> float:
    caption = PLATFORM_LIMITS[platform].caption
    return caption.max if caption else math.inf


def hashtag_limit(platform: str) -> float:
    hashtags = PLATFORM_LIMITS[platform].hashtags
    return hashtags.max if hashtags else math.inf


def limits_as_dict(platform: str) -> Dict[str, Any]:
    """Plain nested dict of a platform's limits with empty sections dropped."""
    raw = asdict(PLATFORM_LIMITS[platform])
    cleaned: Dict[str, Any] = {}
    for section, values in raw.items():
        if values is None:
            continue
        cleaned[section] = {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in values.items()
            if value not in (None, ())
        }
    return cleaned

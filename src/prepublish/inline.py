"""Live-typing status helpers.

These read ``PLATFORM_LIMITS`` directly instead of going through the rule
registry, since they run on every keystroke.
"""

from __future__ import annotations

import math
from typing import Sequence

from .limits import PLATFORM_LIMITS
from .types import (
    ERROR,
    OK,
    WARNING,
    CharacterCountResult,
    HashtagCountResult,
    MediaAspectResult,
)

WARNING_THRESHOLD = 0.8

_NAMED_RATIOS = (
    (1.0, 0.05, "1:1"),
    (1.91, 0.1, "1.91:1"),
    (0.8, 0.05, "4:5"),
    (0.5625, 0.05, "9:16"),
    (1.778, 0.05, "16:9"),
    (0.667, 0.05, "2:3"),
)


def format_aspect_ratio(ratio: float) -> str:
    for target, tolerance, name in _NAMED_RATIOS:
        if abs(ratio - target) < tolerance:
            return name
    return f"{ratio:.2f}:1"


def get_character_status(text: str, platform: str) -> CharacterCountResult:
    caption = PLATFORM_LIMITS[platform].caption
    count = len(text)
    if caption is None:
        return CharacterCountResult(
            count=count,
            limit=math.inf,
            status=OK,
            remaining=math.inf,
            percentage=0,
        )

    remaining = caption.max - count
    percentage = count / caption.max * 100

    status = OK
    if count > caption.max:
        status = ERROR
    elif caption.recommended and count > caption.recommended:
        status = WARNING
    elif percentage > WARNING_THRESHOLD * 100:
        status = WARNING

    return CharacterCountResult(
        count=count,
        limit=caption.max,
        recommended=caption.recommended,
        status=status,
        remaining=remaining,
        percentage=min(percentage, 100),
    )


def get_hashtag_status(hashtags: Sequence[str], platform: str) -> HashtagCountResult:
    limits = PLATFORM_LIMITS[platform].hashtags
    count = len(hashtags)
    if limits is None:
        return HashtagCountResult(count=count, limit=math.inf, status=OK)

    status = OK
    message = None
    if count > limits.max:
        status = ERROR
        message = f"Max {limits.max} hashtags allowed"
    elif limits.recommended and count > limits.recommended:
        status = WARNING
        message = f"{limits.recommended} hashtags recommended for best engagement"
    elif limits.max > 0 and count > limits.max * WARNING_THRESHOLD:
        status = WARNING
        message = f"Approaching limit of {limits.max}"

    return HashtagCountResult(
        count=count,
        limit=limits.max,
        recommended=limits.recommended,
        status=status,
        message=message,
    )


def get_media_aspect_status(
    width: int,
    height: int,
    platform: str,
    media_type: str = "image",
) -> MediaAspectResult:
    """Aspect ratio feedback for an image or video about to be uploaded.

    Only Instagram, TikTok and Pinterest have an opinion; every other
    platform reports the ratio as optimal. ``media_type`` is accepted for
    callers that pass it through but does not change the windows.
    """
    if platform not in PLATFORM_LIMITS:
        raise KeyError(platform)
    if width <= 0 or height <= 0:
        return MediaAspectResult(
            ratio=0.0,
            ratio_string="invalid",
            status=ERROR,
            message=f"Invalid {media_type} dimensions ({width}x{height})",
            is_optimal=False,
        )

    ratio = width / height
    ratio_string = format_aspect_ratio(ratio)

    def optimal(message: str) -> MediaAspectResult:
        return MediaAspectResult(
            ratio=ratio,
            ratio_string=ratio_string,
            status=OK,
            message=message,
            is_optimal=True,
        )

    def not_optimal(message: str) -> MediaAspectResult:
        return MediaAspectResult(
            ratio=ratio,
            ratio_string=ratio_string,
            status=WARNING,
            message=message,
            is_optimal=False,
        )

    if platform == "instagram":
        # Wider square window than the image-aspect-instagram rule.
        is_square = abs(ratio - 1) < 0.05
        is_landscape = abs(ratio - 1.91) < 0.15
        is_portrait = abs(ratio - 0.8) < 0.1
        if is_square or is_landscape or is_portrait:
            return optimal(f"Optimal: {ratio_string}")
        return not_optimal(f"{ratio_string} may be cropped. Use 1:1, 4:5, or 1.91:1")

    if platform == "tiktok":
        if abs(ratio - 0.5625) < 0.05:
            return optimal(f"Optimal: {ratio_string} (9:16)")
        return not_optimal(f"{ratio_string} not optimal. Use 9:16 for TikTok")

    if platform == "pinterest":
        if abs(ratio - 0.667) < 0.1:
            return optimal(f"Optimal: {ratio_string} (2:3)")
        return not_optimal(f"{ratio_string} not optimal. Use 2:3 for Pinterest")

    return optimal(f"Aspect ratio: {ratio_string}")

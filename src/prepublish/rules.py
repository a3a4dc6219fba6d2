"""Pre-publish validation rules.

Each rule is a plain record: an id that callers key results by, the
platform it is scoped to (or ``"all"``), a pure ``check`` and an optional
``auto_fix``. Thresholds come from ``PLATFORM_LIMITS``; the same kind of
check keeps one rule per platform because wording and limits differ.
"""

from __future__ import annotations

from functools import partial
from typing import AbstractSet, Iterable, List, Optional

from .limits import ALL_PLATFORMS, BANNED_HASHTAGS, PLATFORM_LIMITS
from .types import (
    ERROR,
    PASS,
    WARNING,
    AutoFixResult,
    ValidationContext,
    ValidationResult,
    ValidationRule,
)
from .utils import is_banned, normalize_hashtag, truncate_to_limit

RECOMMENDED_IMAGE_WIDTH = 1440
REEL_MIN_DURATION = 3
REEL_MAX_DURATION = 90
STORY_MAX_DURATION = 15
CAROUSEL_MIN_ITEMS = 2
CAROUSEL_MAX_ITEMS = 10
DEFAULT_MAX_IMAGES = 4


# --- Caption ---------------------------------------------------------------


def _caption_too_long(ctx: ValidationContext, limit: int, message: str) -> ValidationResult:
    length = len(ctx.caption)
    return ValidationResult(
        status=ERROR,
        message=message.format(length=length, limit=limit),
        details=f"Remove {length - limit} characters",
        can_auto_fix=True,
    )


def _check_caption_instagram(ctx: ValidationContext) -> ValidationResult:
    caption = PLATFORM_LIMITS["instagram"].caption
    length = len(ctx.caption)
    if length > caption.max:
        return _caption_too_long(ctx, caption.max, "Caption too long ({length}/{limit})")
    if length > caption.recommended:
        return ValidationResult(
            status=WARNING,
            message=(
                f"Caption may be too long for engagement "
                f"({length}/{caption.recommended} recommended)"
            ),
        )
    return ValidationResult(status=PASS, message=f"Caption length ({length}/{caption.max})")


def _check_caption_linkedin(ctx: ValidationContext) -> ValidationResult:
    caption = PLATFORM_LIMITS["linkedin"].caption
    length = len(ctx.caption)
    if length > caption.max:
        return _caption_too_long(ctx, caption.max, "Caption too long ({length}/{limit})")
    if length > caption.recommended:
        return ValidationResult(status=WARNING, message="Caption may be too long for engagement")
    return ValidationResult(status=PASS, message=f"Caption length ({length}/{caption.max})")


def _check_caption_bluesky(ctx: ValidationContext) -> ValidationResult:
    limit = PLATFORM_LIMITS["bluesky"].caption.max
    length = len(ctx.caption)
    if length > limit:
        return _caption_too_long(ctx, limit, "Bluesky has {limit} character limit (found {length})")
    return ValidationResult(status=PASS, message=f"Caption length ({length}/{limit})")


def _truncate_caption(platform: str, ctx: ValidationContext) -> Optional[AutoFixResult]:
    limit = PLATFORM_LIMITS[platform].caption.max
    if len(ctx.caption) <= limit:
        return None
    return AutoFixResult(
        fixed=True,
        message="Caption truncated to fit limit",
        new_value=truncate_to_limit(ctx.caption, limit),
        target="caption",
    )


# --- Hashtags --------------------------------------------------------------


def _check_hashtags_instagram(ctx: ValidationContext) -> ValidationResult:
    limit = PLATFORM_LIMITS["instagram"].hashtags.max
    count = len(ctx.hashtags)
    if count > limit:
        return ValidationResult(
            status=ERROR,
            message=f"Too many hashtags ({count}/{limit})",
            can_auto_fix=True,
        )
    return ValidationResult(status=PASS, message=f"Hashtags ({count}/{limit})")


def _check_hashtags_linkedin(ctx: ValidationContext) -> ValidationResult:
    limit = PLATFORM_LIMITS["linkedin"].hashtags.max
    count = len(ctx.hashtags)
    if count > limit:
        return ValidationResult(
            status=ERROR,
            message=f"LinkedIn allows max {limit} hashtags (found {count})",
            details="Using too many hashtags on LinkedIn reduces engagement",
            can_auto_fix=True,
        )
    return ValidationResult(status=PASS, message=f"Hashtags ({count}/{limit})")


def _trim_hashtags(platform: str, ctx: ValidationContext) -> Optional[AutoFixResult]:
    limit = PLATFORM_LIMITS[platform].hashtags.max
    if len(ctx.hashtags) <= limit:
        return None
    return AutoFixResult(
        fixed=True,
        message=f"Removed {len(ctx.hashtags) - limit} hashtags",
        new_value=list(ctx.hashtags[:limit]),
        target="hashtags",
    )


def _check_banned_hashtags(banned: AbstractSet[str], ctx: ValidationContext) -> ValidationResult:
    found = [tag for tag in ctx.hashtags if is_banned(tag, banned)]
    if found:
        return ValidationResult(
            status=ERROR,
            message=f"Banned hashtags detected: {', '.join(found)}",
            details="These hashtags may result in shadowban",
            can_auto_fix=True,
        )
    return ValidationResult(status=PASS, message="No banned hashtags")


def _remove_banned_hashtags(
    banned: AbstractSet[str], ctx: ValidationContext
) -> Optional[AutoFixResult]:
    kept = [tag for tag in ctx.hashtags if not is_banned(tag, banned)]
    removed = len(ctx.hashtags) - len(kept)
    if not removed:
        return None
    return AutoFixResult(
        fixed=True,
        message=f"Removed {removed} banned hashtags",
        new_value=kept,
        target="hashtags",
    )


# --- Media -----------------------------------------------------------------


def _check_media_dimensions(ctx: ValidationContext) -> ValidationResult:
    invalid = [m for m in ctx.media if not m.has_dimensions]
    if invalid:
        return ValidationResult(
            status=ERROR,
            message="Media has invalid dimensions",
            details=", ".join(f"{m.id}: {m.width}x{m.height}" for m in invalid),
        )
    return ValidationResult(status=PASS, message="Media dimensions valid")


def _check_image_aspect_instagram(ctx: ValidationContext) -> ValidationResult:
    images = ctx.images()
    if not images:
        return ValidationResult(status=PASS, message="No images to validate")

    issues: List[str] = []
    for img in images:
        # Reported by media-dimensions.
        if not img.has_dimensions:
            continue
        ratio = img.aspect_ratio
        is_square = abs(ratio - 1) < 0.01
        is_landscape = abs(ratio - 1.91) < 0.1
        is_portrait = abs(ratio - 0.8) < 0.1
        if not (is_square or is_landscape or is_portrait):
            issues.append(f"{img.id}: aspect ratio {ratio:.2f} not optimal")

    if issues:
        return ValidationResult(
            status=WARNING,
            message="Image aspect ratio may be cropped",
            details=", ".join(issues),
            can_auto_fix=False,
        )
    return ValidationResult(status=PASS, message="Image aspect ratio (1:1)")


def _check_image_resolution_instagram(ctx: ValidationContext) -> ValidationResult:
    images = ctx.images()
    if not images:
        return ValidationResult(status=PASS, message="No images to validate")

    min_width = PLATFORM_LIMITS["instagram"].image.min_width
    for img in images:
        if img.width < min_width:
            return ValidationResult(
                status=ERROR,
                message=f"Image too small ({img.width}px, min: {min_width}px)",
                can_auto_fix=False,
            )
        if img.width < RECOMMENDED_IMAGE_WIDTH:
            return ValidationResult(
                status=WARNING,
                message=f"Image resolution {img.width}px (recommended: {RECOMMENDED_IMAGE_WIDTH}px)",
                can_auto_fix=True,
            )
    return ValidationResult(status=PASS, message="Image resolution optimal")


def _check_image_count_bluesky(ctx: ValidationContext) -> ValidationResult:
    images = ctx.images()
    max_files = PLATFORM_LIMITS["bluesky"].image.max_files or DEFAULT_MAX_IMAGES
    if len(images) > max_files:
        return ValidationResult(
            status=ERROR,
            message=f"Bluesky allows max {max_files} images (found {len(images)})",
        )
    return ValidationResult(status=PASS, message=f"Images ({len(images)}/{max_files})")


def _check_carousel_instagram(ctx: ValidationContext) -> ValidationResult:
    count = len(ctx.media)
    if count < CAROUSEL_MIN_ITEMS:
        return ValidationResult(
            status=WARNING,
            message=f"Carousels should have at least {CAROUSEL_MIN_ITEMS} items",
        )
    if count > CAROUSEL_MAX_ITEMS:
        return ValidationResult(
            status=ERROR,
            message=f"Instagram carousels allow max {CAROUSEL_MAX_ITEMS} items (found {count})",
        )
    return ValidationResult(status=PASS, message=f"Carousel items ({count}/{CAROUSEL_MAX_ITEMS})")


# --- Video -----------------------------------------------------------------


def _seconds(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def _check_video_duration_tiktok(ctx: ValidationContext) -> ValidationResult:
    videos = ctx.videos()
    if not videos:
        return ValidationResult(status=PASS, message="No videos to validate")

    limits = PLATFORM_LIMITS["tiktok"].video
    for video in videos:
        # Unknown duration is skipped, not failed.
        if not video.duration:
            continue
        if video.duration < limits.min_duration:
            return ValidationResult(
                status=ERROR,
                message=f"Video too short ({_seconds(video.duration)}s, min: {_seconds(limits.min_duration)}s)",
            )
        if video.duration > limits.max_duration:
            return ValidationResult(
                status=ERROR,
                message=f"Video too long ({_seconds(video.duration)}s, max: {_seconds(limits.max_duration)}s)",
                can_auto_fix=True,
            )
    return ValidationResult(status=PASS, message="Video duration within limits")


def _check_video_duration_reel(ctx: ValidationContext) -> ValidationResult:
    videos = ctx.videos()
    if not videos:
        return ValidationResult(status=PASS, message="No videos to validate")

    for video in videos:
        if not video.duration:
            continue
        if video.duration > REEL_MAX_DURATION:
            return ValidationResult(
                status=ERROR,
                message=f"Reel too long ({_seconds(video.duration)}s, max: {REEL_MAX_DURATION}s)",
            )
        if video.duration < REEL_MIN_DURATION:
            return ValidationResult(
                status=ERROR,
                message=f"Reel too short ({_seconds(video.duration)}s, min: {REEL_MIN_DURATION}s)",
            )
    return ValidationResult(status=PASS, message="Reel duration valid")


def _check_video_duration_story(ctx: ValidationContext) -> ValidationResult:
    videos = ctx.videos()
    if not videos:
        return ValidationResult(status=PASS, message="No videos to validate")

    for video in videos:
        if video.duration and video.duration > STORY_MAX_DURATION:
            return ValidationResult(
                status=WARNING,
                message=(
                    f"Story video is long ({_seconds(video.duration)}s, "
                    f"recommended max: {STORY_MAX_DURATION}s)"
                ),
                details=f"Story videos over {STORY_MAX_DURATION}s may be split",
            )
    return ValidationResult(status=PASS, message="Story duration valid")


# --- Registry --------------------------------------------------------------


def build_rules(banned_hashtags: Iterable[str] = BANNED_HASHTAGS) -> List[ValidationRule]:
    """Returns the rule registry in evaluation order.

    ``banned_hashtags`` are matched lowercase without their leading '#'.
    """
    banned = frozenset(normalize_hashtag(tag) for tag in banned_hashtags)
    return [
        ValidationRule(
            id="caption-length-instagram",
            platform="instagram",
            type="caption",
            check=_check_caption_instagram,
            auto_fix=partial(_truncate_caption, "instagram"),
        ),
        ValidationRule(
            id="hashtag-count-instagram",
            platform="instagram",
            type="hashtag",
            check=_check_hashtags_instagram,
            auto_fix=partial(_trim_hashtags, "instagram"),
        ),
        ValidationRule(
            id="banned-hashtags",
            platform=ALL_PLATFORMS,
            type="hashtag",
            check=partial(_check_banned_hashtags, banned),
            auto_fix=partial(_remove_banned_hashtags, banned),
        ),
        ValidationRule(
            id="image-aspect-instagram",
            platform="instagram",
            type="image",
            check=_check_image_aspect_instagram,
        ),
        ValidationRule(
            id="image-resolution-instagram",
            platform="instagram",
            type="image",
            check=_check_image_resolution_instagram,
        ),
        ValidationRule(
            id="video-duration-tiktok",
            platform="tiktok",
            type="video",
            check=_check_video_duration_tiktok,
        ),
        ValidationRule(
            id="caption-length-linkedin",
            platform="linkedin",
            type="caption",
            check=_check_caption_linkedin,
            auto_fix=partial(_truncate_caption, "linkedin"),
        ),
        ValidationRule(
            id="hashtag-count-linkedin",
            platform="linkedin",
            type="hashtag",
            check=_check_hashtags_linkedin,
            auto_fix=partial(_trim_hashtags, "linkedin"),
        ),
        ValidationRule(
            id="caption-length-bluesky",
            platform="bluesky",
            type="caption",
            check=_check_caption_bluesky,
            auto_fix=partial(_truncate_caption, "bluesky"),
        ),
        ValidationRule(
            id="image-count-bluesky",
            platform="bluesky",
            type="image",
            check=_check_image_count_bluesky,
        ),
        ValidationRule(
            id="video-duration-reel",
            platform="instagram",
            type="video",
            post_types=("reel",),
            check=_check_video_duration_reel,
        ),
        ValidationRule(
            id="video-duration-story",
            platform="instagram",
            type="video",
            post_types=("story",),
            check=_check_video_duration_story,
        ),
        ValidationRule(
            id="carousel-count-instagram",
            platform="instagram",
            type="image",
            post_types=("carousel",),
            check=_check_carousel_instagram,
        ),
        ValidationRule(
            id="media-dimensions",
            platform=ALL_PLATFORMS,
            type="image",
            check=_check_media_dimensions,
        ),
    ]


VALIDATION_RULES: List[ValidationRule] = build_rules()


def get_rule(rule_id: str, rules: Optional[Iterable[ValidationRule]] = None) -> ValidationRule:
    for rule in VALIDATION_RULES if rules is None else rules:
        if rule.id == rule_id:
            return rule
    raise KeyError(f"Unknown validation rule: {rule_id}")

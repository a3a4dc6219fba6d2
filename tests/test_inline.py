import math

import pytest

from prepublish.inline import (
    format_aspect_ratio,
    get_character_status,
    get_hashtag_status,
    get_media_aspect_status,
)
from prepublish.limits import PlatformLimits, TextLimits


def test_character_status_empty_text():
    result = get_character_status("", "instagram")
    assert result.count == 0
    assert result.limit == 2200
    assert result.status == "ok"
    assert result.remaining == 2200
    assert result.percentage == 0


def test_character_status_recommended_warning():
    result = get_character_status("a" * 1800, "instagram")
    assert result.status == "warning"
    assert result.recommended == 125


def test_character_status_over_limit_is_not_capped():
    result = get_character_status("a" * 2300, "instagram")
    assert result.status == "error"
    assert result.remaining == -100
    assert result.percentage == 100


def test_character_status_percentage_threshold_without_recommended():
    result = get_character_status("a" * 250, "bluesky")
    assert result.status == "warning"
    assert result.limit == 300
    assert result.recommended is None

    assert get_character_status("a" * 240, "bluesky").status == "ok"


def test_character_status_twitter():
    result = get_character_status("a" * 300, "twitter")
    assert result.status == "error"
    assert result.limit == 280


def test_character_status_platform_without_caption():
    result = get_character_status("Video title", "youtube")
    assert result.limit == math.inf
    assert result.remaining == math.inf
    assert result.status == "ok"
    assert result.percentage == 0


def test_character_status_unknown_platform():
    with pytest.raises(KeyError):
        get_character_status("hi", "myspace")


def test_hashtag_status_levels():
    ok = get_hashtag_status(["#one", "#two"], "instagram")
    assert ok.status == "ok"
    assert ok.count == 2
    assert ok.limit == 30
    assert ok.message is None

    warn = get_hashtag_status([f"#tag{i}" for i in range(10)], "instagram")
    assert warn.status == "warning"
    assert warn.message == "5 hashtags recommended for best engagement"

    error = get_hashtag_status([f"#tag{i}" for i in range(35)], "instagram")
    assert error.status == "error"
    assert error.message == "Max 30 hashtags allowed"


def test_hashtag_status_linkedin_and_bluesky():
    linkedin = get_hashtag_status([f"#tag{i}" for i in range(6)], "linkedin")
    assert linkedin.status == "error"
    assert linkedin.limit == 5

    assert get_hashtag_status([], "bluesky").status == "ok"
    assert get_hashtag_status(["#sky"], "bluesky").message == "Max 0 hashtags allowed"


def test_hashtag_status_approaching_limit(monkeypatch):
    monkeypatch.setattr(
        "prepublish.inline.PLATFORM_LIMITS",
        {"example": PlatformLimits(hashtags=TextLimits(max=10))},
    )
    result = get_hashtag_status([f"#t{i}" for i in range(9)], "example")
    assert result.status == "warning"
    assert result.message == "Approaching limit of 10"
    assert get_hashtag_status([f"#t{i}" for i in range(8)], "example").status == "ok"


def test_hashtag_status_without_hashtag_limits():
    result = get_hashtag_status(["#a", "#b"], "youtube")
    assert result.limit == math.inf
    assert result.status == "ok"


def test_media_aspect_instagram():
    square = get_media_aspect_status(1080, 1080, "instagram")
    assert square.status == "ok"
    assert square.is_optimal is True
    assert square.ratio_string == "1:1"

    portrait = get_media_aspect_status(1080, 1350, "instagram")
    assert portrait.status == "ok"
    assert portrait.ratio_string == "4:5"

    odd = get_media_aspect_status(1000, 600, "instagram")
    assert odd.status == "warning"
    assert odd.is_optimal is False
    assert odd.message == "1.67:1 may be cropped. Use 1:1, 4:5, or 1.91:1"


def test_media_aspect_instagram_square_window_is_wider_than_rule():
    assert get_media_aspect_status(1030, 1000, "instagram").status == "ok"


def test_media_aspect_tiktok():
    vertical = get_media_aspect_status(1080, 1920, "tiktok")
    assert vertical.status == "ok"
    assert vertical.ratio_string == "9:16"

    horizontal = get_media_aspect_status(1920, 1080, "tiktok", "video")
    assert horizontal.status == "warning"
    assert "9:16" in horizontal.message
    assert horizontal.ratio_string == "16:9"


def test_media_aspect_pinterest_and_others():
    assert get_media_aspect_status(1000, 1500, "pinterest").status == "ok"
    assert get_media_aspect_status(1000, 1000, "pinterest").status == "warning"

    other = get_media_aspect_status(1000, 600, "youtube")
    assert other.status == "ok"
    assert other.is_optimal is True
    assert other.message == "Aspect ratio: 1.67:1"


def test_media_aspect_zero_height():
    result = get_media_aspect_status(1080, 0, "instagram")
    assert result.status == "error"
    assert result.is_optimal is False
    assert result.ratio_string == "invalid"


def test_format_aspect_ratio():
    assert format_aspect_ratio(1.0) == "1:1"
    assert format_aspect_ratio(1.9) == "1.91:1"
    assert format_aspect_ratio(16 / 9) == "16:9"
    assert format_aspect_ratio(2 / 3) == "2:3"
    assert format_aspect_ratio(1.3333) == "1.33:1"

from prepublish.utils import (
    extract_hashtags,
    extract_mentions,
    is_banned,
    normalize_hashtag,
    truncate_to_limit,
)


def test_truncation_appends_ellipsis():
    content = "0123456789012345"

    truncated = truncate_to_limit(content, 10)
    assert truncated == "0123456..."
    assert truncate_to_limit("short", 10) == "short"
    assert truncate_to_limit(content, 2) == "01"


def test_normalize_hashtag_strips_single_leading_hash():
    assert normalize_hashtag("#FollowForFollow") == "followforfollow"
    assert normalize_hashtag("F4F") == "f4f"
    assert normalize_hashtag("##l4l") == "#l4l"


def test_is_banned_is_case_insensitive():
    assert is_banned("#LIKE4LIKE", {"like4like"})
    assert not is_banned("#fashion", {"like4like"})


def test_extract_hashtags_dedupes_case_insensitively():
    caption = "Golden hour #Travel #travel #photo-of-the-day and#notatag"
    assert extract_hashtags(caption) == ["#Travel", "#photo"]


def test_extract_mentions():
    assert extract_mentions("Thanks @alice and @bob.smith.") == ["@alice", "@bob.smith"]
    assert extract_mentions("") == []

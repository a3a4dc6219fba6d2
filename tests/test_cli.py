import json

import pytest

from prepublish.cli import main


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.delenv("PREPUBLISH_LOG_LEVEL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text("logging:\n  level: WARNING\n", encoding="utf-8")
    return str(path)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_validate_publishable_post(tmp_path, settings, capsys):
    post = _write(
        tmp_path,
        "post.yaml",
        "caption: Hello\nplatforms: [tiktok]\nmedia:\n"
        "  - {type: video, width: 1080, height: 1920, duration: 30}\n",
    )
    code = main(["--settings", settings, "validate", post])
    out = capsys.readouterr().out

    assert code == 0
    assert "PASS  video-duration-tiktok" in out
    assert "ready to publish" in out


def test_validate_blocked_post(tmp_path, settings, capsys):
    post = _write(tmp_path, "post.yaml", "caption: 'Hi #f4f'\nplatforms: [linkedin]\n")
    code = main(["--settings", settings, "validate", post])
    out = capsys.readouterr().out

    assert code == 1
    assert "FAIL  banned-hashtags: Banned hashtags detected: #f4f" in out
    assert "[auto-fix available]" in out
    assert "blocked" in out


def test_validate_fix_json(tmp_path, settings, capsys):
    caption = "a" * 2300
    post = _write(
        tmp_path,
        "post.json",
        json.dumps({"caption": caption, "hashtags": ["#ok", "#F4F"], "platforms": ["instagram"]}),
    )
    code = main(["--settings", settings, "validate", post, "--fix", "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == 0
    assert report["summary"]["errors"] == 0
    assert report["summary"]["can_publish"] is True
    assert report["fixed"]["hashtags"] == ["#ok"]
    assert len(report["fixed"]["caption"]) == 2200
    assert [f["target"] for f in report["fixes"]] == ["caption", "hashtags"]


def test_fail_on_warning(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("PREPUBLISH_LOG_LEVEL", raising=False)
    settings = _write(tmp_path, "settings.yaml", "validation:\n  fail_on_warning: true\n")
    post = _write(tmp_path, "post.yaml", "caption: Hello\nplatforms: [instagram]\n")

    assert main(["--settings", settings, "validate", post]) == 1
    assert "WARN  carousel-count-instagram" in capsys.readouterr().out


def test_status_command(tmp_path, settings, capsys):
    post = _write(
        tmp_path,
        "post.yaml",
        "caption: Hello\nplatforms: [tiktok]\nmedia:\n"
        "  - {id: clip, type: video, width: 1080, height: 1920, duration: 30}\n",
    )
    assert main(["--settings", settings, "status", post, "--platform", "tiktok"]) == 0
    out = capsys.readouterr().out

    assert "characters: 5/2200" in out
    assert "clip: Optimal: 9:16 (9:16)" in out


def test_limits_command(settings, capsys):
    assert main(["--settings", settings, "limits", "bluesky"]) == 0
    out = capsys.readouterr().out
    assert "bluesky:" in out
    assert "max_files: 4" in out


def test_invalid_post_exits_with_input_error(tmp_path, settings):
    post = _write(tmp_path, "post.yaml", "caption: Hello\nplatforms: [myspace]\n")
    assert main(["--settings", settings, "validate", post]) == 2
    assert main(["--settings", settings, "validate", str(tmp_path / "missing.yaml")]) == 2


def test_non_string_hashtag_exits_with_input_error(tmp_path, settings):
    post = _write(tmp_path, "post.yaml", "caption: Hello\nplatforms: [instagram]\nhashtags: [2024]\n")
    assert main(["--settings", settings, "validate", post]) == 2

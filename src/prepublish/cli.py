"""Command line entrypoint: validate post files before publishing."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import math
import sys
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .config import (
    DEFAULT_SETTINGS_PATH,
    banned_hashtags,
    fail_on_warning,
    load_settings,
    settings_path_from_env,
    strict_post_types,
)
from .engine import apply_auto_fixes, get_validation_summary, validate_post
from .inline import get_character_status, get_hashtag_status, get_media_aspect_status
from .limits import EXTRA_PLATFORMS, PLATFORMS, limits_as_dict
from .post_loader import load_post
from .rules import build_rules
from .types import ERROR, WARNING, InvalidPostError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

EXIT_OK = 0
EXIT_BLOCKED = 1
EXIT_INVALID_INPUT = 2

_STATUS_MARKS = {"pass": "PASS", "ok": "OK", "warning": "WARN", "error": "FAIL"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pre-publish validation for social posts")
    parser.add_argument(
        "--settings",
        default=None,
        help=f"Path to settings.yaml (default: $PREPUBLISH_SETTINGS or {DEFAULT_SETTINGS_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Run all applicable rules on a post file")
    validate.add_argument("post", help="YAML or JSON post description")
    validate.add_argument("--fix", action="store_true", help="Apply auto-fixes before validating")
    validate.add_argument("--json", action="store_true", help="Print a JSON report")

    status = subparsers.add_parser("status", help="Show inline caption/hashtag/media status")
    status.add_argument("post", help="YAML or JSON post description")
    status.add_argument("--platform", required=True, choices=PLATFORMS + EXTRA_PLATFORMS)

    limits = subparsers.add_parser("limits", help="Print a platform's limits")
    limits.add_argument("platform", choices=PLATFORMS + EXTRA_PLATFORMS)
    return parser


def _run_validate(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    context = load_post(args.post)
    rules = build_rules(banned_hashtags(config))
    strict = strict_post_types(config)

    fixes = []
    if args.fix:
        context, fixes = apply_auto_fixes(context, rules=rules, strict_post_types=strict)

    results = validate_post(context, rules=rules, strict_post_types=strict)
    summary = get_validation_summary(results)
    blocked = not summary.can_publish or (fail_on_warning(config) and summary.warnings > 0)

    if args.json:
        report = {
            "platforms": list(context.platforms),
            "results": {rule_id: dataclasses.asdict(r) for rule_id, r in results.items()},
            "summary": dataclasses.asdict(summary),
            "fixes": [dataclasses.asdict(f) for f in fixes],
        }
        if fixes:
            report["fixed"] = {"caption": context.caption, "hashtags": list(context.hashtags)}
        print(json.dumps(report, ensure_ascii=False, indent=2, sort_keys=True))
        return EXIT_BLOCKED if blocked else EXIT_OK

    for fix in fixes:
        print(f"FIXED {fix.target}: {fix.message}")
    if fixes:
        print(f"caption: {context.caption}")
        print(f"hashtags: {' '.join(context.hashtags)}")

    for rule_id, result in results.items():
        line = f"{_STATUS_MARKS[result.status]:<5} {rule_id}: {result.message}"
        if result.details:
            line += f" ({result.details})"
        if result.can_auto_fix and result.status in (WARNING, ERROR):
            line += " [auto-fix available]"
        print(line)

    print(
        f"Summary: {summary.passed} passed, {summary.warnings} warning(s), "
        f"{summary.errors} error(s) -> {'ready to publish' if summary.can_publish else 'blocked'}"
    )
    return EXIT_BLOCKED if blocked else EXIT_OK


def _run_status(args: argparse.Namespace) -> int:
    context = load_post(args.post)
    chars = get_character_status(context.caption, args.platform)
    tags = get_hashtag_status(context.hashtags, args.platform)

    lines: List[str] = []
    limit = "unlimited" if math.isinf(chars.limit) else chars.limit
    lines.append(
        f"{_STATUS_MARKS[chars.status]:<5} characters: {chars.count}/{limit} "
        f"({chars.percentage:.0f}%)"
    )
    tag_limit = "unlimited" if math.isinf(tags.limit) else tags.limit
    tag_line = f"{_STATUS_MARKS[tags.status]:<5} hashtags: {tags.count}/{tag_limit}"
    if tags.message:
        tag_line += f" - {tags.message}"
    lines.append(tag_line)
    for media in context.media:
        aspect = get_media_aspect_status(media.width, media.height, args.platform, media.type)
        lines.append(f"{_STATUS_MARKS[aspect.status]:<5} {media.id}: {aspect.message}")

    print("\n".join(lines))
    return EXIT_OK


def _run_limits(args: argparse.Namespace) -> int:
    print(yaml.safe_dump({args.platform: limits_as_dict(args.platform)}, sort_keys=False).rstrip())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_settings(args.settings or settings_path_from_env())
    logging.basicConfig(level=config["logging"]["level"], format=LOG_FORMAT)

    try:
        if args.command == "validate":
            return _run_validate(args, config)
        if args.command == "status":
            return _run_status(args)
        return _run_limits(args)
    except (InvalidPostError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())

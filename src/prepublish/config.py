"""Configuration loading and defaults."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, FrozenSet

import yaml

from .limits import BANNED_HASHTAGS
from .utils import normalize_hashtag

DEFAULT_SETTINGS_PATH = "config/settings.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "validation": {
        "strict_post_types": False,
        "extra_banned_hashtags": [],
        "fail_on_warning": False,
    },
    "logging": {
        "level": "INFO",
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def settings_path_from_env(default: str = DEFAULT_SETTINGS_PATH) -> str:
    return os.getenv("PREPUBLISH_SETTINGS") or default


def load_settings(settings_path: str = DEFAULT_SETTINGS_PATH) -> Dict[str, Any]:
    """Loads settings.yaml and merges it onto defaults."""
    merged = deepcopy(DEFAULT_SETTINGS)
    config_path = Path(settings_path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            user_cfg = yaml.safe_load(f) or {}
        if not isinstance(user_cfg, dict):
            raise ValueError(f"Settings file must contain a mapping: {settings_path}")
        merged = _deep_merge(merged, user_cfg)

    env_level = os.getenv("PREPUBLISH_LOG_LEVEL")
    if env_level:
        merged["logging"]["level"] = env_level
    merged["logging"]["level"] = str(merged["logging"]["level"]).upper()
    if merged["logging"]["level"] not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {merged['logging']['level']}")
    return merged


def banned_hashtags(config: Dict[str, Any]) -> FrozenSet[str]:
    extra = config.get("validation", {}).get("extra_banned_hashtags") or []
    if not isinstance(extra, list):
        raise ValueError("validation.extra_banned_hashtags must be a list")
    return BANNED_HASHTAGS | {normalize_hashtag(str(tag)) for tag in extra}


def strict_post_types(config: Dict[str, Any]) -> bool:
    return bool(config.get("validation", {}).get("strict_post_types", False))


def fail_on_warning(config: Dict[str, Any]) -> bool:
    return bool(config.get("validation", {}).get("fail_on_warning", False))

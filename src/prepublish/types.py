"""Shared validation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

PASS = "pass"
WARNING = "warning"
ERROR = "error"

# Inline helpers report with their own vocabulary.
OK = "ok"

MEDIA_TYPES = ("image", "video")
RULE_TYPES = ("caption", "image", "video", "hashtag", "mention", "link", "postType")


@dataclass(frozen=True)
class MediaInfo:
    id: str
    type: str
    width: int
    height: int
    size: int = 0
    duration: Optional[float] = None
    mime_type: str = ""

    @property
    def has_dimensions(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class ValidationContext:
    caption: str = ""
    hashtags: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    media: List[MediaInfo] = field(default_factory=list)
    platforms: Sequence[str] = field(default_factory=list)
    post_types: Dict[str, str] = field(default_factory=dict)
    scheduled_at: Optional[datetime] = None

    def images(self) -> List[MediaInfo]:
        return [m for m in self.media if m.type == "image"]

    def videos(self) -> List[MediaInfo]:
        return [m for m in self.media if m.type == "video"]


@dataclass(frozen=True)
class ValidationResult:
    status: str
    message: str
    details: Optional[str] = None
    can_auto_fix: Optional[bool] = None


@dataclass(frozen=True)
class AutoFixResult:
    fixed: bool
    message: str
    new_value: Any = None
    target: Optional[str] = None


@dataclass(frozen=True)
class ValidationRule:
    id: str
    platform: str
    type: str
    check: Callable[[ValidationContext], ValidationResult]
    auto_fix: Optional[Callable[[ValidationContext], Optional[AutoFixResult]]] = None
    post_types: Optional[Sequence[str]] = None

    def applies_to(self, context: ValidationContext, strict_post_types: bool = False) -> bool:
        if self.platform != "all" and self.platform not in context.platforms:
            return False
        if strict_post_types and self.post_types:
            return context.post_types.get(self.platform) in self.post_types
        return True


@dataclass(frozen=True)
class ValidationSummary:
    errors: int
    warnings: int
    passed: int
    can_publish: bool


@dataclass(frozen=True)
class CharacterCountResult:
    count: int
    limit: float
    status: str
    remaining: float
    percentage: float
    recommended: Optional[int] = None


@dataclass(frozen=True)
class HashtagCountResult:
    count: int
    limit: float
    status: str
    recommended: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class MediaAspectResult:
    ratio: float
    ratio_string: str
    status: str
    message: str
    is_optimal: bool


class InvalidPostError(ValueError):
    """Post description could not be turned into a validation context."""

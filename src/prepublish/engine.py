"""Runs validation rules against a post and reduces the findings."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .rules import VALIDATION_RULES, get_rule
from .types import (
    ERROR,
    PASS,
    WARNING,
    AutoFixResult,
    ValidationContext,
    ValidationResult,
    ValidationRule,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

FIXABLE_FIELDS = ("caption", "hashtags")


def applicable_rules(
    context: ValidationContext,
    rules: Optional[Iterable[ValidationRule]] = None,
    strict_post_types: bool = False,
) -> List[ValidationRule]:
    selected: List[ValidationRule] = []
    for rule in VALIDATION_RULES if rules is None else rules:
        if rule.applies_to(context, strict_post_types=strict_post_types):
            selected.append(rule)
        else:
            logger.debug("Skipping rule %s for platforms %s", rule.id, list(context.platforms))
    return selected


def validate_post(
    context: ValidationContext,
    rules: Optional[Iterable[ValidationRule]] = None,
    strict_post_types: bool = False,
) -> Dict[str, ValidationResult]:
    """Runs every applicable rule and returns results keyed by rule id.

    A rule applies when it is scoped to ``"all"`` or to one of the context's
    platforms. Every applicable rule runs regardless of earlier failures.
    With ``strict_post_types`` a rule restricted to post types also needs the
    selected post type for its platform to match.
    """
    results: Dict[str, ValidationResult] = {}
    for rule in applicable_rules(context, rules, strict_post_types):
        result = rule.check(context)
        logger.debug("Rule %s -> %s: %s", rule.id, result.status, result.message)
        results[rule.id] = result
    return results


def get_validation_summary(results: Mapping[str, ValidationResult]) -> ValidationSummary:
    errors = warnings = passed = 0
    for result in results.values():
        if result.status == ERROR:
            errors += 1
        elif result.status == WARNING:
            warnings += 1
        elif result.status == PASS:
            passed += 1
    return ValidationSummary(
        errors=errors,
        warnings=warnings,
        passed=passed,
        can_publish=errors == 0,
    )


def auto_fix(
    context: ValidationContext,
    rule_id: str,
    rules: Optional[Iterable[ValidationRule]] = None,
) -> Optional[AutoFixResult]:
    """Runs one rule's auto-fix. None means there was nothing to change."""
    rule = get_rule(rule_id, rules)
    if rule.auto_fix is None:
        return None
    return rule.auto_fix(context)


def merge_fix(context: ValidationContext, fix: AutoFixResult) -> ValidationContext:
    if not fix.fixed:
        return context
    if fix.target not in FIXABLE_FIELDS:
        raise ValueError(f"Auto-fix targets unsupported field: {fix.target}")
    return dataclasses.replace(context, **{fix.target: fix.new_value})


def apply_auto_fixes(
    context: ValidationContext,
    rules: Optional[Iterable[ValidationRule]] = None,
    strict_post_types: bool = False,
) -> Tuple[ValidationContext, List[AutoFixResult]]:
    """Applies every applicable auto-fix in rule order.

    Each fix sees the context produced by the fixes before it. The input
    context is left untouched.
    """
    applied: List[AutoFixResult] = []
    current = context
    for rule in applicable_rules(context, rules, strict_post_types):
        if rule.auto_fix is None:
            continue
        fix = rule.auto_fix(current)
        if fix is None:
            continue
        logger.info("Auto-fix %s: %s", rule.id, fix.message)
        current = merge_fix(current, fix)
        applied.append(fix)
    return current, applied

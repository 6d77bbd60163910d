"""
RegexValidator - validates field values against a regular expression pattern.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind, compile_pattern

from .base_validator import BaseValidator, as_text


class RegexValidator(BaseValidator):
    """
    Validates that a value, stringified, matches a regular expression.

    The pattern is searched, not anchored: anchor it with ^ and $ to match the
    whole value. Delimited patterns ("/^ok$/i") are accepted.
    """

    kinds = (RuleKind.REGEX,)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        pattern = compile_pattern(rule.pattern)
        text = as_text(value)
        return pattern.search(text) is not None

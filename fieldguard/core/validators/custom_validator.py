"""
CustomValidator - validates using a caller-supplied predicate.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator


class CustomValidator(BaseValidator):
    """
    Validates using a custom predicate.

    The predicate is called as callback(value, data). Only a literal False
    fails the rule; None, 0 and other falsy results pass. Exceptions raised by
    the predicate propagate to the caller.

    Example:
        def starts_with_country_code(value, data):
            return value.startswith(data.get("country", ""))
    """

    kinds = (RuleKind.CUSTOM,)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        return rule.callback(value, data) is not False

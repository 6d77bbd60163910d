"""
ComparisonValidator - validates equality with another field and set membership.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator


def strictly_equal(left: Any, right: Any) -> bool:
    """Equality that also requires the same type: 1 != "1" and 1 != True."""
    return type(left) is type(right) and left == right


class ComparisonValidator(BaseValidator):
    """
    Validates a value by comparison.

    - match: equals the value of another field in the same data map
      (a missing other field compares as None)
    - in / not_in: present in / absent from the candidate values
    """

    kinds = (RuleKind.MATCH, RuleKind.IN, RuleKind.NOT_IN)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        if rule.kind is RuleKind.MATCH:
            return strictly_equal(value, data.get(rule.other_field))

        found = any(strictly_equal(value, candidate) for candidate in rule.values)
        return found if rule.kind is RuleKind.IN else not found

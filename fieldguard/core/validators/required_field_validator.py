"""
RequiredFieldValidator - ensures a field holds a non-empty value.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator


def is_empty(value: Any) -> bool:
    """
    Return True for the values the engine treats as empty.

    Only None and the empty string are empty. Zero, False, "0" and empty
    collections are values like any other.
    """
    return value is None or (isinstance(value, str) and value == "")


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not empty.

    Fails if:
    - Field is missing from the data (looked up as None)
    - Field value is None
    - Field value is an empty string
    """

    kinds = (RuleKind.REQUIRED,)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        return not is_empty(value)

"""
RangeValidator - validates min/max bounds against numbers or lengths.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator, as_text
from .type_validator import TypeValidator, is_number

SIZE_KINDS = (RuleKind.MIN, RuleKind.MAX)


def numeric_view(value: Any, rules: Iterable[RuleInstance]) -> Any:
    """
    Return the value min/max rules should see.

    A string is only sized as a number when the field also declares int or
    decimal and the string passes that check; "25" under "int|min:18" is 25,
    while "25" under a bare "min:18" keeps its length of 2. Integer strings
    become Decimal, which holds any number of digits exactly.
    """
    if not isinstance(value, str):
        return value

    declared = {rule.kind for rule in rules}
    if RuleKind.INT in declared and TypeValidator.is_integer(value):
        return Decimal(value.strip())
    if RuleKind.DECIMAL in declared and TypeValidator.is_decimal(value):
        return float(value.strip())
    return value


class RangeValidator(BaseValidator):
    """
    Validates that a value is within a bound (inclusive).

    The comparison branches on the value's native type:
    - numbers (int, float, Decimal) are compared directly with the threshold,
      without conversion, so integers of any size compare exactly
    - anything else is compared by the character length of its string form,
      so the string "2" has size 1, not 2
    """

    kinds = SIZE_KINDS

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        size = self.measure(value)
        if rule.kind is RuleKind.MIN:
            return size >= rule.threshold
        return size <= rule.threshold

    @staticmethod
    def measure(value: Any) -> int | float | Decimal:
        """Return the quantity a bound is checked against."""
        if is_number(value):
            # Ordering a Decimal NaN raises; a float NaN fails both bounds
            if isinstance(value, Decimal) and value.is_nan():
                return float("nan")
            return value
        return len(as_text(value))

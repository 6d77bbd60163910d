"""
TypeValidator - validates int, decimal and boolean fields.
"""

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator

_INTEGER_STRING = re.compile(r"[+-]?[0-9]+")
_DECIMAL_STRING = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def is_number(value: Any) -> bool:
    """True for native numbers. Booleans are not numbers here."""
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


class TypeValidator(BaseValidator):
    """
    Validates that a field holds (or cleanly parses as) the expected type.

    - int: an integer, or a string of digits with an optional sign. Floats
      pass only when they carry no fractional part.
    - decimal: any finite number, or a string that parses as one.
    - boolean: a genuine bool. Strings such as "true" or "1" fail.
    """

    kinds = (RuleKind.INT, RuleKind.DECIMAL, RuleKind.BOOLEAN)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        if rule.kind is RuleKind.INT:
            return self.is_integer(value)
        if rule.kind is RuleKind.DECIMAL:
            return self.is_decimal(value)
        return isinstance(value, bool)

    @staticmethod
    def is_integer(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        if isinstance(value, Decimal):
            return value.is_finite() and value == value.to_integral_value()
        if isinstance(value, str):
            return _INTEGER_STRING.fullmatch(value.strip()) is not None
        return False

    @staticmethod
    def is_decimal(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return math.isfinite(value)
        if isinstance(value, Decimal):
            return value.is_finite()
        if isinstance(value, str):
            text = value.strip()
            return _DECIMAL_STRING.fullmatch(text) is not None and math.isfinite(float(text))
        return False

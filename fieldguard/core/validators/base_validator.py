"""
Base validator interface for all rule families.

All validators must inherit from BaseValidator and implement the passes() method.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind


def as_text(value: Any) -> str:
    """
    Return the string form format rules check.

    Integers go through Decimal, which has no digit limit on conversion.
    """
    if isinstance(value, str):
        return value
    if type(value) is int:
        return str(Decimal(value))
    return str(value)


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements one family of rule kinds (type checks, ranges,
    formats, ...) and is stateless: the rule instance carries the parameters.
    Validators never raise for bad data; they answer pass or fail.
    """

    kinds: tuple[RuleKind, ...] = ()

    @abstractmethod
    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        """
        Check a value against a rule.

        Args:
            rule: The rule being applied
            value: The field value to validate
            data: The entire data map (for cross-field rules)

        Returns:
            True if the value satisfies the rule
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kinds={[kind.value for kind in self.kinds]})"

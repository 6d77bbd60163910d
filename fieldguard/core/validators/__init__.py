"""
Rule-family validators.

Provides validators for required fields, type checks, formats, ranges,
comparisons, regex patterns, dates and custom predicates, plus the read-only
registry the engine dispatches through.
"""

from types import MappingProxyType

from fieldguard.core.models import RuleKind

from .base_validator import BaseValidator
from .comparison_validator import ComparisonValidator, strictly_equal
from .custom_validator import CustomValidator
from .date_validator import DateValidator
from .format_validator import FormatValidator
from .range_validator import SIZE_KINDS, RangeValidator, numeric_view
from .regex_validator import RegexValidator
from .required_field_validator import RequiredFieldValidator, is_empty
from .type_validator import TypeValidator, is_number


def build_registry(*validators: BaseValidator) -> MappingProxyType:
    """Map every rule kind handled by the given validators to its validator."""
    registry: dict[RuleKind, BaseValidator] = {}
    for validator in validators:
        for kind in validator.kinds:
            if kind in registry:
                raise ValueError(f"Rule kind '{kind.value}' is handled by more than one validator")
            registry[kind] = validator
    return MappingProxyType(registry)


VALIDATOR_REGISTRY = build_registry(
    RequiredFieldValidator(),
    TypeValidator(),
    FormatValidator(),
    RangeValidator(),
    ComparisonValidator(),
    RegexValidator(),
    DateValidator(),
    CustomValidator(),
)

__all__ = [
    "BaseValidator",
    "RequiredFieldValidator",
    "TypeValidator",
    "FormatValidator",
    "RangeValidator",
    "ComparisonValidator",
    "RegexValidator",
    "DateValidator",
    "CustomValidator",
    "VALIDATOR_REGISTRY",
    "build_registry",
    "is_empty",
    "is_number",
    "numeric_view",
    "SIZE_KINDS",
    "strictly_equal",
]

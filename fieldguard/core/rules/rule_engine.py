"""
Rule engine for evaluating field declarations against a data map.

The engine resolves every declaration to a canonical RuleSpec, applies the
rules in order and collects error messages per field.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.exceptions import RuleDeclarationError
from fieldguard.core.models import ErrorCollection, RuleKind, RuleSpec
from fieldguard.core.validators import SIZE_KINDS, VALIDATOR_REGISTRY, BaseValidator, is_empty, numeric_view
from fieldguard.observability.logger import get_logger

from .parser import normalize_confirmed, parse_rules

logger = get_logger(__name__)


class ValidationEngine:
    """
    Evaluates data maps against per-field rule declarations.

    For each declared field, in declaration order:
    1. Resolve the declaration to a RuleSpec and normalize confirmation rules
    2. Look up the value (a missing key reads as None)
    3. Apply each rule in order. "required" fails on empty values (None or "");
       every other rule is skipped for empty values. min/max see numeric
       strings as numbers only when the field also declares int or decimal
    4. Record the rule's message (custom or default token) for each failure

    Fields without failures are left out of the result, so an empty result
    means the data is valid. The engine never raises for invalid data.
    """

    def __init__(self, registry: Mapping[RuleKind, BaseValidator] | None = None):
        """
        Initialize the engine.

        Args:
            registry: Validator per rule kind (defaults to VALIDATOR_REGISTRY)
        """
        self.registry = registry if registry is not None else VALIDATOR_REGISTRY

    def evaluate(self, data: Mapping[str, Any], declarations: Mapping[str, Any]) -> ErrorCollection:
        """
        Validate a data map.

        Args:
            data: Field name to value
            declarations: Field name to DSL string, raw list, RuleSpec or RuleBuilder

        Returns:
            Field name to ordered error messages; empty when all rules pass

        Raises:
            RuleDeclarationError: If a declaration is malformed
        """
        errors: ErrorCollection = {}

        for field_name, declaration in declarations.items():
            rules = self.resolve(field_name, declaration)
            messages = self.evaluate_field(field_name, rules, data)
            if messages:
                errors[field_name] = messages

        logger.debug(
            f"Evaluated {len(declarations)} fields, {len(errors)} with errors",
            extra={"failed_fields": list(errors)},
        )
        return errors

    @staticmethod
    def resolve(field_name: str, declaration: Any) -> RuleSpec:
        """Resolve a declaration to its normalized RuleSpec."""
        return normalize_confirmed(field_name, parse_rules(declaration))

    def evaluate_field(self, field_name: str, rules: RuleSpec, data: Mapping[str, Any]) -> list[str]:
        """
        Apply a field's rules in order.

        Returns:
            Messages of the failed rules, in rule order
        """
        value = data.get(field_name)
        empty = is_empty(value)
        sized_value = numeric_view(value, rules)
        messages: list[str] = []

        for rule in rules:
            if empty and rule.kind is not RuleKind.REQUIRED:
                continue

            validator = self.registry.get(rule.kind)
            if validator is None:
                raise RuleDeclarationError(
                    f"No validator registered for rule '{rule.kind.value}' on field '{field_name}'",
                    declaration=rule,
                )

            subject = sized_value if rule.kind in SIZE_KINDS else value
            if not validator.passes(rule, subject, data):
                messages.append(rule.error_message())

        return messages


def evaluate(data: Mapping[str, Any], declarations: Mapping[str, Any]) -> ErrorCollection:
    """Validate a data map with the default engine."""
    return ValidationEngine().evaluate(data, declarations)

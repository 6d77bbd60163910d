"""
Validator facade: the engine plus the choice between returned and raised errors.
"""

from collections.abc import Mapping
from typing import Any

from fieldguard.core.exceptions import ValidationException
from fieldguard.core.models import ErrorCollection
from fieldguard.observability.logger import get_logger

from .rule_engine import ValidationEngine

logger = get_logger(__name__)


class Validator:
    """
    Validates data maps against rule declarations.

    validate_data() returns the error collection; validate() and
    validate_model() raise ValidationException carrying that same collection.
    """

    def __init__(self, engine: ValidationEngine | None = None):
        self.engine = engine or ValidationEngine()

    def validate_data(self, data: Mapping[str, Any], rules: Mapping[str, Any]) -> ErrorCollection:
        """Return errors per field (empty when valid)."""
        return self.engine.evaluate(data, rules)

    def is_valid(self, data: Mapping[str, Any], rules: Mapping[str, Any]) -> bool:
        return not self.validate_data(data, rules)

    def validate(self, data: Mapping[str, Any], rules: Mapping[str, Any]) -> None:
        """
        Validate data and raise on failure.

        Raises:
            ValidationException: If any rule fails
        """
        errors = self.validate_data(data, rules)
        if errors:
            raise ValidationException(errors)

    def validate_model(
        self,
        model: object,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        operation: str,
    ) -> None:
        """
        Validate data on behalf of a model (e.g. before a create or update).

        Args:
            model: The model instance being persisted
            data: The model's attribute values
            rules: Rule declarations per field
            operation: Lifecycle operation name ("create", "update", ...)

        Raises:
            ValidationException: If any rule fails
        """
        if not rules:
            return

        errors = self.validate_data(data, rules)
        if errors:
            model_name = type(model).__name__
            logger.info(
                f"Validation failed for {model_name} on {operation}",
                extra={"model": model_name, "operation": operation, "failed_fields": list(errors)},
            )
            raise ValidationException(errors, f"Validation failed for {model_name}")

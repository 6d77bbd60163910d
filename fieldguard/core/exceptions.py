"""
Exceptions raised by the validation engine and its callers.

Two failure classes exist and must not be confused:

- RuleDeclarationError: the rule declaration itself is malformed (unknown rule,
  non-numeric threshold, bad regex). Raised as soon as the declaration is parsed.
- ValidationException: the data failed validation. The engine never raises it;
  the Validator facade and the Validatable mixin raise it when asked to.
"""

from typing import Any


class RuleDeclarationError(ValueError):
    """Raised when a rule declaration cannot be turned into a rule."""

    def __init__(self, message: str, declaration: Any = None):
        self.declaration = declaration
        super().__init__(message)


class ValidationException(Exception):
    """Raised when validation fails. Carries the full per-field error collection."""

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation failed."):
        self.errors = errors
        self.message = message
        super().__init__(message)

    def error(self, field_name: str) -> str | None:
        """Return the first error message for a field, if any."""
        messages = self.errors.get(field_name)
        return messages[0] if messages else None

    def first_error(self) -> str | None:
        """Return the first error message in field order."""
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return None

    def error_messages(self) -> list[str]:
        """Return all error messages as a flat list, in field order."""
        return [message for messages in self.errors.values() for message in messages]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, errors={self.errors!r})"

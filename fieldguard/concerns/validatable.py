"""
Validatable mixin - adds validation to plain classes.

Usage:
    class User(Validatable):
        name: str | None = None
        email: str | None = None
        age: int | None = None

        def rules(self):
            return {
                "name": "required|min:2|max:100",
                "email": "required|email",
                "age": "required|int|min:18",
            }

    user = User().fill({"name": "John", "email": "john@example.com", "age": "25"})
    if user.is_valid():
        ...
    user.validate()  # raises ValidationException on failure
"""

import types
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Union, get_args, get_origin, get_type_hints

from fieldguard.core.exceptions import ValidationException
from fieldguard.core.models import ErrorCollection
from fieldguard.core.rules import Validator, apply_messages

TRUTHY_STRINGS = ("1", "true", "on", "yes")


def cast_to_bool(value: Any) -> bool:
    """Cast form-style values: "1", "true", "on" and "yes" are True."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in TRUTHY_STRINGS
    return bool(value)


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def cast_to_annotation(annotation: Any, value: Any) -> Any:
    """
    Cast a value to a declared attribute type.

    Handles bool, int, float, str and list (optionally wrapped in Optional).
    Values that cannot be cast are returned unchanged so validation can
    report them.
    """
    if annotation is None or value is None:
        return value

    target = _unwrap_optional(annotation)
    if target is bool:
        return cast_to_bool(value)

    try:
        if target is int:
            return int(value)
        if target is float:
            return float(value)
        if target is str:
            return str(value)
    except (TypeError, ValueError):
        return value

    if target is list or get_origin(target) is list:
        return list(value) if isinstance(value, list | tuple | set) else [value]

    return value


class Validatable:
    """
    Mixin giving a class rules(), messages() and validation helpers.

    Override rules() to declare rules per attribute, and messages() to give
    custom messages keyed "field.rule". Errors from the last validation are
    kept on the instance.
    """

    def rules(self) -> dict[str, Any]:
        """Rule declarations per field. Override in your class."""
        return {}

    def messages(self) -> dict[str, str]:
        """Custom messages keyed "field.rule". Override in your class."""
        return {}

    def validation_data(self) -> dict[str, Any]:
        """
        Data to validate.

        Uses to_dict() when the class defines it; otherwise the annotated
        attributes (None when unset) followed by public instance attributes.
        """
        to_dict = getattr(self, "to_dict", None)
        if callable(to_dict):
            return dict(to_dict())

        data = {name: getattr(self, name, None) for name in self._field_types()}
        for name, value in vars(self).items():
            if not name.startswith("_"):
                data.setdefault(name, value)
        return data

    def is_valid(self, data: Mapping[str, Any] | None = None, rules: Mapping[str, Any] | None = None) -> bool:
        """Validate and keep the errors. Returns True when valid."""
        self._validation_errors = self._run_validation(data, rules)
        return not self._validation_errors

    def validate(self, data: Mapping[str, Any] | None = None, rules: Mapping[str, Any] | None = None):
        """
        Validate and raise on failure.

        Returns:
            self, for chaining

        Raises:
            ValidationException: If any rule fails
        """
        if not self.is_valid(data, rules):
            raise ValidationException(self._validation_errors)
        return self

    def is_valid_only(self, fields: Iterable[str], data: Mapping[str, Any] | None = None) -> bool:
        """Validate only the given fields."""
        wanted = set(fields)
        return self.is_valid(data, {k: v for k, v in self.rules().items() if k in wanted})

    def is_valid_except(self, fields: Iterable[str], data: Mapping[str, Any] | None = None) -> bool:
        """Validate every field except the given ones."""
        excluded = set(fields)
        return self.is_valid(data, {k: v for k, v in self.rules().items() if k not in excluded})

    def errors(self) -> ErrorCollection:
        return getattr(self, "_validation_errors", {})

    def error(self, field_name: str) -> str | None:
        """First error for a field, if any."""
        messages = self.errors().get(field_name)
        return messages[0] if messages else None

    def has_error(self, field_name: str) -> bool:
        return bool(self.errors().get(field_name))

    def error_messages(self) -> list[str]:
        """All error messages as a flat list, in field order."""
        return [message for messages in self.errors().values() for message in messages]

    def first_error(self) -> str | None:
        for messages in self.errors().values():
            if messages:
                return messages[0]
        return None

    def clear_errors(self):
        self._validation_errors = {}
        return self

    def fill(self, data: Mapping[str, Any], validate: bool = False):
        """
        Assign values to declared attributes, cast to their annotated types.

        Keys that are neither annotated on the class nor set on the instance
        are ignored.

        Raises:
            ValidationException: If validate is True and validation fails
        """
        field_types = self._field_types()
        for key, value in data.items():
            if key in field_types or key in vars(self):
                setattr(self, key, cast_to_annotation(field_types.get(key), value))

        if validate:
            self.validate(data)
        return self

    def fill_and_validate(self, data: Mapping[str, Any]):
        return self.fill(data, validate=True)

    @classmethod
    def create_validated(cls, data: Mapping[str, Any]):
        """Create an instance from data and validate it."""
        return cls().fill_and_validate(data)

    def get_validator(self) -> Validator:
        validator = getattr(self, "_validator", None)
        if validator is None:
            validator = self._validator = Validator()
        return validator

    def set_validator(self, validator: Validator):
        self._validator = validator
        return self

    def _run_validation(self, data: Mapping[str, Any] | None, rules: Mapping[str, Any] | None) -> ErrorCollection:
        data = data if data is not None else self.validation_data()
        rules = rules if rules is not None else self.rules()
        if not rules:
            return {}

        messages = self.messages()
        if messages:
            rules = apply_messages(rules, messages)

        return self.get_validator().validate_data(data, rules)

    def _field_types(self) -> dict[str, Any]:
        hints = get_type_hints(type(self))
        return {
            name: hint
            for name, hint in hints.items()
            if not name.startswith("_") and get_origin(hint) is not ClassVar
        }

"""
Unit tests for the Validator facade and ValidationException.
"""

import pytest

from fieldguard.core.exceptions import RuleDeclarationError, ValidationException
from fieldguard.core.rules import RuleBuilder, ValidationEngine, Validator


class Account:
    """Stand-in for a persisted model"""


class TestValidator:
    """Tests for Validator"""

    def test_validate_data_returns_errors(self, validator):
        """Test validate_data returns the engine's error collection"""
        errors = validator.validate_data({"email": "bad"}, {"email": "required|email"})
        assert errors == {"email": ["email"]}

    def test_is_valid(self, validator, signup_data, signup_rules):
        """Test is_valid reflects the error collection"""
        assert validator.is_valid(signup_data, signup_rules) is True
        assert validator.is_valid({**signup_data, "email": "bad"}, signup_rules) is False

    def test_validate_raises_with_errors(self, validator):
        """Test validate raises ValidationException carrying every error"""
        with pytest.raises(ValidationException) as exc_info:
            validator.validate({"name": "", "age": 10}, {"name": "required", "age": "int|min:18"})

        assert exc_info.value.errors == {"name": ["required"], "age": ["min:18"]}
        assert exc_info.value.message == "Validation failed."

    def test_validate_passes_silently(self, validator, signup_data, signup_rules):
        """Test validate returns None for valid data"""
        assert validator.validate(signup_data, signup_rules) is None

    def test_validate_model_raises_validation_exception(self, validator):
        """Test model validation names the model in the exception message"""
        with pytest.raises(ValidationException) as exc_info:
            validator.validate_model(Account(), {"email": "bad"}, {"email": "email|required"}, "create")

        assert exc_info.value.message == "Validation failed for Account"
        assert exc_info.value.errors == {"email": ["email"]}

    def test_validate_model_without_rules_is_noop(self, validator):
        """Test models without rules always validate"""
        assert validator.validate_model(Account(), {"email": "bad"}, {}, "update") is None

    def test_validate_model_passes_valid_data(self, validator):
        """Test valid model data does not raise"""
        rules = {"email": RuleBuilder.create().required().email()}
        assert validator.validate_model(Account(), {"email": "a@b.com"}, rules, "create") is None

    def test_declaration_errors_are_not_validation_errors(self, validator):
        """Test malformed rules raise RuleDeclarationError, not ValidationException"""
        with pytest.raises(RuleDeclarationError):
            validator.validate({"age": 20}, {"age": "min:abc"})

    def test_default_engine(self):
        """Test a Validator builds its own engine when none is given"""
        assert isinstance(Validator().engine, ValidationEngine)


class TestValidationException:
    """Tests for ValidationException"""

    def test_error_accessors(self):
        """Test first_error, error and error_messages follow field order"""
        exc = ValidationException({"name": ["required"], "email": ["email", "max:10"]})

        assert exc.first_error() == "required"
        assert exc.error("email") == "email"
        assert exc.error("age") is None
        assert exc.error_messages() == ["required", "email", "max:10"]
        assert str(exc) == "Validation failed."

    def test_empty_errors(self):
        """Test accessors on an exception without errors"""
        exc = ValidationException({}, "Nothing to report")

        assert exc.first_error() is None
        assert exc.error_messages() == []
        assert "Nothing to report" in repr(exc)

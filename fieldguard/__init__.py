"""
fieldguard - rule-based validation for flat field maps.

Rules can be declared three ways, all resolving to the same RuleSpec:

    from fieldguard import RuleBuilder, evaluate

    errors = evaluate(
        {"email": "bad", "age": 16, "password": "s3cret", "password_confirmation": "s3cret"},
        {
            "email": "required|email|message:Please enter a valid email",
            "age": ["required", "int", {"rule": "min", "params": [18]}],
            "password": RuleBuilder.create().required().min(6).confirmed(),
        },
    )
    # {"email": ["Please enter a valid email"], "age": ["min:18"]}
"""

from fieldguard.concerns import Validatable
from fieldguard.core.exceptions import RuleDeclarationError, ValidationException
from fieldguard.core.models import DEFAULT_MESSAGES, ErrorCollection, RuleInstance, RuleKind, RuleSpec
from fieldguard.core.rules import (
    RuleBuilder,
    RuleConfigLoader,
    ValidationEngine,
    Validator,
    apply_messages,
    evaluate,
    normalize_confirmed,
    parse_rules,
)

__version__ = "0.1.0"

__all__ = [
    "evaluate",
    "ValidationEngine",
    "Validator",
    "RuleBuilder",
    "RuleConfigLoader",
    "RuleInstance",
    "RuleKind",
    "RuleSpec",
    "ErrorCollection",
    "DEFAULT_MESSAGES",
    "parse_rules",
    "normalize_confirmed",
    "apply_messages",
    "Validatable",
    "ValidationException",
    "RuleDeclarationError",
]

"""
Rule declaration, parsing and evaluation.
"""

from .builder import RuleBuilder
from .parser import apply_messages, make_rule, normalize_confirmed, parse_rule_string, parse_rules
from .rule_config import RuleConfigLoader
from .rule_engine import ValidationEngine, evaluate
from .validator import Validator

__all__ = [
    "RuleBuilder",
    "RuleConfigLoader",
    "ValidationEngine",
    "Validator",
    "evaluate",
    "parse_rules",
    "parse_rule_string",
    "make_rule",
    "normalize_confirmed",
    "apply_messages",
]

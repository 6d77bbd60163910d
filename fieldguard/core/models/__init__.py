"""
Core rule models for the validation engine.

Rules are immutable pydantic models; a field's rules form an ordered RuleSpec.
"""

from .rule import (
    CONFIRMED_SENTINEL,
    DEFAULT_MESSAGES,
    RULE_ALIASES,
    ErrorCollection,
    RuleInstance,
    RuleKind,
    RuleSpec,
    compile_pattern,
    format_threshold,
    resolve_rule_name,
)

__all__ = [
    "RuleKind",
    "RuleInstance",
    "RuleSpec",
    "ErrorCollection",
    "DEFAULT_MESSAGES",
    "RULE_ALIASES",
    "CONFIRMED_SENTINEL",
    "compile_pattern",
    "format_threshold",
    "resolve_rule_name",
]

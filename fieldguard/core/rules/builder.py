"""
Fluent rule builder.

Builds a field's rules one call at a time:

    RuleBuilder.create().required().email().max(255).message("Email is too long")

The builder produces either the canonical RuleSpec (build_spec) or a DSL string
(build / str). The string form is lossy: custom predicates have no string
representation and are left out.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fieldguard.core.models import RuleInstance, RuleKind, RuleSpec


class RuleBuilder:
    """
    Programmatically build the rules for one field.

    Rules are appended in call order and never reordered. message() rewrites
    only the most recently appended rule, tracked by an explicit index.
    """

    def __init__(self) -> None:
        """Initialize an empty rule list."""
        self._rules: list[RuleInstance] = []
        self._last_index: int | None = None

    @classmethod
    def create(cls) -> RuleBuilder:
        """Start a new builder."""
        return cls()

    def append(self, rule: RuleInstance) -> RuleBuilder:
        """Append an already constructed rule."""
        self._rules.append(rule)
        self._last_index = len(self._rules) - 1
        return self

    def _add(self, kind: RuleKind, **parameters: Any) -> RuleBuilder:
        return self.append(RuleInstance(kind=kind, **parameters))

    def required(self) -> RuleBuilder:
        """Add a required rule."""
        return self._add(RuleKind.REQUIRED)

    def int(self) -> RuleBuilder:
        """Add an integer type check."""
        return self._add(RuleKind.INT)

    def integer(self) -> RuleBuilder:
        return self.int()

    def decimal(self) -> RuleBuilder:
        """Add a decimal type check."""
        return self._add(RuleKind.DECIMAL)

    def float(self) -> RuleBuilder:
        return self.decimal()

    def boolean(self) -> RuleBuilder:
        """Add a strict boolean type check."""
        return self._add(RuleKind.BOOLEAN)

    def bool(self) -> RuleBuilder:
        return self.boolean()

    def email(self) -> RuleBuilder:
        return self._add(RuleKind.EMAIL)

    def url(self) -> RuleBuilder:
        return self._add(RuleKind.URL)

    def domain(self) -> RuleBuilder:
        return self._add(RuleKind.DOMAIN)

    def ip(self) -> RuleBuilder:
        return self._add(RuleKind.IP)

    def min(self, threshold: int | float) -> RuleBuilder:
        """Add a lower bound (numeric value, or length for anything else)."""
        return self._add(RuleKind.MIN, threshold=threshold)

    def max(self, threshold: int | float) -> RuleBuilder:
        """Add an upper bound (numeric value, or length for anything else)."""
        return self._add(RuleKind.MAX, threshold=threshold)

    def match(self, field_name: str) -> RuleBuilder:
        """Require the value to equal another field's value."""
        return self._add(RuleKind.MATCH, other_field=field_name)

    def same(self, field_name: str) -> RuleBuilder:
        return self.match(field_name)

    def confirmed(self) -> RuleBuilder:
        """Require the value to equal the "{field}_confirmation" field."""
        return self._add(RuleKind.CONFIRMED)

    def regex(self, pattern: str) -> RuleBuilder:
        """Add a regular expression rule."""
        return self._add(RuleKind.REGEX, pattern=pattern)

    def in_(self, *values: Any) -> RuleBuilder:
        """Require the value to be one of the given values (strict comparison)."""
        return self._add(RuleKind.IN, values=values)

    def not_in(self, *values: Any) -> RuleBuilder:
        """Require the value to be none of the given values (strict comparison)."""
        return self._add(RuleKind.NOT_IN, values=values)

    def date(self) -> RuleBuilder:
        return self._add(RuleKind.DATE)

    def date_format(self, date_format: str) -> RuleBuilder:
        """Require the value to be a date written exactly in the given format."""
        return self._add(RuleKind.DATE_FORMAT, format=date_format)

    def json(self) -> RuleBuilder:
        return self._add(RuleKind.JSON)

    def custom(self, callback: Callable[[Any, dict[str, Any]], Any]) -> RuleBuilder:
        """
        Add a custom predicate, called as callback(value, data).

        The rule fails only when the callback returns False.
        """
        return self._add(RuleKind.CUSTOM, callback=callback)

    def message(self, text: str) -> RuleBuilder:
        """Attach a custom message to the last added rule. No-op when empty."""
        if self._last_index is None:
            return self
        self._rules[self._last_index] = self._rules[self._last_index].with_message(text)
        return self

    def build_spec(self) -> RuleSpec:
        """Return the canonical RuleSpec."""
        return RuleSpec(self._rules)

    def build(self) -> str:
        """Return the rules as a pipe-joined DSL string (custom rules are dropped)."""
        return self.build_spec().to_string()

    def __len__(self) -> int:
        return len(self._rules)

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"RuleBuilder({self.build_spec()!r})"

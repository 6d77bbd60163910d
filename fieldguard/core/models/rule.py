"""
Rule models: the canonical representation every rule declaration resolves to.

A field's rules are an ordered RuleSpec of immutable RuleInstance values. The DSL
string, the raw list form and the RuleBuilder all produce the same RuleSpec.
"""

import math
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from fieldguard.core.exceptions import RuleDeclarationError
from fieldguard.utils.date_format import check_date_format

ErrorCollection = dict[str, list[str]]


class RuleKind(str, Enum):
    """Canonical rule kinds. Aliases never appear here."""

    REQUIRED = "required"
    INT = "int"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    EMAIL = "email"
    URL = "url"
    DOMAIN = "domain"
    IP = "ip"
    DATE = "date"
    JSON = "json"
    MIN = "min"
    MAX = "max"
    MATCH = "match"
    REGEX = "regex"
    IN = "in"
    NOT_IN = "not_in"
    DATE_FORMAT = "date_format"
    CUSTOM = "custom"
    # Transient: rewritten into MATCH before evaluation
    CONFIRMED = "confirmed"


RULE_ALIASES = MappingProxyType({
    "integer": RuleKind.INT,
    "float": RuleKind.DECIMAL,
    "bool": RuleKind.BOOLEAN,
    "same": RuleKind.MATCH,
})

# Parameter each parameterized kind cannot do without
REQUIRED_PARAMETERS = MappingProxyType({
    RuleKind.MIN: "threshold",
    RuleKind.MAX: "threshold",
    RuleKind.MATCH: "other_field",
    RuleKind.REGEX: "pattern",
    RuleKind.DATE_FORMAT: "format",
    RuleKind.CUSTOM: "callback",
})

DEFAULT_MESSAGES = MappingProxyType({
    RuleKind.REQUIRED: "required",
    RuleKind.INT: "int",
    RuleKind.DECIMAL: "decimal",
    RuleKind.BOOLEAN: "boolean",
    RuleKind.EMAIL: "email",
    RuleKind.URL: "url",
    RuleKind.DOMAIN: "domain",
    RuleKind.IP: "ip",
    RuleKind.DATE: "date",
    RuleKind.JSON: "json",
    RuleKind.MIN: "min:{threshold}",
    RuleKind.MAX: "max:{threshold}",
    RuleKind.MATCH: "match:{other_field}",
    RuleKind.REGEX: "regex",
    RuleKind.IN: "in",
    RuleKind.NOT_IN: "not_in",
    RuleKind.DATE_FORMAT: "date_format:{format}",
    RuleKind.CUSTOM: "custom",
    RuleKind.CONFIRMED: "confirmed",
})

CONFIRMED_SENTINEL = "confirmed"

_DELIMITED_PATTERN = re.compile(r"^([/#~!@%+])(.*)\1([A-Za-z]*)$", re.DOTALL)
_PATTERN_MODIFIERS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a rule pattern.

    Accepts plain Python regular expressions as well as delimited patterns
    with trailing modifiers, e.g. "/^ab+$/i".

    Raises:
        re.error: If the pattern does not compile
        ValueError: If a delimited pattern carries an unknown modifier
    """
    delimited = _DELIMITED_PATTERN.match(pattern)
    if not delimited:
        return re.compile(pattern)

    _, body, modifiers = delimited.groups()
    flags = 0
    for modifier in modifiers:
        if modifier not in _PATTERN_MODIFIERS:
            raise ValueError(f"Unknown pattern modifier '{modifier}'")
        flags |= _PATTERN_MODIFIERS[modifier]
    return re.compile(body, flags)


def format_threshold(threshold: float) -> str:
    """Render a threshold the way it is written in a rule string ("5", not "5.0")."""
    if float(threshold).is_integer():
        return str(int(threshold))
    return str(threshold)


def resolve_rule_name(name: str) -> RuleKind:
    """
    Resolve a (case-insensitive) rule name or alias to its canonical kind.

    Raises:
        RuleDeclarationError: If the name is not a known rule
    """
    key = name.strip().lower()
    if key in RULE_ALIASES:
        return RULE_ALIASES[key]
    try:
        return RuleKind(key)
    except ValueError:
        raise RuleDeclarationError(f"Unknown rule: '{name}'", declaration=name) from None


class RuleInstance(BaseModel):
    """
    One validation requirement for a field.

    Attributes:
        kind: Canonical rule kind, immutable once constructed
        threshold: Bound for min/max
        other_field: Field compared against by match
        pattern: Regular expression for regex
        values: Candidate values for in/not_in
        format: Date format for date_format
        callback: Predicate (value, data) for custom rules
        message: Optional override for the default error token
    """

    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    threshold: float | None = None
    other_field: str | None = None
    pattern: str | None = None
    values: tuple[Any, ...] = ()
    format: str | None = None
    callback: Callable[..., Any] | None = None
    message: str | None = None

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise RuleDeclarationError(f"Invalid rule declaration: {e}", declaration=data) from e

    @model_validator(mode="after")
    def check_parameters(self) -> "RuleInstance":
        """Reject rules missing the parameter their kind needs."""
        required = REQUIRED_PARAMETERS.get(self.kind)
        if required and getattr(self, required) is None:
            raise ValueError(f"Rule '{self.kind.value}' requires a '{required}' parameter")

        if self.threshold is not None and not math.isfinite(self.threshold):
            raise ValueError(f"Threshold must be finite, got {self.threshold}")

        if self.kind is RuleKind.REGEX:
            try:
                compile_pattern(self.pattern)
            except (re.error, ValueError) as e:
                raise ValueError(f"Invalid regex pattern '{self.pattern}': {e}") from e

        if self.kind is RuleKind.DATE_FORMAT:
            check_date_format(self.format)

        return self

    def with_message(self, message: str) -> "RuleInstance":
        """Return a copy of this rule carrying a custom message."""
        return self.model_copy(update={"message": message})

    def default_message(self) -> str:
        """Return the default error token for this rule (e.g. "min:5")."""
        template = DEFAULT_MESSAGES[self.kind]
        return template.format(
            threshold=format_threshold(self.threshold) if self.threshold is not None else "",
            other_field=self.other_field,
            format=self.format,
        )

    def error_message(self) -> str:
        """Return the message recorded when this rule fails."""
        return self.message if self.message is not None else self.default_message()

    def as_token(self) -> str:
        """
        Render this rule as a DSL segment.

        Custom rules render as an empty string: a callable has no string form,
        so the predicate and any message attached to it are lost.
        """
        if self.kind is RuleKind.CUSTOM:
            return ""

        if self.kind in (RuleKind.MIN, RuleKind.MAX):
            token = f"{self.kind.value}:{format_threshold(self.threshold)}"
        elif self.kind is RuleKind.MATCH:
            token = f"match:{self.other_field}"
        elif self.kind is RuleKind.REGEX:
            token = f"regex:{self.pattern}"
        elif self.kind in (RuleKind.IN, RuleKind.NOT_IN):
            token = f"{self.kind.value}:" + ",".join(str(v) for v in self.values)
        elif self.kind is RuleKind.DATE_FORMAT:
            token = f"date_format:{self.format}"
        else:
            token = self.kind.value

        if self.message is not None:
            token += f"|message:{self.message}"
        return token


class RuleSpec(Sequence):
    """Immutable, ordered rules for one field. Order is evaluation order."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[RuleInstance] = ()):
        self._rules: tuple[RuleInstance, ...] = tuple(rules)
        for rule in self._rules:
            if not isinstance(rule, RuleInstance):
                raise RuleDeclarationError(
                    f"RuleSpec entries must be RuleInstance, got {type(rule).__name__}",
                    declaration=rule,
                )

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RuleSpec(self._rules[index])
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RuleInstance]:
        return iter(self._rules)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RuleSpec):
            return self._rules == other._rules
        return NotImplemented

    __hash__ = None

    @property
    def kinds(self) -> list[RuleKind]:
        """Rule kinds in evaluation order."""
        return [rule.kind for rule in self._rules]

    def to_string(self) -> str:
        """Render as a pipe-joined DSL string (lossy for custom rules)."""
        return "|".join(token for token in (rule.as_token() for rule in self._rules) if token)

    def __repr__(self) -> str:
        return f"RuleSpec({list(self._rules)!r})"

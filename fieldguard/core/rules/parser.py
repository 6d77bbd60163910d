"""
Rule declaration parsing.

Turns any of the declaration forms into the canonical RuleSpec:

- a DSL string: "required|min:3|message:Too short|in:a,b,c"
- a raw list of DSL tokens, rule mappings, callables or RuleInstance values
- a RuleSpec (returned as is) or a RuleBuilder

DSL grammar:
    rules   := segment ('|' segment)*
    segment := name | name ':' params | 'message:' text
    params  := value (',' value)*

A "message:" segment attaches its text to the rule right before it; with no
rule before it, it is dropped. Rule names are case-insensitive and resolve
through the alias table (integer, float, bool, same).
"""

from collections.abc import Mapping, Sequence
from typing import Any

from fieldguard.core.exceptions import RuleDeclarationError
from fieldguard.core.models import (
    CONFIRMED_SENTINEL,
    RuleInstance,
    RuleKind,
    RuleSpec,
    resolve_rule_name,
)

from .builder import RuleBuilder

MESSAGE_PREFIX = "message:"

# Rule mapping keys accepted in the raw list form, in lookup order
_NAME_KEYS = ("rule", "type", "name")
_PARAMETER_KEYS = ("params", "parameters")

# Single-parameter keys also accepted in rule mappings: {"rule": "min", "min": 3}
_NAMED_PARAMETER_KEYS = {
    RuleKind.MIN: "min",
    RuleKind.MAX: "max",
    RuleKind.MATCH: "match",
    RuleKind.REGEX: "pattern",
    RuleKind.IN: "values",
    RuleKind.NOT_IN: "values",
    RuleKind.DATE_FORMAT: "format",
}


def parse_rules(declaration: Any) -> RuleSpec:
    """
    Resolve a rule declaration to a canonical RuleSpec.

    Args:
        declaration: DSL string, raw list, RuleSpec or RuleBuilder

    Returns:
        The RuleSpec, in declaration order

    Raises:
        RuleDeclarationError: If the declaration is malformed
    """
    if isinstance(declaration, RuleSpec):
        return declaration
    if isinstance(declaration, RuleBuilder):
        return declaration.build_spec()
    if isinstance(declaration, str):
        return parse_rule_string(declaration)
    if isinstance(declaration, Sequence):
        return parse_rule_list(declaration)

    raise RuleDeclarationError(
        f"Unsupported rule declaration type: {type(declaration).__name__}",
        declaration=declaration,
    )


def parse_rule_string(rules: str) -> RuleSpec:
    """Parse a pipe-delimited DSL string."""
    builder = RuleBuilder()
    for segment in split_segments(rules):
        _apply_segment(builder, segment)
    return builder.build_spec()


def parse_rule_list(rules: Sequence[Any]) -> RuleSpec:
    """
    Parse the raw list form.

    A list made only of RuleInstance values is taken as canonical. Otherwise
    each entry may be a DSL token (message tokens included), a mapping such as
    {"rule": "min", "params": [3], "message": "..."} or {"name": "min", "min": 3},
    a callable (a custom rule), or a RuleInstance.
    """
    if all(isinstance(rule, RuleInstance) for rule in rules):
        return RuleSpec(rules)

    builder = RuleBuilder()
    for entry in rules:
        if isinstance(entry, RuleInstance):
            builder.append(entry)
        elif isinstance(entry, str):
            for segment in split_segments(entry):
                _apply_segment(builder, segment)
        elif isinstance(entry, Mapping):
            builder.append(_rule_from_mapping(entry))
        elif callable(entry):
            builder.custom(entry)
        else:
            raise RuleDeclarationError(
                f"Unsupported rule entry type: {type(entry).__name__}",
                declaration=entry,
            )
    return builder.build_spec()


def split_segments(rules: str) -> list[str]:
    """Split on "|", trim each segment and drop empty ones."""
    return [segment.strip() for segment in rules.split("|") if segment.strip()]


def make_rule(name: str, params: Sequence[Any] = (), callback: Any = None) -> RuleInstance:
    """
    Build a rule from a name and positional parameters.

    The first parameter is the threshold (min/max), other field (match),
    pattern (regex) or format (date_format); in/not_in take every parameter
    as a candidate value. Thresholds are converted to float here.

    Raises:
        RuleDeclarationError: For unknown names or missing/invalid parameters
    """
    kind = resolve_rule_name(str(name))
    first = params[0] if params else None
    if first == "":
        first = None

    if kind in (RuleKind.MIN, RuleKind.MAX):
        return RuleInstance(kind=kind, threshold=_parse_threshold(kind, first))
    if kind is RuleKind.MATCH:
        return RuleInstance(kind=kind, other_field=first)
    if kind is RuleKind.REGEX:
        return RuleInstance(kind=kind, pattern=first)
    if kind is RuleKind.DATE_FORMAT:
        return RuleInstance(kind=kind, format=first)
    if kind in (RuleKind.IN, RuleKind.NOT_IN):
        return RuleInstance(kind=kind, values=tuple(params))
    if kind is RuleKind.CUSTOM:
        return RuleInstance(kind=kind, callback=callback)
    return RuleInstance(kind=kind)


def normalize_confirmed(field_name: str, rules: RuleSpec) -> RuleSpec:
    """
    Rewrite confirmation rules into explicit match rules.

    Both a bare "confirmed" rule and a match rule targeting the literal field
    "confirmed" become match:{field_name}_confirmation. Position and message
    are kept; every other rule is passed through. The input is not modified.
    """
    target = f"{field_name}_confirmation"
    normalized = []
    for rule in rules:
        if rule.kind is RuleKind.CONFIRMED:
            normalized.append(RuleInstance(kind=RuleKind.MATCH, other_field=target, message=rule.message))
        elif rule.kind is RuleKind.MATCH and rule.other_field == CONFIRMED_SENTINEL:
            normalized.append(rule.model_copy(update={"other_field": target}))
        else:
            normalized.append(rule)
    return RuleSpec(normalized)


def apply_messages(declarations: Mapping[str, Any], messages: Mapping[str, str]) -> dict[str, Any]:
    """
    Attach custom messages keyed "field.rule" to the matching rules.

    Keys without a dot, or naming a field with no declaration, are ignored.
    Fields that receive a message come back as RuleSpec; others are returned
    unchanged.

    Example:
        apply_messages({"email": "required|email"}, {"email.required": "Email is required"})
    """
    result = dict(declarations)
    for key, text in messages.items():
        if "." not in key:
            continue
        field_name, rule_name = key.split(".", 1)
        if field_name not in result:
            continue

        kind = resolve_rule_name(rule_name)
        spec = parse_rules(result[field_name])
        result[field_name] = RuleSpec(
            rule.with_message(text) if rule.kind is kind else rule for rule in spec
        )
    return result


def _apply_segment(builder: RuleBuilder, segment: str) -> None:
    if segment.startswith(MESSAGE_PREFIX):
        builder.message(segment[len(MESSAGE_PREFIX):])
        return

    if ":" in segment:
        name, raw_params = segment.split(":", 1)
        params = [param.strip() for param in raw_params.split(",")]
        builder.append(make_rule(name, params))
    else:
        builder.append(make_rule(segment))


def _rule_from_mapping(entry: Mapping[str, Any]) -> RuleInstance:
    name = next((entry[key] for key in _NAME_KEYS if key in entry), None)
    if name is None:
        raise RuleDeclarationError(
            f"Rule mapping is missing one of {list(_NAME_KEYS)}",
            declaration=entry,
        )

    named_key = _NAMED_PARAMETER_KEYS.get(resolve_rule_name(str(name)))
    parameter_keys = _PARAMETER_KEYS + ((named_key,) if named_key else ())
    params = next((entry[key] for key in parameter_keys if key in entry), ())
    if isinstance(params, str) or not isinstance(params, Sequence):
        params = [params]

    rule = make_rule(name, list(params), callback=entry.get("callback"))
    if entry.get("message") is not None:
        rule = rule.with_message(str(entry["message"]))
    return rule


def _parse_threshold(kind: RuleKind, raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        raise RuleDeclarationError(f"Rule '{kind.value}' requires a numeric threshold", declaration=raw)
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise RuleDeclarationError(
            f"Rule '{kind.value}' requires a numeric threshold, got {raw!r}",
            declaration=raw,
        ) from None

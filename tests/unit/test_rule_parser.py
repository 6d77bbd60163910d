"""
Unit tests for rule parsing and confirmation normalization.

Includes property-based testing with hypothesis for the normalizer.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fieldguard.core.exceptions import RuleDeclarationError
from fieldguard.core.models import RuleInstance, RuleKind, RuleSpec
from fieldguard.core.rules import (
    RuleBuilder,
    apply_messages,
    make_rule,
    normalize_confirmed,
    parse_rule_string,
    parse_rules,
)

RULE_TOKENS = [
    "required", "int", "integer", "decimal", "float", "boolean", "bool",
    "email", "url", "domain", "ip", "date", "json", "confirmed",
    "min:3", "max:10", "match:other", "same:confirmed", "regex:^a",
    "in:a,b,c", "not_in:x,y", "date_format:Y-m-d", "message:custom text",
]


class TestParseRuleString:
    """Tests for the DSL string parser"""

    def test_splits_and_trims_segments(self):
        """Test segments are trimmed and empty segments dropped"""
        spec = parse_rule_string(" required | | email |")
        assert spec.kinds == [RuleKind.REQUIRED, RuleKind.EMAIL]

    def test_empty_string_gives_empty_spec(self):
        """Test an empty declaration has no rules"""
        assert parse_rule_string("") == RuleSpec()

    def test_parameters(self):
        """Test positional parameters per rule kind"""
        spec = parse_rule_string("min:3|max: 10.5|match:password|regex:^[a-z]+$|date_format:d/m/Y")

        assert spec[0].threshold == 3.0
        assert spec[1].threshold == 10.5
        assert spec[2].other_field == "password"
        assert spec[3].pattern == "^[a-z]+$"
        assert spec[4].format == "d/m/Y"

    def test_enumeration_parameters_are_trimmed(self):
        """Test in/not_in take every parameter, trimmed"""
        spec = parse_rule_string("in: admin , editor ,viewer|not_in:guest,bot")

        assert spec[0].values == ("admin", "editor", "viewer")
        assert spec[1].values == ("guest", "bot")

    def test_names_are_case_insensitive(self):
        """Test rule names ignore case"""
        spec = parse_rule_string("REQUIRED|Email|MIN:2")
        assert spec.kinds == [RuleKind.REQUIRED, RuleKind.EMAIL, RuleKind.MIN]

    def test_aliases(self):
        """Test aliases resolve to canonical kinds"""
        spec = parse_rule_string("integer|float|bool|same:other")
        assert spec.kinds == [RuleKind.INT, RuleKind.DECIMAL, RuleKind.BOOLEAN, RuleKind.MATCH]

    def test_message_attaches_to_preceding_rule(self):
        """Test message segments patch the rule before them"""
        spec = parse_rule_string("required|message:Name is required|min:3")

        assert spec[0].message == "Name is required"
        assert spec[1].message is None
        assert len(spec) == 2

    def test_message_text_is_kept_raw(self):
        """Test message text keeps colons and commas"""
        spec = parse_rule_string("regex:^a|message:Must start with: a, b")
        assert spec[0].message == "Must start with: a, b"

    def test_leading_message_is_dropped(self):
        """Test a message with no preceding rule is silently discarded"""
        spec = parse_rule_string("message:orphan|required")

        assert spec.kinds == [RuleKind.REQUIRED]
        assert spec[0].message is None

    def test_non_numeric_threshold_raises_error(self):
        """Test thresholds are parsed at parse time"""
        with pytest.raises(RuleDeclarationError) as exc_info:
            parse_rule_string("required|min:abc")

        assert "numeric" in str(exc_info.value).lower()

    def test_missing_threshold_raises_error(self):
        """Test an empty threshold is a declaration error"""
        with pytest.raises(RuleDeclarationError):
            parse_rule_string("max:")

    def test_unknown_rule_raises_error(self):
        """Test unknown rule names fail fast"""
        with pytest.raises(RuleDeclarationError):
            parse_rule_string("required|mime:text/plain")

    def test_invalid_regex_raises_error(self):
        """Test bad patterns fail fast"""
        with pytest.raises(RuleDeclarationError):
            parse_rule_string("regex:[")

    def test_date_format_repeating_a_field_raises_error(self):
        """Test formats that name the same date field twice fail fast"""
        for declaration in ("date_format:d j", "date_format:Y Y", "date_format:%d %d", "date_format:H G"):
            with pytest.raises(RuleDeclarationError) as exc_info:
                parse_rule_string(declaration)

            assert "repeats" in str(exc_info.value)

    def test_date_format_with_distinct_fields_is_accepted(self):
        """Test formats with escaped and distinct characters parse"""
        spec = parse_rule_string("date_format:Y-m-d \\d\\a\\y|date_format:%d%%d")
        assert spec.kinds == [RuleKind.DATE_FORMAT, RuleKind.DATE_FORMAT]

    @given(st.lists(st.sampled_from(RULE_TOKENS), max_size=12))
    def test_property_rule_count(self, tokens):
        """Property test: every non-message token after the first rule yields one rule"""
        spec = parse_rule_string("|".join(tokens))
        assert len(spec) == sum(1 for token in tokens if not token.startswith("message:"))


class TestParseRules:
    """Tests for resolving every declaration form"""

    def test_rule_spec_passes_through(self):
        """Test a RuleSpec is returned unchanged"""
        spec = RuleSpec([RuleInstance(kind=RuleKind.REQUIRED)])
        assert parse_rules(spec) is spec

    def test_builder_is_materialized(self):
        """Test a builder resolves to its spec"""
        builder = RuleBuilder.create().required().email()
        assert parse_rules(builder) == builder.build_spec()

    def test_canonical_list_passes_through(self):
        """Test a list of RuleInstance values is taken as canonical"""
        rules = [RuleInstance(kind=RuleKind.REQUIRED), RuleInstance(kind=RuleKind.MIN, threshold=2)]
        assert parse_rules(rules) == RuleSpec(rules)

    def test_raw_list_of_tokens(self):
        """Test a list of DSL tokens, including message tokens"""
        spec = parse_rules(["required", "message:Needed", "min:18", "in:a,b"])

        assert spec.kinds == [RuleKind.REQUIRED, RuleKind.MIN, RuleKind.IN]
        assert spec[0].message == "Needed"
        assert spec[1].threshold == 18.0

    def test_raw_list_of_mixed_entries(self):
        """Test mappings, callables and rule instances in one list"""

        def is_even(value, data):
            return value % 2 == 0

        spec = parse_rules([
            "required",
            {"rule": "min", "params": [18], "message": "Too young"},
            {"type": "in", "params": ["a", "b"]},
            {"name": "max", "parameters": 99},
            is_even,
            RuleInstance(kind=RuleKind.INT),
        ])

        assert spec.kinds == [
            RuleKind.REQUIRED, RuleKind.MIN, RuleKind.IN, RuleKind.MAX, RuleKind.CUSTOM, RuleKind.INT,
        ]
        assert spec[1].threshold == 18.0
        assert spec[1].message == "Too young"
        assert spec[2].values == ("a", "b")
        assert spec[3].threshold == 99.0
        assert spec[4].callback is is_even

    def test_mapping_with_named_parameters(self):
        """Test mappings that give the parameter under its own key"""
        spec = parse_rules([
            {"name": "min", "min": 3},
            {"name": "max", "max": "10"},
            {"rule": "same", "match": "password"},
            {"rule": "regex", "pattern": "^a,b$"},
            {"rule": "not_in", "values": ["guest", "bot"]},
            {"rule": "date_format", "format": "d/m/Y"},
        ])

        assert spec[0].threshold == 3.0
        assert spec[1].threshold == 10.0
        assert spec[2].other_field == "password"
        assert spec[3].pattern == "^a,b$"
        assert spec[4].values == ("guest", "bot")
        assert spec[5].format == "d/m/Y"

    def test_params_key_wins_over_named_parameter(self):
        """Test params is read first when both keys are given"""
        spec = parse_rules([{"rule": "min", "params": [5], "min": 3}])
        assert spec[0].threshold == 5.0

    def test_mapping_without_name_raises_error(self):
        """Test rule mappings must name their rule"""
        with pytest.raises(RuleDeclarationError):
            parse_rules([{"params": [3]}])

    def test_unsupported_declaration_raises_error(self):
        """Test unsupported declaration types fail fast"""
        with pytest.raises(RuleDeclarationError):
            parse_rules(42)

        with pytest.raises(RuleDeclarationError):
            parse_rules(["required", 42])

    def test_make_rule_custom_requires_callback(self):
        """Test custom rules need a callable"""
        with pytest.raises(RuleDeclarationError):
            make_rule("custom")


class TestNormalizeConfirmed:
    """Tests for the confirmation normalizer"""

    def test_confirmed_becomes_match(self):
        """Test confirmed is rewritten to match the _confirmation field"""
        spec = normalize_confirmed("password", parse_rule_string("required|confirmed|min:8"))

        assert spec.kinds == [RuleKind.REQUIRED, RuleKind.MATCH, RuleKind.MIN]
        assert spec[1].other_field == "password_confirmation"

    def test_confirmed_sentinel_match_is_rewritten(self):
        """Test match:confirmed is rewritten the same way"""
        spec = normalize_confirmed("password", parse_rule_string("same:confirmed|message:Must match"))

        assert spec[0].kind is RuleKind.MATCH
        assert spec[0].other_field == "password_confirmation"
        assert spec[0].message == "Must match"

    def test_message_is_preserved(self):
        """Test the message of a confirmed rule survives the rewrite"""
        spec = normalize_confirmed("email", parse_rule_string("confirmed|message:Emails differ"))
        assert spec[0].message == "Emails differ"

    def test_other_rules_pass_through(self):
        """Test unrelated rules are untouched, including other match targets"""
        original = parse_rule_string("required|match:other|email")
        assert normalize_confirmed("field", original) == original

    def test_input_is_not_mutated(self):
        """Test the normalizer returns a new spec"""
        original = parse_rule_string("confirmed")
        normalize_confirmed("password", original)

        assert original.kinds == [RuleKind.CONFIRMED]

    @given(
        st.sampled_from(["password", "email", "pin"]),
        st.lists(st.sampled_from(RULE_TOKENS), max_size=10),
    )
    def test_property_idempotent(self, field_name, tokens):
        """Property test: normalizing twice equals normalizing once"""
        once = normalize_confirmed(field_name, parse_rule_string("|".join(tokens)))
        assert normalize_confirmed(field_name, once) == once
        assert RuleKind.CONFIRMED not in once.kinds


class TestApplyMessages:
    """Tests for field.rule custom messages"""

    def test_message_attaches_to_named_rule(self):
        """Test the message lands on the matching rule only"""
        declarations = apply_messages(
            {"email": "required|email", "name": "required"},
            {"email.required": "Email is required"},
        )

        assert declarations["email"][0].message == "Email is required"
        assert declarations["email"][1].message is None
        assert declarations["name"] == "required"

    def test_alias_keys_match_canonical_rules(self):
        """Test message keys resolve aliases"""
        declarations = apply_messages({"age": ["int"]}, {"age.integer": "Whole numbers only"})
        assert declarations["age"][0].message == "Whole numbers only"

    def test_irrelevant_keys_are_ignored(self):
        """Test keys without a dot or for undeclared fields are ignored"""
        declarations = {"email": "required|email"}
        assert apply_messages(declarations, {"email": "x", "phone.required": "y"}) == declarations

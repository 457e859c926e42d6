"""Tests for recordcheck.rules — rule/message coercion and shape checks."""

import re

import pytest

from recordcheck.errors import ConfigurationError
from recordcheck.rules import FieldType, Message, Rule, coerce_messages, coerce_rules


class TestCoerceRules:
    def test_plain_dict(self) -> None:
        rules = coerce_rules({"age": {"type": "number", "required": True, "min": 18}})
        rule = rules["age"]
        assert rule.type is FieldType.NUMBER
        assert rule.required is True
        assert rule.min == 18
        assert rule.max is None

    def test_rule_instance_accepted(self) -> None:
        rule = Rule(required=True)
        assert coerce_rules({"name": rule})["name"] == rule

    def test_rule_instance_normalized(self) -> None:
        rule = coerce_rules({"zip": Rule(type="string", regex=r"^\d{5}$")})["zip"]  # type: ignore[arg-type]
        assert rule.type is FieldType.STRING
        assert isinstance(rule.regex, re.Pattern)

    def test_none_is_empty(self) -> None:
        assert coerce_rules(None) == {}

    def test_type_is_optional(self) -> None:
        assert coerce_rules({"name": {"required": True}})["name"].type is None

    def test_regex_string_compiled(self) -> None:
        rule = coerce_rules({"zip": {"regex": r"^\d{5}$"}})["zip"]
        assert isinstance(rule.regex, re.Pattern)

    def test_compiled_regex_kept(self) -> None:
        pattern = re.compile(r"^\d{5}$")
        assert coerce_rules({"zip": {"regex": pattern}})["zip"].regex is pattern

    def test_callables(self) -> None:
        rule = coerce_rules({"x": {"custom": bool, "skip": lambda record: False}})["x"]
        assert rule.custom is bool
        assert callable(rule.skip)


class TestRuleShape:
    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'age'"):
            coerce_rules({"age": ["number"]})

    def test_rules_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="mapping"):
            coerce_rules([("age", {})])  # type: ignore[arg-type]

    def test_unknown_property(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown rule properties for 'age': minimum"):
            coerce_rules({"age": {"minimum": 3}})

    def test_unknown_type(self) -> None:
        with pytest.raises(ConfigurationError, match="'type' property for 'age'"):
            coerce_rules({"age": {"type": "decimal"}})

    def test_required_must_be_bool(self) -> None:
        with pytest.raises(ConfigurationError, match="'required' property for 'name'"):
            coerce_rules({"name": {"required": "yes"}})

    def test_min_must_be_number(self) -> None:
        with pytest.raises(ConfigurationError, match="'min' property for 'name'"):
            coerce_rules({"name": {"min": "3"}})

    def test_max_rejects_bool(self) -> None:
        with pytest.raises(ConfigurationError, match="'max' property for 'name'"):
            coerce_rules({"name": {"max": True}})

    def test_match_must_be_str(self) -> None:
        with pytest.raises(ConfigurationError, match="'match' property"):
            coerce_rules({"confirm": {"match": 1}})

    def test_unknown_special_check(self) -> None:
        with pytest.raises(ConfigurationError, match="'validate' property for 'site'"):
            coerce_rules({"site": {"validate": "url"}})

    def test_custom_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="'custom' property for 'x'"):
            coerce_rules({"x": {"custom": True}})

    def test_skip_must_be_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="'skip' property for 'x'"):
            coerce_rules({"x": {"skip": "never"}})

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="not a valid pattern"):
            coerce_rules({"x": {"regex": "(unclosed"}})

    def test_regex_wrong_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="'regex' property for 'x'"):
            coerce_rules({"x": {"regex": 42}})


class TestCoerceMessages:
    def test_plain_dict(self) -> None:
        messages = coerce_messages({"age": {"min": "Too young"}})
        assert messages["age"] == Message(min="Too young")

    def test_get(self) -> None:
        message = Message(required="Needed")
        assert message.get("required") == "Needed"
        assert message.get("type") is None

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown message properties for 'age'"):
            coerce_messages({"age": {"too_small": "x"}})

    def test_text_must_be_str(self) -> None:
        with pytest.raises(ConfigurationError, match="'min' message for 'age'"):
            coerce_messages({"age": {"min": 18}})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'age'"):
            coerce_messages({"age": "Too young"})


class TestFrozen:
    def test_rule_frozen(self) -> None:
        rule = Rule()
        with pytest.raises(AttributeError):
            rule.required = True  # type: ignore[misc]

    def test_message_frozen(self) -> None:
        message = Message()
        with pytest.raises(AttributeError):
            message.type = "x"  # type: ignore[misc]


class TestInstanceShape:
    def test_unknown_type(self) -> None:
        with pytest.raises(ConfigurationError, match="'type' property for 'age'"):
            coerce_rules({"age": Rule(type="nmber")})  # type: ignore[arg-type]

    def test_unknown_special_check(self) -> None:
        with pytest.raises(ConfigurationError, match="'validate' property for 'phone'"):
            coerce_rules({"phone": Rule(validate="phone")})

    def test_regex_wrong_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="'regex' property for 'code'"):
            coerce_rules({"code": Rule(regex=123)})  # type: ignore[arg-type]

    def test_min_wrong_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="'min' property for 'age'"):
            coerce_rules({"age": Rule(min="18")})  # type: ignore[arg-type]

    def test_message_text_wrong_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="'min' message for 'age'"):
            coerce_messages({"age": Message(min=18)})  # type: ignore[arg-type]

    def test_validator_rejects_bad_instance(self) -> None:
        from recordcheck import Validator

        with pytest.raises(ConfigurationError, match="'age'"):
            Validator({"age": Rule(type="nmber")})  # type: ignore[arg-type]

"""Tests for the Map/Key combinator."""

from __future__ import annotations

from rulekit.context import Context
from rulekit.errors import (
    ERR_KEY_MISSING,
    ERR_KEY_UNEXPECTED,
    ERR_KEY_WRONG_TYPE,
    ERR_REQUIRED,
    Errors,
    InternalError,
)
from rulekit.config import ValidationConfig
from rulekit.validation import By, Key, Length, Map, Required, validate, validate_with_context
from tests.conftest import Address, ContextProbe, CountingRule


class TestMap:
    def test_valid_mapping(self) -> None:
        rule = Map(Key("name", Required), Key("age"))
        assert validate({"name": "ann", "age": 3}, rule) is None

    def test_absent_mapping_is_valid(self) -> None:
        assert validate(None, Map(Key("name", Required))) is None

    def test_non_mapping_is_internal(self) -> None:
        err = validate(["name"], Map(Key("name")))
        assert isinstance(err, InternalError)
        assert str(err) == "only a map can be validated"

    def test_missing_key(self) -> None:
        err = validate({"age": 3}, Map(Key("name", Required), Key("age")))
        assert err == {"name": ERR_KEY_MISSING}

    def test_optional_key_may_be_missing(self) -> None:
        assert validate({}, Map(Key("name", Required).optional())) is None

    def test_optional_key_still_validated_when_present(self) -> None:
        err = validate({"name": ""}, Map(Key("name", Required).optional()))
        assert err == {"name": ERR_REQUIRED}

    def test_unexpected_keys(self) -> None:
        err = validate({"name": "ann", "extra": 1}, Map(Key("name")))
        assert err == {"extra": ERR_KEY_UNEXPECTED}

    def test_allow_extra_keys(self) -> None:
        rule = Map(Key("name")).allow_extra_keys()
        assert rule.extra_keys_allowed
        assert validate({"name": "ann", "extra": 1}, rule) is None

    def test_wrong_key_type(self) -> None:
        err = validate({1: "a"}, Map(Key("name")).allow_extra_keys())
        assert err == {"name": ERR_KEY_WRONG_TYPE}

    def test_non_string_keys(self) -> None:
        err = validate({1: "", 2: "b"}, Map(Key(1, Required), Key(2)))
        assert list(err) == ["1"]

    def test_error_key(self) -> None:
        err = validate({"n": ""}, Map(Key("n", Required, error_key="name")))
        assert list(err) == ["name"]

    def test_all_keys_are_checked(self) -> None:
        err = validate({"a": "", "b": "x"}, Map(Key("a", Required), Key("b", Length(2, 3))))
        assert str(err) == "a: cannot be blank; b: the length must be between 2 and 3."

    def test_nested_maps(self) -> None:
        rule = Map(Key("address", Map(Key("zip", Required))))
        err = validate({"address": {"zip": ""}}, rule)
        assert str(err) == "address: (zip: cannot be blank.)."

    def test_values_are_dived(self) -> None:
        err = validate({"home": Address()}, Map(Key("home")))
        assert isinstance(err["home"], Errors)

    def test_internal_error_aborts(self) -> None:
        def lookup(value):
            raise TimeoutError("slow")

        later = CountingRule()
        err = validate({"a": 1, "b": 2}, Map(Key("a", By(lookup)), Key("b", later)))
        assert isinstance(err, InternalError)
        assert later.calls == 0

    def test_context_reaches_key_rules(self) -> None:
        probe = ContextProbe()
        ctx = Context.background().with_value("k", 1)
        validate_with_context(ctx, {"a": 1}, Map(Key("a", probe)))
        assert probe.contexts == [ctx]

    def test_config_reaches_composite_errors(self) -> None:
        config = ValidationConfig().with_messages(validation_key_missing="is missing")
        err = validate({}, Map(Key("name")), config=config)
        assert str(err) == "name: is missing."

    def test_map_validates_directly(self) -> None:
        assert Map(Key("a", Required)).validate({"a": ""}) == {"a": ERR_REQUIRED}

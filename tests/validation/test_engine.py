"""Tests for rule-chain evaluation and the scalar entry points."""

from __future__ import annotations

import pytest

from rulekit.config import ValidationConfig, set_default_config
from rulekit.context import Context
from rulekit.errors import ERR_LENGTH_OUT_OF_RANGE, ERR_REQUIRED, Errors, InternalError, ValidationError
from rulekit.validation import (
    By,
    Field,
    Length,
    Required,
    Skip,
    WithContext,
    ensure_valid,
    validate,
    validate_struct,
    validate_with_context,
)
from tests.conftest import ALLOWED_SLUGS, ERR_EVEN, Address, ContextProbe, CountingRule, Customer, Tenant, is_even


class TestChain:
    def test_no_rules_is_valid(self) -> None:
        assert validate("anything") is None

    def test_rules_run_in_order_and_stop_at_first_error(self) -> None:
        first, second, third = CountingRule(), CountingRule(ERR_REQUIRED), CountingRule()
        assert validate("x", first, second, third) is ERR_REQUIRED
        assert (first.calls, second.calls, third.calls) == (1, 1, 0)

    def test_absent_value_only_reaches_absence_rules(self) -> None:
        plain, absence = CountingRule(), CountingRule(checks_absence=True)
        assert validate(None, plain, absence) is None
        assert plain.calls == 0
        assert absence.seen == [None]

    def test_skip_stops_chain(self, counting_rule: CountingRule) -> None:
        assert validate("x", Skip, counting_rule) is None
        assert counting_rule.calls == 0

    def test_inactive_skip_is_ignored(self, counting_rule: CountingRule) -> None:
        assert validate("x", Skip.when(False), counting_rule) is None
        assert counting_rule.calls == 1

    def test_skip_after_failure_does_not_hide_error(self) -> None:
        assert validate("", Required, Skip) == ERR_REQUIRED

    def test_plain_exception_is_returned(self) -> None:
        err = ValueError("bad")
        assert validate("x", CountingRule(err)) is err


class TestFunctionRules:
    def test_by(self) -> None:
        assert validate(4, By(is_even)) is None
        assert validate(3, By(is_even)) is ERR_EVEN

    def test_by_raised_validation_error_is_returned(self) -> None:
        def check(value):
            raise ERR_EVEN.copy()

        assert validate(3, By(check)) == ERR_EVEN

    def test_by_raised_exception_becomes_internal(self) -> None:
        def check(value):
            raise ConnectionError("lookup failed")

        err = validate(3, By(check))
        assert isinstance(err, InternalError)
        assert isinstance(err.cause, ConnectionError)

    def test_with_context_receives_context(self) -> None:
        ctx = Context.background().with_value("limit", 3)
        rule = WithContext(lambda c, v: None if v <= c.value("limit") else ERR_EVEN)
        assert validate_with_context(ctx, 2, rule) is None
        assert validate_with_context(ctx, 5, rule) is ERR_EVEN


class TestContextRules:
    def test_context_rule_gets_context(self) -> None:
        probe = ContextProbe()
        ctx = Context.background().with_value("k", "v")
        validate_with_context(ctx, "x", probe)
        assert probe.contexts == [ctx]
        assert probe.plain_calls == 0

    def test_plain_validate_uses_plain_entry(self) -> None:
        probe = ContextProbe()
        validate("x", probe)
        assert probe.plain_calls == 1

    def test_none_context_behaves_like_validate(self) -> None:
        probe = ContextProbe()
        validate_with_context(None, "x", probe)
        assert probe.plain_calls == 1


class TestDive:
    def test_validatable_value_is_checked(self) -> None:
        err = validate(Address(street="123 Main Street", city="Vienna", state="Virginia", zip="12345"))
        assert isinstance(err, Errors)
        assert str(err) == "state: must be in a valid format."

    def test_dive_after_chain_passes(self, valid_address: Address) -> None:
        assert validate(valid_address, Required) is None

    def test_failed_chain_suppresses_dive(self) -> None:
        rule = CountingRule(ERR_REQUIRED)
        assert validate(Address(), rule) is ERR_REQUIRED

    def test_skip_suppresses_dive(self) -> None:
        assert validate(Address(), Skip) is None

    def test_skip_after_passing_rule_suppresses_dive(self) -> None:
        rule = CountingRule()
        assert validate(Address(), rule, Skip) is None
        assert rule.calls == 1

    def test_skip_in_field_chain_suppresses_dive(self) -> None:
        rule = CountingRule()
        customer = Customer(name="Qiang Xue", email="q@example.com")
        assert validate_struct(customer, Field("address", rule, Skip)) is None
        assert validate_struct(customer, Field("address", Required, Skip)) is None
        assert rule.calls == 1

    def test_absent_value_is_not_dived(self) -> None:
        assert validate(None) is None

    def test_sequence_of_validatables(self, valid_address: Address) -> None:
        err = validate([valid_address, Address(street="123 Main Street", city="Vienna", state="VA"), None])
        assert str(err) == "1: (zip: cannot be blank.)."

    def test_mapping_of_validatables(self, valid_address: Address) -> None:
        err = validate({"home": valid_address, "work": Address(city="Vienna", state="VA", zip="12345")})
        assert str(err) == "work: (street: cannot be blank.)."

    def test_non_validatable_elements_are_ignored(self) -> None:
        assert validate([1, "x", None]) is None

    def test_validatable_with_context(self) -> None:
        assert validate(Tenant(slug="acme")) is None
        ctx = Context.background().with_value("allowed_slugs", ("other",))
        assert validate_with_context(ctx, Tenant(slug="acme")) is None

    def test_context_reaches_nested_validatable(self) -> None:
        ctx = Context.background().with_value(ALLOWED_SLUGS, ("other",))
        err = validate_with_context(ctx, [Tenant(slug="acme")])
        assert str(err) == "0: (slug: must be an allowed slug.)."


class TestConfig:
    def test_default_message_override(self) -> None:
        config = ValidationConfig().with_messages(validation_required="is mandatory")
        err = validate("", Required, config=config)
        assert str(err) == "is mandatory"
        assert err.code == "validation_required"

    def test_customised_message_is_not_overridden(self) -> None:
        config = ValidationConfig().with_messages(validation_required="is mandatory")
        assert str(validate("", Required.error("give a name"), config=config)) == "give a name"

    def test_override_keeps_params(self) -> None:
        config = ValidationConfig().with_messages(validation_length_out_of_range="{min}..{max} chars")
        assert str(validate("a", Length(2, 4), config=config)) == "2..4 chars"

    def test_process_default(self) -> None:
        set_default_config(ValidationConfig(default_messages={"validation_required": "needed"}))
        assert str(validate(None, Required)) == "needed"

    def test_config_reaches_nested_validate_struct(self) -> None:
        config = ValidationConfig(default_messages={"validation_required": "is mandatory"})
        address = Address(street="123 Main Street", city="Vienna", state="VA")
        assert str(validate(address, config=config)) == "zip: is mandatory."
        assert str(validate(address)) == "zip: cannot be blank."

    def test_config_reaches_validatable_elements(self) -> None:
        config = ValidationConfig(default_messages={"validation_required": "is mandatory"})
        err = validate([Address(street="123 Main Street", city="Vienna", state="VA")], config=config)
        assert str(err) == "0: (zip: is mandatory.)."

    def test_config_reaches_nested_field_dive(self) -> None:
        config = ValidationConfig(default_messages={"validation_required": "is mandatory"})
        customer = Customer(name="Qiang Xue", email="q@example.com", address=Address(city="Vienna", state="VA", zip="12345"))
        assert str(validate(customer, config=config)) == "address: (street: is mandatory.)."

    def test_explicit_config_wins_over_enclosing_one(self) -> None:
        outer = ValidationConfig(default_messages={"validation_required": "outer"})
        inner = ValidationConfig(default_messages={"validation_required": "inner"})
        seen = []

        def nested(value):
            seen.append(str(validate("", Required)))
            seen.append(str(validate("", Required, config=inner)))

        validate("x", By(nested), config=outer)
        assert seen == ["outer", "inner"]


class TestEnsureValid:
    def test_passes_silently(self) -> None:
        ensure_valid("abc", Required)

    def test_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError, match="cannot be blank"):
            ensure_valid("", Required)

    def test_raised_error_is_a_fresh_copy(self) -> None:
        with pytest.raises(ValidationError) as info:
            ensure_valid("", Required)
        assert info.value == ERR_REQUIRED
        assert info.value is not ERR_REQUIRED
        assert ERR_REQUIRED.__traceback__ is None

    def test_raised_error_keeps_params(self) -> None:
        with pytest.raises(ValidationError, match="between 5 and 50") as info:
            ensure_valid("abc", Length(5, 50))
        assert info.value.code == ERR_LENGTH_OUT_OF_RANGE.code

    def test_shared_error_stays_intact(self) -> None:
        err = validate("", Required)
        with pytest.raises(AttributeError):
            err.message = "altered"
        assert str(validate("", Required)) == "cannot be blank"

    def test_raises_errors(self) -> None:
        with pytest.raises(Errors):
            ensure_valid(Customer())

    def test_raises_internal_error(self) -> None:
        def broken(value):
            raise RuntimeError("down")

        with pytest.raises(InternalError):
            ensure_valid("x", By(broken))

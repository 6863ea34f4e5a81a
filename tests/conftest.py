"""Shared pytest fixtures and test helpers for rulekit tests."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Any

import pytest

from rulekit.config import ValidationConfig, set_default_config
from rulekit.context import Context, ContextKey
from rulekit.errors import ValidationError, new_error
from rulekit.validation import (
    ContextRule,
    Email,
    Field,
    In,
    Length,
    Match,
    Required,
    Rule,
    Validatable,
    ValidatableWithContext,
    validate_struct,
    validate_struct_with_context,
)

ERR_EVEN = new_error("even", "must be even")
ALLOWED_SLUGS = ContextKey[tuple]("allowed_slugs", default=("acme",))


class CountingRule(Rule):
    """Rule recording every value it sees; fails with ``err`` when set."""

    def __init__(self, err: BaseException | None = None, checks_absence: bool = False) -> None:
        self.err, self.seen = err, []
        self.checks_absence = checks_absence

    def validate(self, value: Any) -> BaseException | None:
        self.seen.append(value)
        return self.err

    @property
    def calls(self) -> int:
        return len(self.seen)


class ContextProbe(ContextRule):
    """Context-aware rule recording the contexts it receives."""

    def __init__(self, err: BaseException | None = None) -> None:
        self.err, self.contexts, self.plain_calls = err, [], 0

    def validate(self, value: Any) -> BaseException | None:
        self.plain_calls += 1
        return super().validate(value)

    def validate_with_context(self, ctx: Context, value: Any) -> BaseException | None:
        self.contexts.append(ctx)
        return self.err


def is_even(value: Any) -> ValidationError | None:
    return None if value % 2 == 0 else ERR_EVEN


@dataclass
class Address(Validatable):
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    def validate(self):
        return validate_struct(self,
            Field("street", Required, Length(5, 50)),
            Field("city", Required, Length(5, 50)),
            Field("state", Required, Match(r"^[A-Z]{2}$")),
            Field("zip", Required, Match(r"^[0-9]{5}$")),
        )


@dataclass
class Customer(Validatable):
    name: str = ""
    gender: str = ""
    email: str = ""
    address: Address = field(default_factory=Address)

    def validate(self):
        return validate_struct(self,
            Field("name", Required, Length(5, 20)),
            Field("gender", In("Female", "Male")),
            Field("email", Required, Email),
            Field("address"),
        )


@dataclass
class Tenant(ValidatableWithContext):
    """Record whose check depends on the caller's context."""
    slug: str = ""

    def validate_with_context(self, ctx: Context):
        return validate_struct_with_context(ctx, self,
            Field("slug", Required, In(*ctx.value(ALLOWED_SLUGS)).error("must be an allowed slug")),
        )


@pytest.fixture(autouse=True)
def _default_config() -> Generator[None]:
    """Pin the process default so RULEKIT_* variables never leak into tests."""
    set_default_config(ValidationConfig())
    yield
    set_default_config(None)


@pytest.fixture
def counting_rule() -> CountingRule:
    return CountingRule()


@pytest.fixture
def valid_address() -> Address:
    return Address(street="123 Main Street", city="Vienna", state="VA", zip="12345")


@pytest.fixture
def valid_customer(valid_address: Address) -> Customer:
    return Customer(name="Qiang Xue", gender="Male", email="q@example.com", address=valid_address)

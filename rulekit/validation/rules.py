"""Rule Contract

A rule inspects a value and *returns* the outcome: ``None`` on success, an
exception instance on failure (usually a ValidationError, an InternalError when
a dependency broke, or any other exception for a plain error). Rules are
immutable and safe to share between threads; customising one returns a copy.

Contracts:
- Rule.validate(value)
- ContextRule.validate_with_context(ctx, value), preferred when a context exists
- Validatable.validate() / ValidatableWithContext.validate_with_context(ctx),
  implemented by the validated value's own type for recursive checks

Custom rules:
    def is_even(value):
        return None if value % 2 == 0 else new_error("even", "must be even")

    validate(4, Required, By(is_even))
"""
from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator, Self

from rulekit.config import ValidationConfig, get_default_config
from rulekit.context import Context
from rulekit.errors import InternalError, ValidationError
from .values import as_string, is_empty

Outcome = BaseException | None


class Rule(ABC):
    """Base class for rules.

    ``checks_absence`` marks rules that want to see absent (None) values; the
    engine treats every other rule as satisfied by an absent value.
    """
    checks_absence: ClassVar[bool] = False

    @abstractmethod
    def validate(self, value: Any) -> Outcome:
        """Validate a value. Returns None or the error."""

    def __call__(self, value: Any) -> Outcome: return self.validate(value)


class ContextRule(Rule):
    """Rule that can also receive the ambient Context."""

    @abstractmethod
    def validate_with_context(self, ctx: Context, value: Any) -> Outcome:
        """Validate a value under ``ctx``."""

    def validate(self, value: Any) -> Outcome: return self.validate_with_context(Context.background(), value)


_active_config: ContextVar[ValidationConfig | None] = ContextVar("rulekit_active_config", default=None)


def resolve_config(config: ValidationConfig | None = None) -> ValidationConfig:
    """Explicit config, else the one of the enclosing evaluation, else the process default."""
    return config or _active_config.get() or get_default_config()


@contextmanager
def active_config(config: ValidationConfig) -> Iterator[ValidationConfig]:
    """Make ``config`` the one nested entry points resolve while the block runs."""
    token = _active_config.set(config)
    try:
        yield config
    finally:
        _active_config.reset(token)


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Per-call state threaded through nested chains: the context (None for plain calls) and the configuration."""
    context: Context | None = None
    config: ValidationConfig = field(default_factory=resolve_config)


class CompositeRule(ContextRule):
    """Rule that runs nested rule chains (When, Each, Map) and forwards the whole Evaluation to them."""

    @abstractmethod
    def evaluate(self, evaluation: Evaluation, value: Any) -> Outcome:
        """Validate ``value`` within an ongoing evaluation."""

    def validate(self, value: Any) -> Outcome: return self.evaluate(Evaluation(), value)

    def validate_with_context(self, ctx: Context, value: Any) -> Outcome: return self.evaluate(Evaluation(ctx), value)


class Validatable(ABC):
    """Implemented by types that know how to check themselves."""

    @abstractmethod
    def validate(self) -> Outcome:
        """Validate this object. Returns None or the error."""


class ValidatableWithContext(ABC):
    """Context-aware variant of Validatable."""

    @abstractmethod
    def validate_with_context(self, ctx: Context) -> Outcome:
        """Validate this object under ``ctx``."""


class Customizable:
    """Mixin for rules carrying a default ``err`` that callers may reword."""
    err: ValidationError

    def _with_err(self, err: ValidationError) -> Self: return dataclasses.replace(self, err=err)

    def error(self, message: str) -> Self:
        """Copy of this rule reporting ``message``; code and params are kept."""
        return self._with_err(self.err.with_message(message))

    def error_object(self, err: ValidationError) -> Self:
        """Copy of this rule reporting ``err`` instead of its default error."""
        return self._with_err(err)


# ============================================================================
# Sentinel
# ============================================================================

@dataclass(frozen=True, slots=True)
class SkipRule(Rule):
    """Stops the chain it appears in, including the Validatable dive, when active."""
    skip: bool = True
    checks_absence: ClassVar[bool] = True

    def when(self, condition: bool) -> SkipRule: return SkipRule(skip=condition)

    def validate(self, value: Any) -> Outcome: return None


# ============================================================================
# Function Rules
# ============================================================================

def _call_rule_fn(fn: Callable[..., Outcome], *args: Any) -> Outcome:
    try: return fn(*args)
    except ValidationError as e: return e
    except Exception as e: return InternalError(e)


@dataclass(frozen=True, slots=True)
class By(Rule):
    """Rule from a function returning None or an error.

    A raised ValidationError is reported like a returned one; any other raised
    exception is reported as an InternalError.
    """
    fn: Callable[[Any], Outcome]

    def validate(self, value: Any) -> Outcome: return _call_rule_fn(self.fn, value)


@dataclass(frozen=True, slots=True)
class WithContext(ContextRule):
    """Context-aware rule from a function ``fn(ctx, value)``."""
    fn: Callable[[Context, Any], Outcome]

    def validate_with_context(self, ctx: Context, value: Any) -> Outcome: return _call_rule_fn(self.fn, ctx, value)


@dataclass(frozen=True, slots=True)
class StringRule(Customizable, Rule):
    """Rule applying a string predicate to str / bytes values.

    Absent and empty values pass; non-string values report a TypeError.
    """
    predicate: Callable[[str], bool]
    err: ValidationError

    def validate(self, value: Any) -> Outcome:
        if value is None or is_empty(value): return None
        try: text = as_string(value)
        except TypeError as e: return e
        return None if self.predicate(text) else self.err


def new_string_rule(predicate: Callable[[str], bool], err: ValidationError) -> StringRule:
    return StringRule(predicate, err)

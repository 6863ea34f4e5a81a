"""Rule-Chain Evaluation

Scalar entry points. A chain is evaluated strictly in order and stops at the
first failing rule (fail-fast); composite rules (Each, Map, record fields)
collect failures of their parts (fail-slow) into an Errors aggregate.

After the chain passes, the value itself is checked when it is Validatable,
and sequences / mappings of Validatable elements are checked element-wise.

Usage:
    err = validate("example", Required, Length(5, 100), URL)
    err = validate_with_context(ctx, slug, Required, UniqueSlug)
    ensure_valid(payload, Map(Key("name", Required)))   # raises on failure
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from rulekit.config import ValidationConfig
from rulekit.context import Context
from rulekit.errors import Errors, InternalError, ValidationError
from rulekit.logging import engine_logger
from .rules import (
    CompositeRule,
    ContextRule,
    Evaluation,
    Outcome,
    Rule,
    SkipRule,
    Validatable,
    ValidatableWithContext,
    active_config,
    resolve_config,
)
from .values import Kind, kind_of

logger = engine_logger()


def invoke(rule: Rule, evaluation: Evaluation, value: Any) -> Outcome:
    """Call one rule, preferring its context-aware entry when a context exists."""
    if isinstance(rule, CompositeRule): return rule.evaluate(evaluation, value)
    if evaluation.context is not None and isinstance(rule, ContextRule):
        return rule.validate_with_context(evaluation.context, value)
    return rule.validate(value)


def run_chain(evaluation: Evaluation, value: Any, rules: Iterable[Rule]) -> tuple[Outcome, bool]:
    """Evaluate ``rules`` fail-fast. Returns ``(error, skipped)``.

    ``skipped`` is True when an active Skip ended the chain. Absent values are
    only shown to rules that check absence.
    """
    absent = value is None
    for rule in rules:
        if isinstance(rule, SkipRule):
            if rule.skip: return None, True
            continue
        if absent and not rule.checks_absence: continue
        if (error := invoke(rule, evaluation, value)) is not None:
            if isinstance(error, ValidationError): error = evaluation.config.reword(error)
            return error, False
    return None, False


def _check_self(evaluation: Evaluation, value: Any) -> Outcome:
    if isinstance(value, ValidatableWithContext) and (evaluation.context is not None or not isinstance(value, Validatable)):
        return value.validate_with_context(evaluation.context or Context.background())
    if isinstance(value, Validatable): return value.validate()
    return None


def _is_validatable(value: Any) -> bool: return isinstance(value, (Validatable, ValidatableWithContext))


def dive(evaluation: Evaluation, value: Any) -> Outcome:
    """Check a value through its own Validatable implementation, or its Validatable elements."""
    match kind_of(value):
        case Kind.ABSENT:
            return None
        case Kind.SEQUENCE:
            items = enumerate(value)
        case Kind.MAPPING:
            items = value.items()
        case _:
            return _check_self(evaluation, value)
    if _is_validatable(value): return _check_self(evaluation, value)
    errors = Errors()
    for key, element in items:
        if element is None or not _is_validatable(element): continue
        if (error := _check_self(evaluation, element)) is not None: errors[key] = error
    return errors.filter()


def evaluate(evaluation: Evaluation, value: Any, rules: Sequence[Rule]) -> Outcome:
    """Run the chain, then dive unless the chain failed or was skipped."""
    with active_config(evaluation.config):
        error, skipped = run_chain(evaluation, value, rules)
        if error is not None or skipped: return error
        return dive(evaluation, value)


def validate(value: Any, *rules: Rule, config: ValidationConfig | None = None) -> Outcome:
    """Validate ``value`` against ``rules``; None when valid.

    Returns the first failing rule's error, or the value's own Validatable result.
    """
    return evaluate(Evaluation(None, resolve_config(config)), value, rules)


def validate_with_context(ctx: Context | None, value: Any, *rules: Rule,
                          config: ValidationConfig | None = None) -> Outcome:
    """Like ``validate``; ``ctx`` reaches every context-aware rule and Validatable, however deeply nested."""
    return evaluate(Evaluation(ctx, resolve_config(config)), value, rules)


def ensure_valid(value: Any, *rules: Rule, context: Context | None = None,
                 config: ValidationConfig | None = None) -> None:
    """Raise the validation outcome instead of returning it."""
    if (error := validate_with_context(context, value, *rules, config=config)) is None: return
    if isinstance(error, InternalError): logger.warning("validator_failed", cause=repr(error.cause))
    if isinstance(error, ValidationError): raise error.copy() from None
    raise error

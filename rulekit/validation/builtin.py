"""Built-in Rules

Presence rules look at absence (None) and emptiness; every other rule treats
absent *and empty* values as valid, so combine them with Required when a value
must be present:

    validate(name, Required, Length(5, 20))

Rules are frozen dataclasses; ``error(message)`` / ``error_object(err)`` /
``when(cond)`` return customised copies.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

from rulekit.errors import (
    ERR_EMPTY,
    ERR_IN_INVALID,
    ERR_LENGTH_EMPTY_REQUIRED,
    ERR_LENGTH_INVALID,
    ERR_LENGTH_OUT_OF_RANGE,
    ERR_LENGTH_TOO_LONG,
    ERR_LENGTH_TOO_SHORT,
    ERR_MATCH_INVALID,
    ERR_MAX_LESS,
    ERR_MAX_LESS_EQUAL,
    ERR_MIN_GREATER,
    ERR_MIN_GREATER_EQUAL,
    ERR_MULTIPLE_OF,
    ERR_NIL,
    ERR_NIL_OR_NOT_EMPTY,
    ERR_NOT_IN_INVALID,
    ERR_NOT_NIL,
    ERR_REQUIRED,
    ValidationError,
)
from .rules import Customizable, Outcome, Rule
from .values import as_string, char_length_of, is_empty, length_of


def _skippable(value: Any) -> bool: return value is None or is_empty(value)


# ============================================================================
# Presence Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class RequiredRule(Customizable, Rule):
    """Fails on absent or empty values. With ``skip_nil`` absent values pass."""
    condition: bool = True
    skip_nil: bool = False
    err: ValidationError = ERR_REQUIRED
    checks_absence: ClassVar[bool] = True

    def when(self, condition: bool) -> RequiredRule: return replace(self, condition=condition)

    def validate(self, value: Any) -> Outcome:
        if not self.condition: return None
        if value is None: return None if self.skip_nil else self.err
        return self.err if is_empty(value) else None


@dataclass(frozen=True, slots=True)
class NotNilRule(Customizable, Rule):
    """Fails only on absent values; present-but-empty values pass."""
    err: ValidationError = ERR_NOT_NIL
    checks_absence: ClassVar[bool] = True

    def validate(self, value: Any) -> Outcome: return self.err if value is None else None


@dataclass(frozen=True, slots=True)
class AbsentRule(Customizable, Rule):
    """Requires absence. With ``allow_empty`` present-but-empty values pass too."""
    condition: bool = True
    allow_empty: bool = False
    err: ValidationError = ERR_NIL
    checks_absence: ClassVar[bool] = True

    def when(self, condition: bool) -> AbsentRule: return replace(self, condition=condition)

    def validate(self, value: Any) -> Outcome:
        if not self.condition or value is None: return None
        if self.allow_empty and is_empty(value): return None
        return self.err


Required = RequiredRule()
NilOrNotEmpty = RequiredRule(skip_nil=True, err=ERR_NIL_OR_NOT_EMPTY)
NotNil = NotNilRule()
Nil = AbsentRule()
Empty = AbsentRule(allow_empty=True, err=ERR_EMPTY)


# ============================================================================
# Length Rules
# ============================================================================

def _length_error(min: int, max: int) -> ValidationError:
    if min == 0 and max > 0: err = ERR_LENGTH_TOO_LONG
    elif min > 0 and max == 0: err = ERR_LENGTH_TOO_SHORT
    elif min > 0 and max > 0: err = ERR_LENGTH_INVALID if min == max else ERR_LENGTH_OUT_OF_RANGE
    else: err = ERR_LENGTH_EMPTY_REQUIRED
    return err.with_params(min=min, max=max)


@dataclass(frozen=True, slots=True)
class Length(Customizable, Rule):
    """Length of strings, byte strings and containers within [min, max].

    A bound of 0 means "no bound"; ``Length(0, 0)`` requires an empty value.
    """
    min: int
    max: int
    err: ValidationError | None = None

    def __post_init__(self):
        if self.err is None: object.__setattr__(self, "err", _length_error(self.min, self.max))

    def _measure(self, value: Any) -> int: return length_of(value)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        try: length = self._measure(value)
        except TypeError as e: return e
        if (self.min > 0 and length < self.min) or (self.max > 0 and length > self.max) \
                or (self.min == 0 and self.max == 0 and length > 0):
            return self.err
        return None


@dataclass(frozen=True, slots=True)
class RuneLength(Length):
    """Like Length, counting characters of UTF-8 byte strings instead of bytes."""

    def _measure(self, value: Any) -> int: return char_length_of(value)


# ============================================================================
# Threshold Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class Min(Customizable, Rule):
    """Value >= threshold (> with ``exclusive()``). Works on any ordered type."""
    threshold: Any
    is_exclusive: bool = False
    err: ValidationError | None = None

    def __post_init__(self):
        if self.err is None:
            base = ERR_MIN_GREATER if self.is_exclusive else ERR_MIN_GREATER_EQUAL
            object.__setattr__(self, "err", base.with_params(threshold=self.threshold))

    def exclusive(self) -> Min: return Min(self.threshold, is_exclusive=True)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        try: ok = value > self.threshold if self.is_exclusive else value >= self.threshold
        except TypeError as e: return e
        return None if ok else self.err


@dataclass(frozen=True, slots=True)
class Max(Customizable, Rule):
    """Value <= threshold (< with ``exclusive()``). Works on any ordered type."""
    threshold: Any
    is_exclusive: bool = False
    err: ValidationError | None = None

    def __post_init__(self):
        if self.err is None:
            base = ERR_MAX_LESS if self.is_exclusive else ERR_MAX_LESS_EQUAL
            object.__setattr__(self, "err", base.with_params(threshold=self.threshold))

    def exclusive(self) -> Max: return Max(self.threshold, is_exclusive=True)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        try: ok = value < self.threshold if self.is_exclusive else value <= self.threshold
        except TypeError as e: return e
        return None if ok else self.err


@dataclass(frozen=True, slots=True)
class MultipleOf(Customizable, Rule):
    """Value is a multiple of ``base``."""
    base: Any
    err: ValidationError | None = None

    def __post_init__(self):
        if self.err is None: object.__setattr__(self, "err", ERR_MULTIPLE_OF.with_params(base=self.base))

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        try: remainder = value % self.base
        except TypeError as e: return e
        return None if remainder == 0 else self.err


# ============================================================================
# Membership / Format Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class In(Customizable, Rule):
    """Value equals one of the given elements."""
    elements: tuple[Any, ...]
    err: ValidationError = ERR_IN_INVALID

    def __init__(self, *elements: Any, err: ValidationError = ERR_IN_INVALID):
        object.__setattr__(self, "elements", elements); object.__setattr__(self, "err", err)

    def _with_err(self, err: ValidationError) -> In: return In(*self.elements, err=err)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        return None if any(value == e for e in self.elements) else self.err


@dataclass(frozen=True, slots=True)
class NotIn(Customizable, Rule):
    """Value equals none of the given elements."""
    elements: tuple[Any, ...]
    err: ValidationError = ERR_NOT_IN_INVALID

    def __init__(self, *elements: Any, err: ValidationError = ERR_NOT_IN_INVALID):
        object.__setattr__(self, "elements", elements); object.__setattr__(self, "err", err)

    def _with_err(self, err: ValidationError) -> NotIn: return NotIn(*self.elements, err=err)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        return self.err if any(value == e for e in self.elements) else None


@dataclass(frozen=True, slots=True)
class Match(Customizable, Rule):
    """String / bytes value contains a match of ``pattern`` (anchor it for whole-value checks)."""
    pattern: re.Pattern[str] | str
    err: ValidationError = ERR_MATCH_INVALID
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_compiled", re.compile(self.pattern) if isinstance(self.pattern, str) else self.pattern)

    def validate(self, value: Any) -> Outcome:
        if _skippable(value): return None
        try: text = as_string(value)
        except TypeError as e: return e
        return None if self._compiled.search(text) else self.err

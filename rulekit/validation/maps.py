"""Key-by-key validation of mappings.

Usage:
    err = validate(payload, Map(
        Key("name", Required, Length(5, 20)),
        Key("email", Required, Email),
        Key("address", Map(
            Key("zip", Required, Match(r"^[0-9]{5}$")),
        )),
        Key("nickname", Length(0, 20)).optional(),
    ))
"""
from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from rulekit.errors import ERR_KEY_MISSING, ERR_KEY_UNEXPECTED, ERR_KEY_WRONG_TYPE, Errors, InternalError
from rulekit.logging import record_logger
from .engine import evaluate
from .rules import CompositeRule, Evaluation, Outcome, Rule
from .values import Kind, kind_of

logger = record_logger()


class Key:
    """Binds a literal mapping key to its rule chain.

    Errors are reported under ``error_key`` when given, else ``str(key)``.
    """

    __slots__ = ("key", "rules", "error_key", "is_optional")

    def __init__(self, key: Hashable, *rules: Rule, error_key: str | None = None, is_optional: bool = False):
        self.key, self.rules, self.error_key, self.is_optional = key, tuple(rules), error_key, is_optional

    def optional(self) -> Key:
        """Copy of this key that may be missing from the mapping."""
        return Key(self.key, *self.rules, error_key=self.error_key, is_optional=True)

    @property
    def name(self) -> str: return self.error_key if self.error_key is not None else str(self.key)

    def __repr__(self) -> str: return f"Key({self.key!r}, rules={len(self.rules)})"


class Map(CompositeRule):
    """Validate the declared keys of a mapping, collecting every failure.

    Undeclared keys are reported as unexpected unless ``allow_extra_keys`` was
    used. Non-mapping values yield an InternalError.
    """

    __slots__ = ("keys", "extra_keys_allowed")

    def __init__(self, *keys: Key, extra_keys_allowed: bool = False):
        self.keys, self.extra_keys_allowed = tuple(keys), extra_keys_allowed

    def allow_extra_keys(self) -> Map:
        return Map(*self.keys, extra_keys_allowed=True)

    def evaluate(self, evaluation: Evaluation, value: Any) -> Outcome:
        match kind_of(value):
            case Kind.ABSENT:
                return None
            case Kind.MAPPING:
                pass
            case _:
                return InternalError(TypeError("only a map can be validated"))

        reword = evaluation.config.reword
        key_types = tuple({type(k) for k in value})
        declared: list[Hashable] = []
        errors = Errors()
        for entry in self.keys:
            error = None
            if not isinstance(entry.key, Hashable) or (key_types and not isinstance(entry.key, key_types)):
                error = reword(ERR_KEY_WRONG_TYPE)
            elif entry.key not in value:
                if not entry.is_optional: error = reword(ERR_KEY_MISSING)
            else:
                error = evaluate(evaluation, value[entry.key], entry.rules)
            if isinstance(error, InternalError):
                logger.warning("map_aborted", key=entry.name, cause=repr(error.cause))
                return error
            if error is not None: errors[entry.name] = error
            if isinstance(entry.key, Hashable): declared.append(entry.key)

        if not self.extra_keys_allowed:
            for key in value:
                if key not in declared: errors[key] = reword(ERR_KEY_UNEXPECTED)
        result = errors.filter()
        logger.debug("map_validated", keys=len(self.keys), failed=len(result or ()))
        return result

    def __repr__(self) -> str: return f"Map(keys={len(self.keys)}, extra_keys_allowed={self.extra_keys_allowed})"

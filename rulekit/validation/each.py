"""Element-wise validation of sequences and mappings."""
from __future__ import annotations

from typing import Any

from rulekit.errors import ERR_EACH_NOT_ITERABLE, Errors, InternalError
from rulekit.logging import record_logger
from .engine import evaluate
from .rules import CompositeRule, Evaluation, Outcome, Rule
from .values import Kind, kind_of

logger = record_logger()


class Each(CompositeRule):
    """Apply ``rules`` to every element; failures are keyed by index or map key.

    Each element goes through the fail-fast chain (and its own Validatable
    check); all elements are attempted.
    """

    __slots__ = ("rules",)

    def __init__(self, *rules: Rule):
        self.rules = tuple(rules)

    def evaluate(self, evaluation: Evaluation, value: Any) -> Outcome:
        match kind_of(value):
            case Kind.ABSENT:
                return None
            case Kind.SEQUENCE:
                items = enumerate(value)
            case Kind.MAPPING:
                items = value.items()
            case _:
                return evaluation.config.reword(ERR_EACH_NOT_ITERABLE)

        errors = Errors()
        for key, element in items:
            if (error := evaluate(evaluation, element, self.rules)) is None: continue
            if isinstance(error, InternalError):
                logger.warning("each_aborted", key=str(key), cause=repr(error.cause))
                return error
            errors[key] = error
        return errors.filter()

    def __repr__(self) -> str: return f"Each(rules={len(self.rules)})"

"""Conditional rules.

``When`` stores a condition evaluated by the caller when the rule is built;
only one of its two chains runs:

    validate_struct(order,
        Field("vat_id", When(order.country in EU, Required).else_(Nil)),
    )

``Skip`` (from rules) ends a chain early; ``Skip.when(cond)`` only when ``cond`` holds.
"""
from __future__ import annotations

from typing import Any

from .engine import run_chain
from .rules import CompositeRule, Evaluation, Outcome, Rule, SkipRule

Skip = SkipRule()


class When(CompositeRule):
    """Run ``rules`` when ``condition`` is true, else the rules given to ``else_``.

    The selected chain is fail-fast. A Skip inside it only ends that chain.
    """
    checks_absence = True

    __slots__ = ("condition", "rules", "else_rules")

    def __init__(self, condition: bool, *rules: Rule, else_rules: tuple[Rule, ...] = ()):
        self.condition, self.rules, self.else_rules = bool(condition), tuple(rules), tuple(else_rules)

    def else_(self, *rules: Rule) -> When:
        """Copy of this rule running ``rules`` when the condition is false."""
        return When(self.condition, *self.rules, else_rules=rules)

    def evaluate(self, evaluation: Evaluation, value: Any) -> Outcome:
        error, _ = run_chain(evaluation, value, self.rules if self.condition else self.else_rules)
        return error

    def __repr__(self) -> str:
        return f"When({self.condition}, rules={len(self.rules)}, else_rules={len(self.else_rules)})"

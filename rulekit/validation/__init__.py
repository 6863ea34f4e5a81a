"""Composable Validation Rules

Values are validated by ordered rule chains. Rules return errors instead of
raising them; records, mappings and sequences aggregate the errors of their
parts into an Errors mapping.

Key Features:
- Fail-fast rule chains with absent-value skipping
- Record traversal with embedded-record promotion and annotation-driven error keys
- Map/Key, Each and When/Skip combinators
- Context propagation into context-aware rules and Validatable values
- Built-in presence, length, threshold, membership and string-format rules

Usage:
    from rulekit.validation import (
        Field, Map, Key, Each, When, Skip,
        Required, Length, Match, Email,
        validate, validate_struct,
    )

    @dataclass
    class Address(Validatable):
        street: str = ""
        zip: str = ""

        def validate(self):
            return validate_struct(self,
                Field("street", Required, Length(5, 50)),
                Field("zip", Required, Match(r"^[0-9]{5}$")),
            )

    err = validate(addresses, Required, Each())
"""

# Rule contract
from .rules import (
    Outcome,
    Rule,
    ContextRule,
    CompositeRule,
    Evaluation,
    resolve_config,
    Validatable,
    ValidatableWithContext,
    Customizable,
    SkipRule,
    By,
    WithContext,
    StringRule,
    new_string_rule,
)

# Value classification
from .values import (
    Kind,
    kind_of,
    is_record,
    is_empty,
    length_of,
    char_length_of,
    as_string,
)

# Entry points
from .engine import (
    validate,
    validate_with_context,
    ensure_valid,
)

# Combinators
from .conditions import Skip, When
from .each import Each
from .maps import Key, Map

# Records
from .record import (
    EMBEDDED,
    embedded,
    Field,
    FieldDescriptor,
    describe_record,
    validate_struct,
    validate_struct_with_context,
)

# Built-in rules
from .builtin import (
    RequiredRule,
    NotNilRule,
    AbsentRule,
    Required,
    NilOrNotEmpty,
    NotNil,
    Nil,
    Empty,
    Length,
    RuneLength,
    Min,
    Max,
    MultipleOf,
    In,
    NotIn,
    Match,
)

from .formats import (
    Email,
    URL,
    UUID,
    IP,
    IPv4,
    IPv6,
    Digit,
    Alpha,
    Alphanumeric,
    LowerCase,
    UpperCase,
    Int,
    Float,
)

__all__ = [
    # Rule contract
    "Outcome",
    "Rule",
    "ContextRule",
    "CompositeRule",
    "Evaluation",
    "resolve_config",
    "Validatable",
    "ValidatableWithContext",
    "Customizable",
    "SkipRule",
    "By",
    "WithContext",
    "StringRule",
    "new_string_rule",
    # Values
    "Kind",
    "kind_of",
    "is_record",
    "is_empty",
    "length_of",
    "char_length_of",
    "as_string",
    # Entry points
    "validate",
    "validate_with_context",
    "ensure_valid",
    # Combinators
    "Skip",
    "When",
    "Each",
    "Key",
    "Map",
    # Records
    "EMBEDDED",
    "embedded",
    "Field",
    "FieldDescriptor",
    "describe_record",
    "validate_struct",
    "validate_struct_with_context",
    # Built-in rules
    "RequiredRule",
    "NotNilRule",
    "AbsentRule",
    "Required",
    "NilOrNotEmpty",
    "NotNil",
    "Nil",
    "Empty",
    "Length",
    "RuneLength",
    "Min",
    "Max",
    "MultipleOf",
    "In",
    "NotIn",
    "Match",
    # Formats
    "Email",
    "URL",
    "UUID",
    "IP",
    "IPv4",
    "IPv6",
    "Digit",
    "Alpha",
    "Alphanumeric",
    "LowerCase",
    "UpperCase",
    "Int",
    "Float",
]

"""Validation Error Model

Key components:
- ValidationError: invalid data, stable code plus templated message
- InternalError: validator malfunction wrapping a cause
- Errors: ordered key -> error aggregate for records, maps and sequences
- ErrorCode: codes of the built-in rules
- ERR_*: built-in error values

Usage:
    from rulekit.errors import Errors, ValidationError, InternalError

    err = Errors({"name": validate(name, Required), "zip": validate(zip_code, Required)}).filter()
    match err:
        case None:
            ...
        case InternalError():
            log.error("validator failed", cause=err.cause)
        case _:
            return {"errors": err.to_dict()}
"""
from .types import (
    ErrorCode,
    ValidationError,
    InternalError,
    Errors,
    is_internal,
)

from .builders import (
    new_error,
    internal_error,
    BUILTIN_MESSAGES,
    # Presence
    ERR_REQUIRED,
    ERR_NIL_OR_NOT_EMPTY,
    ERR_NOT_NIL,
    ERR_NIL,
    ERR_EMPTY,
    # Length
    ERR_LENGTH_EMPTY_REQUIRED,
    ERR_LENGTH_TOO_LONG,
    ERR_LENGTH_TOO_SHORT,
    ERR_LENGTH_INVALID,
    ERR_LENGTH_OUT_OF_RANGE,
    # Thresholds
    ERR_MIN_GREATER_EQUAL,
    ERR_MIN_GREATER,
    ERR_MAX_LESS_EQUAL,
    ERR_MAX_LESS,
    ERR_MULTIPLE_OF,
    # Membership / format
    ERR_IN_INVALID,
    ERR_NOT_IN_INVALID,
    ERR_MATCH_INVALID,
    # Composite
    ERR_KEY_WRONG_TYPE,
    ERR_KEY_MISSING,
    ERR_KEY_UNEXPECTED,
    ERR_EACH_NOT_ITERABLE,
    # String formats
    ERR_IS_EMAIL,
    ERR_IS_URL,
    ERR_IS_UUID,
    ERR_IS_IP,
    ERR_IS_IPV4,
    ERR_IS_IPV6,
    ERR_IS_DIGIT,
    ERR_IS_ALPHA,
    ERR_IS_ALPHANUMERIC,
    ERR_IS_LOWER_CASE,
    ERR_IS_UPPER_CASE,
    ERR_IS_INT,
    ERR_IS_FLOAT,
)

__all__ = [
    "ErrorCode",
    "ValidationError",
    "InternalError",
    "Errors",
    "is_internal",
    "new_error",
    "internal_error",
    "BUILTIN_MESSAGES",
    "ERR_REQUIRED",
    "ERR_NIL_OR_NOT_EMPTY",
    "ERR_NOT_NIL",
    "ERR_NIL",
    "ERR_EMPTY",
    "ERR_LENGTH_EMPTY_REQUIRED",
    "ERR_LENGTH_TOO_LONG",
    "ERR_LENGTH_TOO_SHORT",
    "ERR_LENGTH_INVALID",
    "ERR_LENGTH_OUT_OF_RANGE",
    "ERR_MIN_GREATER_EQUAL",
    "ERR_MIN_GREATER",
    "ERR_MAX_LESS_EQUAL",
    "ERR_MAX_LESS",
    "ERR_MULTIPLE_OF",
    "ERR_IN_INVALID",
    "ERR_NOT_IN_INVALID",
    "ERR_MATCH_INVALID",
    "ERR_KEY_WRONG_TYPE",
    "ERR_KEY_MISSING",
    "ERR_KEY_UNEXPECTED",
    "ERR_EACH_NOT_ITERABLE",
    "ERR_IS_EMAIL",
    "ERR_IS_URL",
    "ERR_IS_UUID",
    "ERR_IS_IP",
    "ERR_IS_IPV4",
    "ERR_IS_IPV6",
    "ERR_IS_DIGIT",
    "ERR_IS_ALPHA",
    "ERR_IS_ALPHANUMERIC",
    "ERR_IS_LOWER_CASE",
    "ERR_IS_UPPER_CASE",
    "ERR_IS_INT",
    "ERR_IS_FLOAT",
]

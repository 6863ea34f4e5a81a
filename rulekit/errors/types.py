"""Validation Error Types

Errors are returned as values rather than raised, in the spirit of a Result
type: a rule reports ``None`` on success and an exception instance on failure.
Two disjoint kinds exist so callers can decide whether resubmission makes sense:

- ValidationError: the *data* is invalid. Safe to show to end users.
- InternalError: the *validator* malfunctioned. Wraps the underlying cause.

Errors aggregates per-field / per-key / per-element results of composite values.

Rendered form:
    Address: (State: must be in a valid format.); Email: must be a valid email address.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from enum import Enum
from types import MappingProxyType
from typing import Any


class ErrorCode(str, Enum):
    """Stable machine-readable codes of the built-in rules.

    Codes are plain strings so user rules may mint their own; members compare
    equal to their string value.
    """
    # Presence
    REQUIRED = "validation_required"
    NIL_OR_NOT_EMPTY = "validation_nil_or_not_empty_required"
    NOT_NIL = "validation_not_nil_required"
    NIL = "validation_nil"
    EMPTY = "validation_empty"

    # Length
    LENGTH_EMPTY_REQUIRED = "validation_length_empty_required"
    LENGTH_TOO_LONG = "validation_length_too_long"
    LENGTH_TOO_SHORT = "validation_length_too_short"
    LENGTH_INVALID = "validation_length_invalid"
    LENGTH_OUT_OF_RANGE = "validation_length_out_of_range"

    # Thresholds
    MIN_GREATER_EQUAL = "validation_min_greater_equal_than_required"
    MIN_GREATER = "validation_min_greater_than_required"
    MAX_LESS_EQUAL = "validation_max_less_equal_than_required"
    MAX_LESS = "validation_max_less_than_required"
    MULTIPLE_OF = "validation_multiple_of_invalid"

    # Membership / format
    IN_INVALID = "validation_in_invalid"
    NOT_IN_INVALID = "validation_not_in_invalid"
    MATCH_INVALID = "validation_match_invalid"

    # Composite
    KEY_WRONG_TYPE = "validation_key_wrong_type"
    KEY_MISSING = "validation_key_missing"
    KEY_UNEXPECTED = "validation_key_unexpected"
    EACH_NOT_ITERABLE = "validation_each_not_iterable"

    # String formats
    IS_EMAIL = "validation_is_email"
    IS_URL = "validation_is_url"
    IS_UUID = "validation_is_uuid"
    IS_IP = "validation_is_ip"
    IS_IPV4 = "validation_is_ipv4"
    IS_IPV6 = "validation_is_ipv6"
    IS_DIGIT = "validation_is_digit"
    IS_ALPHA = "validation_is_alpha"
    IS_ALPHANUMERIC = "validation_is_alphanumeric"
    IS_LOWER_CASE = "validation_is_lower_case"
    IS_UPPER_CASE = "validation_is_upper_case"
    IS_INT = "validation_is_int"
    IS_FLOAT = "validation_is_float"

    # Internal
    INTERNAL = "internal_error"

    @property
    def category(self) -> str:
        return "internal" if self is ErrorCode.INTERNAL else "validation"

    def __str__(self) -> str:
        return self.value


class _Placeholders(dict):
    """Leaves unknown ``{name}`` placeholders in place."""

    def __missing__(self, key: str) -> str: return "{" + key + "}"


class ValidationError(Exception):
    """Immutable validation failure with a code and a message template.

    The message may contain ``{name}`` placeholders filled from ``params``
    when rendered. Customising the message never changes the code.
    """

    __slots__ = ("code", "message", "params")

    def __init__(self, code: str, message: str, params: Mapping[str, Any] | None = None):
        super().__init__(code, message)
        object.__setattr__(self, "code", str(code))
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "params", MappingProxyType(dict(params or {})))

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ValidationError.__slots__: raise AttributeError(f"ValidationError is immutable, cannot set {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in ValidationError.__slots__: raise AttributeError(f"ValidationError is immutable, cannot delete {name!r}")
        super().__delattr__(name)

    def render(self) -> str:
        """Message with placeholders substituted.

        Templates without params are returned verbatim; unknown placeholders are
        kept and malformed templates are returned unrendered.
        """
        if not self.params: return self.message
        try: return self.message.format_map(_Placeholders(self.params))
        except (ValueError, IndexError, KeyError, AttributeError): return self.message

    def copy(self) -> ValidationError:
        """Fresh instance with the same code, message and params (e.g. for raising a shared value)."""
        return ValidationError(self.code, self.message, self.params)

    def __str__(self) -> str: return self.render()

    def __repr__(self) -> str: return f"ValidationError(code={self.code!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError): return NotImplemented
        return (self.code, self.message, dict(self.params)) == (other.code, other.message, dict(other.params))

    def __hash__(self) -> int: return hash((self.code, self.message))

    def with_message(self, message: str) -> ValidationError:
        return ValidationError(self.code, message, self.params)

    def with_code(self, code: str) -> ValidationError:
        return ValidationError(code, self.message, self.params)

    def with_params(self, **params: Any) -> ValidationError:
        """Replace the whole parameter set."""
        return ValidationError(self.code, self.message, params)

    def add_param(self, name: str, value: Any) -> ValidationError:
        return ValidationError(self.code, self.message, {**self.params, name: value})

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {"code": self.code, "message": self.render()}


class InternalError(Exception):
    """Non-validation failure: a broken dependency or a mis-specified validation call.

    Resubmitting the same data may succeed once the underlying cause is fixed,
    unlike a ValidationError.
    """

    def __init__(self, cause: BaseException | str):
        self.cause = cause if isinstance(cause, BaseException) else RuntimeError(cause)
        super().__init__(str(self.cause))

    @property
    def internal_error(self) -> BaseException: return self.cause

    @property
    def code(self) -> str: return ErrorCode.INTERNAL.value

    def __repr__(self) -> str: return f"InternalError({self.cause!r})"


class Errors(Exception, MutableMapping[str, "BaseException | None"]):
    """Ordered mapping of error keys to errors of a composite value.

    Keys are field names, map keys or sequence indexes rendered as strings.
    Values are leaf errors, nested Errors, or None for a passing entry.
    """

    def __init__(self, errors: Mapping[Any, BaseException | None] | None = None, /, **kwargs: BaseException | None):
        super().__init__()
        self._errors: dict[str, BaseException | None] = {}
        for key, value in {**dict(errors or {}), **kwargs}.items(): self[key] = value

    def __getitem__(self, key: str) -> BaseException | None: return self._errors[str(key)]

    def __setitem__(self, key: Any, value: BaseException | None) -> None: self._errors[str(key)] = value

    def __delitem__(self, key: str) -> None: del self._errors[str(key)]

    def __iter__(self) -> Iterator[str]: return iter(self._errors)

    def __len__(self) -> int: return len(self._errors)

    def __contains__(self, key: object) -> bool: return str(key) in self._errors

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Errors): return self._errors == other._errors
        if isinstance(other, Mapping): return self._errors == dict(other)
        return NotImplemented

    __hash__ = Exception.__hash__

    def __bool__(self) -> bool: return bool(self._errors)

    def __repr__(self) -> str: return f"Errors({self._errors!r})"

    def __str__(self) -> str:
        if not self._errors: return ""
        parts = []
        for key in sorted(self._errors):
            error = self._errors[key]
            parts.append(f"{key}: ({error})" if isinstance(error, Errors) else f"{key}: {error}")
        return "; ".join(parts) + "."

    def filter(self) -> Errors | None:
        """Drop passing entries; None when nothing is left."""
        remaining = {k: v for k, v in self._errors.items() if v is not None}
        return Errors(remaining) if remaining else None

    def to_dict(self) -> dict[str, Any]:
        """Keyed tree of rendered messages, suitable for JSON encoding."""
        result: dict[str, Any] = {}
        for key, error in self._errors.items():
            if error is None: continue
            result[key] = error.to_dict() if isinstance(error, Errors) else str(error)
        return result


def is_internal(error: BaseException | None) -> bool:
    """True for errors signalling a validator malfunction."""
    return isinstance(error, InternalError)

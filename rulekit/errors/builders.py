"""Built-in Error Values and Constructors

Every built-in rule reports one of the values below. They are immutable; rules
customise them through ``with_message`` and friends, and host applications
reword them globally through ``ValidationConfig.default_messages`` keyed by code.
"""
from typing import Any, Mapping

from .types import ErrorCode, InternalError, ValidationError


def new_error(code: str, message: str, params: Mapping[str, Any] | None = None) -> ValidationError:
    """Create a validation error. ``message`` may use ``{name}`` placeholders."""
    return ValidationError(code, message, params)


def internal_error(cause: BaseException | str) -> InternalError:
    """Wrap a non-validation failure, e.g. a dependency outage inside a rule."""
    return InternalError(cause)


# =============================================================================
# Presence
# =============================================================================

ERR_REQUIRED = new_error(ErrorCode.REQUIRED, "cannot be blank")
ERR_NIL_OR_NOT_EMPTY = new_error(ErrorCode.NIL_OR_NOT_EMPTY, "cannot be blank")
ERR_NOT_NIL = new_error(ErrorCode.NOT_NIL, "is required")
ERR_NIL = new_error(ErrorCode.NIL, "must be blank")
ERR_EMPTY = new_error(ErrorCode.EMPTY, "must be blank")


# =============================================================================
# Length
# =============================================================================

ERR_LENGTH_EMPTY_REQUIRED = new_error(ErrorCode.LENGTH_EMPTY_REQUIRED, "the value must be empty")
ERR_LENGTH_TOO_LONG = new_error(ErrorCode.LENGTH_TOO_LONG, "the length must be no more than {max}")
ERR_LENGTH_TOO_SHORT = new_error(ErrorCode.LENGTH_TOO_SHORT, "the length must be no less than {min}")
ERR_LENGTH_INVALID = new_error(ErrorCode.LENGTH_INVALID, "the length must be exactly {min}")
ERR_LENGTH_OUT_OF_RANGE = new_error(ErrorCode.LENGTH_OUT_OF_RANGE, "the length must be between {min} and {max}")


# =============================================================================
# Thresholds
# =============================================================================

ERR_MIN_GREATER_EQUAL = new_error(ErrorCode.MIN_GREATER_EQUAL, "must be no less than {threshold}")
ERR_MIN_GREATER = new_error(ErrorCode.MIN_GREATER, "must be greater than {threshold}")
ERR_MAX_LESS_EQUAL = new_error(ErrorCode.MAX_LESS_EQUAL, "must be no greater than {threshold}")
ERR_MAX_LESS = new_error(ErrorCode.MAX_LESS, "must be less than {threshold}")
ERR_MULTIPLE_OF = new_error(ErrorCode.MULTIPLE_OF, "must be multiple of {base}")


# =============================================================================
# Membership / Format
# =============================================================================

ERR_IN_INVALID = new_error(ErrorCode.IN_INVALID, "must be a valid value")
ERR_NOT_IN_INVALID = new_error(ErrorCode.NOT_IN_INVALID, "must not be in list")
ERR_MATCH_INVALID = new_error(ErrorCode.MATCH_INVALID, "must be in a valid format")


# =============================================================================
# Composite
# =============================================================================

ERR_KEY_WRONG_TYPE = new_error(ErrorCode.KEY_WRONG_TYPE, "key not the correct type")
ERR_KEY_MISSING = new_error(ErrorCode.KEY_MISSING, "required key is missing")
ERR_KEY_UNEXPECTED = new_error(ErrorCode.KEY_UNEXPECTED, "key not expected")
ERR_EACH_NOT_ITERABLE = new_error(ErrorCode.EACH_NOT_ITERABLE, "must be an iterable (map, slice or array)")


# =============================================================================
# String Formats
# =============================================================================

ERR_IS_EMAIL = new_error(ErrorCode.IS_EMAIL, "must be a valid email address")
ERR_IS_URL = new_error(ErrorCode.IS_URL, "must be a valid URL")
ERR_IS_UUID = new_error(ErrorCode.IS_UUID, "must be a valid UUID")
ERR_IS_IP = new_error(ErrorCode.IS_IP, "must be a valid IP address")
ERR_IS_IPV4 = new_error(ErrorCode.IS_IPV4, "must be a valid IPv4 address")
ERR_IS_IPV6 = new_error(ErrorCode.IS_IPV6, "must be a valid IPv6 address")
ERR_IS_DIGIT = new_error(ErrorCode.IS_DIGIT, "must contain digits only")
ERR_IS_ALPHA = new_error(ErrorCode.IS_ALPHA, "must contain English letters only")
ERR_IS_ALPHANUMERIC = new_error(ErrorCode.IS_ALPHANUMERIC, "must contain English letters and digits only")
ERR_IS_LOWER_CASE = new_error(ErrorCode.IS_LOWER_CASE, "must be in lower case")
ERR_IS_UPPER_CASE = new_error(ErrorCode.IS_UPPER_CASE, "must be in upper case")
ERR_IS_INT = new_error(ErrorCode.IS_INT, "must be an integer number")
ERR_IS_FLOAT = new_error(ErrorCode.IS_FLOAT, "must be a floating point number")


BUILTIN_MESSAGES: dict[str, str] = {
    err.code: err.message for name, err in list(globals().items())
    if name.startswith("ERR_") and isinstance(err, ValidationError)
}
"""Default template of every built-in code, used to tell overridable messages from customised ones."""

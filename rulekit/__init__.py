"""rulekit: composable, aggregating data validation.

Usage:
    from rulekit import Field, Required, Email, validate_struct

    err = validate_struct(customer,
        Field("name", Required),
        Field("email", Required, Email),
    )
    if err is not None:
        return {"errors": err.to_dict()}
"""
from .context import Context, ContextKey
from .config import Settings, ValidationConfig, get_default_config, get_settings, set_default_config
from .errors import Errors, ErrorCode, InternalError, ValidationError, internal_error, is_internal, new_error
from .logging import configure_logging, get_logger
from .validation import *  # noqa: F401,F403
from .validation import __all__ as _validation_all

__version__ = "0.1.0"

__all__ = [
    "Context",
    "ContextKey",
    "Settings",
    "ValidationConfig",
    "get_default_config",
    "get_settings",
    "set_default_config",
    "Errors",
    "ErrorCode",
    "InternalError",
    "ValidationError",
    "internal_error",
    "is_internal",
    "new_error",
    "configure_logging",
    "get_logger",
    *_validation_all,
]

"""Validation configuration.

Settings are read from the environment (``RULEKIT_`` prefix) or a ``.env`` file.
The engine never reads them mid-call: entry points take an explicit
ValidationConfig, falling back to the process default resolved once per call.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from pydantic_settings import BaseSettings, SettingsConfigDict

from rulekit.errors import BUILTIN_MESSAGES, ValidationError


class Settings(BaseSettings):
    # Annotation consulted for record error keys (dataclass metadata / pydantic json_schema_extra)
    ERROR_KEY_SOURCE: str = "json"
    # code -> template overrides for built-in messages, e.g. '{"validation_required": "is mandatory"}'
    DEFAULT_MESSAGES: dict[str, str] = {}

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_prefix="RULEKIT_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Options threaded through one validation call."""
    error_key_source: str = "json"
    default_messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "default_messages", MappingProxyType(dict(self.default_messages)))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ValidationConfig:
        settings = settings or get_settings()
        return cls(error_key_source=settings.ERROR_KEY_SOURCE, default_messages=settings.DEFAULT_MESSAGES)

    def with_messages(self, **messages: str) -> ValidationConfig:
        return replace(self, default_messages={**self.default_messages, **messages})

    def reword(self, error: ValidationError) -> ValidationError:
        """Apply the message override for ``error.code`` unless the rule customised its message."""
        template = self.default_messages.get(error.code)
        if template is None or BUILTIN_MESSAGES.get(error.code) != error.message: return error
        return error.with_message(template)


_default_config: ValidationConfig | None = None


def get_default_config() -> ValidationConfig:
    """Process default, built from Settings on first use."""
    global _default_config
    if _default_config is None: _default_config = ValidationConfig.from_settings()
    return _default_config


def set_default_config(config: ValidationConfig | None) -> None:
    """Install the process default at application start-up. None resets to Settings."""
    global _default_config
    _default_config = config

"""Core modules for Samwise."""

from samwise.core.config import Area, Config
from samwise.core.exceptions import (
    ActionError,
    AdapterError,
    AuthenticationError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
    ConfigValidationError,
    MissingSecretsError,
    PresenterError,
    SamwiseError,
)
from samwise.core.secrets import Secrets, resolve_secrets

__all__ = [
    "Area",
    "Config",
    "Secrets",
    "resolve_secrets",
    "SamwiseError",
    "ConfigurationError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "MissingSecretsError",
    "PresenterError",
    "AuthenticationError",
    "AdapterError",
    "ActionError",
]

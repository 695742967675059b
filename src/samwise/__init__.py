"""
Samwise - a small personal-automation CLI.

Capabilities read from Google Calendar, write to Todoist, and present a
briefing in the terminal or on Slack.
"""

__version__ = "0.1.0"

from samwise.cli.capability import Capability
from samwise.cli.router import Router
from samwise.core.config import Config
from samwise.core.exceptions import (
    ActionError,
    AdapterError,
    AuthenticationError,
    ConfigurationError,
    MissingSecretsError,
    SamwiseError,
)
from samwise.core.secrets import Secrets, resolve_secrets
from samwise.output.briefing import Briefing, Presenter, Section

__all__ = [
    "__version__",
    "Capability",
    "Router",
    "Config",
    "Secrets",
    "resolve_secrets",
    "Briefing",
    "Section",
    "Presenter",
    "SamwiseError",
    "ConfigurationError",
    "MissingSecretsError",
    "AuthenticationError",
    "AdapterError",
    "ActionError",
]

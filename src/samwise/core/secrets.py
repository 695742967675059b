"""
Secret resolution from environment variables.

Only the variables needed by the requested groups are checked, and every
missing one is reported together.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from samwise.core.exceptions import MissingSecretsError

logger = logging.getLogger(__name__)

GOOGLE_CREDENTIALS = "GOOGLE_CREDENTIALS"
TODOIST_API_TOKEN = "TODOIST_API_TOKEN"
SLACK_WEBHOOK_URL = "SLACK_WEBHOOK_URL"


@dataclass(frozen=True)
class EnvVar:
    """A required environment variable and the group label that owns it."""

    name: str
    group: str


_GOOGLE = (EnvVar(GOOGLE_CREDENTIALS, "calendar/gmail"),)

# Group name -> variables it needs
SECRET_GROUPS: dict[str, tuple[EnvVar, ...]] = {
    "calendar": _GOOGLE,
    "gmail": _GOOGLE,
    "todoist": (EnvVar(TODOIST_API_TOKEN, "todoist"),),
    "slack": (EnvVar(SLACK_WEBHOOK_URL, "slack"),),
}


def mask_value(value: Any) -> str:
    """Mask sensitive values for logging."""
    if value is None:
        return "None"
    str_value = str(value)
    if len(str_value) <= 8:
        return "***"
    return f"{str_value[:4]}...{str_value[-4:]}"


@dataclass(frozen=True)
class Secrets:
    """API keys and tokens. Fields not needed by the capability stay empty."""

    google_credentials: str = ""
    todoist_api_token: str = ""
    slack_webhook_url: str = ""

    def __repr__(self) -> str:
        return (
            f"Secrets(google_credentials={mask_value(self.google_credentials)}, "
            f"todoist_api_token={mask_value(self.todoist_api_token)}, "
            f"slack_webhook_url={mask_value(self.slack_webhook_url)})"
        )


def required_env_vars(groups: tuple[str, ...] | list[str]) -> list[EnvVar]:
    """Variables needed by the given groups, deduplicated by name in first-seen order."""
    seen: set[str] = set()
    result = []
    for group in groups:
        for env_var in SECRET_GROUPS.get(group, ()):
            if env_var.name not in seen:
                seen.add(env_var.name)
                result.append(env_var)
    return result


def resolve_secrets(*groups: str, environ: Mapping[str, str] | None = None) -> Secrets:
    """
    Read the environment variables required by the given groups.

    Args:
        *groups: Secret group names (e.g., "calendar", "todoist")
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Secrets with the needed fields populated

    Raises:
        MissingSecretsError: If any required variable is unset or empty
    """
    if environ is None:
        environ = os.environ

    missing: list[tuple[str, str]] = []
    values: dict[str, str] = {}

    for env_var in required_env_vars(groups):
        value = environ.get(env_var.name, "")
        if not value:
            missing.append((env_var.name, env_var.group))
            continue
        values[env_var.name] = value
        logger.debug("Secret %s from env: %s", env_var.name, mask_value(value))

    if missing:
        raise MissingSecretsError(missing)

    return Secrets(
        google_credentials=values.get(GOOGLE_CREDENTIALS, ""),
        todoist_api_token=values.get(TODOIST_API_TOKEN, ""),
        slack_webhook_url=values.get(SLACK_WEBHOOK_URL, ""),
    )

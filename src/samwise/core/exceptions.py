"""
Custom exceptions for Samwise.

Exception hierarchy:
    SamwiseError (base)
    ├── ConfigurationError
    │   ├── ConfigNotFoundError
    │   ├── ConfigParseError
    │   └── ConfigValidationError
    ├── MissingSecretsError
    ├── PresenterError
    ├── AuthenticationError
    ├── AdapterError
    └── ActionError
"""

from __future__ import annotations

from typing import Any


class SamwiseError(Exception):
    """Base exception for all Samwise errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(SamwiseError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Missing config file
        - Invalid YAML syntax
        - Required section left empty
    """

    pass


class ConfigNotFoundError(ConfigurationError):
    """Raised when the config file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"config file not found: {path}")
        self.path = path


class ConfigParseError(ConfigurationError):
    """Raised when the config file exists but cannot be read or parsed."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when a capability's required config section is incomplete."""

    def __init__(self, message: str, capability: str | None = None):
        super().__init__(message)
        self.capability = capability


class MissingSecretsError(SamwiseError):
    """
    Raised when required environment variables are unset.

    Every missing variable is reported at once, not just the first.
    """

    def __init__(self, missing: list[tuple[str, str]]):
        """
        Initialize missing secrets error.

        Args:
            missing: (variable name, owning group) pairs, in lookup order
        """
        lines = "\n  ".join(f"{name} (required by {group})" for name, group in missing)
        super().__init__(f"missing environment variables:\n  {lines}")
        self.missing = [name for name, _ in missing]
        self.groups = dict(missing)


class PresenterError(SamwiseError):
    """Raised when no output presenter can be set up for this environment."""

    pass


class AuthenticationError(SamwiseError):
    """
    Raised when authentication fails.

    Examples:
        - Malformed service account key
        - Token exchange rejected
    """

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize authentication error.

        Args:
            message: Error message
            service: Service that failed authentication (e.g., "google", "todoist")
            details: Additional error details
        """
        super().__init__(message, details)
        self.service = service

    def __str__(self) -> str:
        if self.service:
            return f"[{self.service}] {self.message}"
        return self.message


class AdapterError(SamwiseError):
    """
    Raised when an adapter fails to communicate with external service.

    Examples:
        - Network error
        - API error response
        - Timeout
    """

    def __init__(
        self,
        message: str,
        adapter: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize adapter error.

        Args:
            message: Error message
            adapter: Name of the adapter (e.g., "slack", "todoist")
            status_code: HTTP status code if applicable
            details: Additional error details
        """
        super().__init__(message, details)
        self.adapter = adapter
        self.status_code = status_code

    def __str__(self) -> str:
        parts = []
        if self.adapter:
            parts.append(f"[{self.adapter}]")
        if self.status_code:
            parts.append(f"HTTP {self.status_code}:")
        parts.append(self.message)
        return " ".join(parts)


class ActionError(SamwiseError):
    """
    Raised when a capability step fails.

    Examples:
        - Failed to fetch calendar events
        - Failed to create a task
    """

    def __init__(
        self,
        message: str,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize action error.

        Args:
            message: Error message
            action: Name of the action (e.g., "create_task")
            details: Additional error details
        """
        super().__init__(message, details)
        self.action = action

    def __str__(self) -> str:
        if self.action:
            return f"[{self.action}] {self.message}"
        return self.message

"""Capability: a named skill invocable as a subcommand."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from samwise.core.config import Config
from samwise.core.secrets import Secrets
from samwise.output.briefing import Presenter

RunFunc = Callable[[Config, Secrets, Presenter], None]


@dataclass(frozen=True)
class Capability:
    """
    A Samwise skill.

    Attributes:
        name: Subcommand name
        description: One-line description shown in help
        run: Called with the loaded config, resolved secrets and presenter.
            Raises on failure.
        required_config: Names passed to Config.validate_for, checked in order
        required_secrets: Secret group names passed to resolve_secrets
    """

    name: str
    description: str
    run: RunFunc
    required_config: tuple[str, ...] = ()
    required_secrets: tuple[str, ...] = ()

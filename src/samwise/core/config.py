"""
Configuration loading and per-capability validation.

The config file is YAML with top-level sections: calendar, todoist, gmail,
slack and areas. Secrets never live here; see samwise.core.secrets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from samwise.core.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_PATH = "config.yaml"


@dataclass(frozen=True)
class CalendarConfig:
    calendar_id: str = ""


@dataclass(frozen=True)
class TodoistConfig:
    project_id: str = ""
    kanban_board_id: str = ""


@dataclass(frozen=True)
class GmailConfig:
    """No fields yet. Gmail uses the authenticated user's inbox."""


@dataclass(frozen=True)
class SlackConfig:
    """No fields. The webhook URL comes from SLACK_WEBHOOK_URL."""


@dataclass(frozen=True)
class Area:
    """A project or area of interest, matched against event titles by keyword."""

    name: str = ""
    keywords: tuple[str, ...] = ()


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a top-level mapping section, empty when absent."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigParseError(f"parsing config file: '{key}' must be a mapping")
    return value


def _string(section: dict[str, Any], key: str, where: str) -> str:
    value = section.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigParseError(f"parsing config file: '{where}.{key}' must be a string")
    return str(value)


def _areas(data: dict[str, Any]) -> list[Area]:
    raw = data.get("areas")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigParseError("parsing config file: 'areas' must be a list")

    areas = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigParseError(f"parsing config file: areas[{index}] must be a mapping")
        keywords = item.get("keywords") or []
        if not isinstance(keywords, list):
            raise ConfigParseError(
                f"parsing config file: areas[{index}].keywords must be a list"
            )
        areas.append(
            Area(
                name=_string(item, "name", f"areas[{index}]"),
                keywords=tuple(str(k) for k in keywords),
            )
        )
    return areas


@dataclass(frozen=True)
class Config:
    """
    Top-level configuration.

    Usage:
        config = Config.load("config.yaml")
        config.validate_for("calendar")
        calendar_id = config.calendar.calendar_id
    """

    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    todoist: TodoistConfig = field(default_factory=TodoistConfig)
    gmail: GmailConfig = field(default_factory=GmailConfig)
    slack: SlackConfig = field(default_factory=SlackConfig)
    areas: list[Area] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path | str) -> Config:
        """
        Read and parse a YAML config file.

        Args:
            path: Path to the config file

        Returns:
            Parsed configuration. Missing sections get empty values.

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigParseError: If the file cannot be read or is not valid config
        """
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigNotFoundError(str(path)) from None
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"parsing config file: {e}") from e
        except OSError as e:
            raise ConfigParseError(f"reading config file: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigParseError("parsing config file: top level must be a mapping")

        calendar = _section(loaded, "calendar")
        todoist = _section(loaded, "todoist")
        _section(loaded, "gmail")
        _section(loaded, "slack")

        config = cls(
            calendar=CalendarConfig(
                calendar_id=_string(calendar, "calendar_id", "calendar"),
            ),
            todoist=TodoistConfig(
                project_id=_string(todoist, "project_id", "todoist"),
                kanban_board_id=_string(todoist, "kanban_board_id", "todoist"),
            ),
            areas=_areas(loaded),
        )
        logger.info("Loaded configuration from: %s", path)
        return config

    def validate_for(self, capability: str) -> None:
        """
        Check that the config has what the given capability needs.

        Names with no declared checks always pass.

        Raises:
            ConfigValidationError: On the first missing field
        """
        if capability == "calendar":
            if not self.calendar.calendar_id:
                raise ConfigValidationError(
                    "calendar.calendar_id is required for the calendar capability",
                    capability=capability,
                )
        elif capability == "todoist":
            if not self.todoist.project_id:
                raise ConfigValidationError(
                    "todoist.project_id is required for the todoist capability",
                    capability=capability,
                )
        elif capability == "review-projects":
            if not self.todoist.kanban_board_id:
                raise ConfigValidationError(
                    "todoist.kanban_board_id is required for the review-projects capability",
                    capability=capability,
                )
        elif capability == "calendar-recommendations":
            if not self.areas:
                raise ConfigValidationError(
                    "areas is required for the calendar-recommendations capability",
                    capability=capability,
                )
        logger.debug("Config valid for: %s", capability)

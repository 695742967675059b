"""
Tests for config loading and per-capability validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from samwise.core.config import Area, CalendarConfig, Config, TodoistConfig
from samwise.core.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
    ConfigValidationError,
)

FULL_CONFIG = """
calendar:
  calendar_id: me@example.com
todoist:
  project_id: 2203306141
  kanban_board_id: board-1
gmail: {}
slack: {}
areas:
  - name: Health
    keywords: [gym, doctor]
  - name: Writing
    keywords: [blog]
"""


@pytest.fixture
def write_config(tmp_path: Path):
    """Write YAML text to a temp config file and return its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class TestConfigLoad:
    """Tests for Config.load."""

    def test_load_full_config(self, write_config):
        """Should parse every section."""
        config = Config.load(write_config(FULL_CONFIG))

        assert config.calendar.calendar_id == "me@example.com"
        assert config.todoist.project_id == "2203306141"
        assert config.todoist.kanban_board_id == "board-1"
        assert config.areas == [
            Area(name="Health", keywords=("gym", "doctor")),
            Area(name="Writing", keywords=("blog",)),
        ]

    def test_load_empty_file(self, write_config):
        """An empty or comment-only file gives empty sections."""
        config = Config.load(write_config("# minimal config\n"))

        assert config.calendar.calendar_id == ""
        assert config.todoist.project_id == ""
        assert config.areas == []

    def test_load_missing_file(self, tmp_path: Path):
        """Missing file raises ConfigNotFoundError naming the path."""
        path = tmp_path / "nope" / "config.yaml"

        with pytest.raises(ConfigNotFoundError) as exc_info:
            Config.load(path)

        assert str(path) in str(exc_info.value)
        assert isinstance(exc_info.value, ConfigurationError)

    def test_load_missing_file_keeps_path_as_given(self, tmp_path: Path, monkeypatch):
        """The error names the path exactly as passed, without normalizing it."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigNotFoundError) as exc_info:
            Config.load("./missing.yaml")

        assert "config file not found: ./missing.yaml" in str(exc_info.value)

    def test_load_invalid_yaml(self, write_config):
        """Broken YAML raises ConfigParseError chained to the YAML error."""
        with pytest.raises(ConfigParseError) as exc_info:
            Config.load(write_config("calendar: [unclosed\n"))

        assert exc_info.value.__cause__ is not None
        assert not isinstance(exc_info.value, ConfigNotFoundError)

    def test_load_invalid_utf8(self, tmp_path: Path):
        """Bytes that are not UTF-8 raise ConfigParseError."""
        path = tmp_path / "config.yaml"
        path.write_bytes(b"calendar:\n  calendar_id: \xff\xfe\n")

        with pytest.raises(ConfigParseError) as exc_info:
            Config.load(path)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_load_non_mapping(self, write_config):
        """A top-level list is not a config."""
        with pytest.raises(ConfigParseError):
            Config.load(write_config("- a\n- b\n"))

    def test_load_wrong_section_shape(self, write_config):
        """Areas must be a list."""
        with pytest.raises(ConfigParseError):
            Config.load(write_config("areas: nope\n"))

    def test_unknown_keys_ignored(self, write_config):
        """Extra keys do not break loading."""
        config = Config.load(write_config("weather:\n  city: Berlin\n"))
        assert config.calendar.calendar_id == ""


class TestValidateFor:
    """Tests for Config.validate_for."""

    def test_calendar_requires_calendar_id(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            Config().validate_for("calendar")
        assert "calendar.calendar_id" in str(exc_info.value)

    def test_calendar_ok(self):
        Config(calendar=CalendarConfig(calendar_id="primary")).validate_for("calendar")

    def test_todoist_requires_project_id(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            Config().validate_for("todoist")
        assert "todoist.project_id" in str(exc_info.value)

    def test_review_projects_requires_board(self):
        config = Config(todoist=TodoistConfig(project_id="p1"))
        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate_for("review-projects")
        assert "kanban_board_id" in str(exc_info.value)

    def test_recommendations_require_areas(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            Config().validate_for("calendar-recommendations")
        assert "areas" in str(exc_info.value)

        Config(areas=[Area(name="Health")]).validate_for("calendar-recommendations")

    def test_unknown_name_passes(self):
        """Names with no declared checks always pass."""
        Config().validate_for("something-else")

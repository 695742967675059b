"""
Tests for the subcommand router.

Exit codes come from Router.run; output is captured with capsys.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from samwise.cli.capability import Capability
from samwise.cli.main import main
from samwise.cli.router import Router, levenshtein
from samwise.output import Briefing, Section, TerminalPresenter


def _greet(config, secrets, presenter):
    presenter.present(Briefing("Hello", [Section("Greeting", "Hi there!")]))


@pytest.fixture
def capabilities() -> list[Capability]:
    return [
        Capability(name="greet", description="Say hello", run=_greet),
        Capability(
            name="calendar-sync",
            description="Sync calendar to todoist",
            run=MagicMock(),
            required_config=("calendar",),
            required_secrets=("calendar",),
        ),
    ]


@pytest.fixture
def router(capabilities) -> Router:
    return Router(capabilities, environ={})


@pytest.fixture
def minimal_config(tmp_path: Path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text("# minimal config\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def calendar_config(tmp_path: Path) -> str:
    path = tmp_path / "calendar.yaml"
    path.write_text("calendar:\n  calendar_id: primary\n", encoding="utf-8")
    return str(path)


class TestLevenshtein:
    """Tests for edit distance."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("", "", 0),
            ("", "abc", 3),
            ("greet", "greet", 0),
            ("gret", "greet", 1),
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein(a, b) == expected
        assert levenshtein(b, a) == expected


class TestHelp:
    """No subcommand prints the capability list."""

    def test_no_args_prints_help(self, router: Router, capsys):
        code = router.run([])
        out = capsys.readouterr().out

        assert code == 0
        assert "greet" in out
        assert "calendar-sync" in out
        assert "Sync calendar to todoist" in out

    def test_columns_aligned(self, router: Router, capsys):
        router.run([])
        out = capsys.readouterr().out

        assert "  calendar-sync  Sync calendar to todoist" in out
        assert "  greet          Say hello" in out

    def test_help_flag(self, router: Router, capsys):
        assert router.run(["--help"]) == 0
        assert "greet" in capsys.readouterr().out

    def test_no_capabilities(self, capsys):
        assert Router([], environ={}).run([]) == 0
        assert "(no capabilities registered)" in capsys.readouterr().out

    def test_config_flag_without_command(self, router: Router, capsys):
        assert router.run(["--config", "whatever.yaml"]) == 0
        assert "Commands:" in capsys.readouterr().out


class TestUnknownCommand:
    """Unknown subcommands fail with suggestions."""

    def test_unknown_command(self, router: Router, capsys):
        code = router.run(["nonexistent"])
        err = capsys.readouterr().err

        assert code == 1
        assert "unknown command: nonexistent" in err

    def test_suggests_close_name(self, router: Router, capsys):
        code = router.run(["gret"])
        err = capsys.readouterr().err

        assert code == 1
        assert "Did you mean:" in err
        assert "  greet" in err
        assert "calendar-sync" not in err

    def test_suggests_by_first_character(self, router: Router):
        assert router.suggestions("cal") == ["calendar-sync"]

    def test_suggestions_sorted(self):
        router = Router(
            [
                Capability(name="stats", description="", run=MagicMock()),
                Capability(name="sync", description="", run=MagicMock()),
                Capability(name="hello", description="", run=MagicMock()),
            ],
            environ={},
        )
        assert router.suggestions("s") == ["stats", "sync"]

    def test_no_suggestions(self, router: Router, capsys):
        router.run(["xyzzyplugh"])
        err = capsys.readouterr().err

        assert "Did you mean" not in err
        assert "Run 'sam' for a list of available commands." in err


class TestFlags:
    """Flag parsing."""

    def test_unknown_flag(self, router: Router, capsys):
        assert router.run(["--bogus", "greet"]) == 1
        assert "--bogus" in capsys.readouterr().err

    def test_config_flag_missing_value(self, router: Router):
        assert router.run(["--config"]) == 1

    def test_parsing_stops_at_command(self, router: Router, minimal_config: str):
        """Tokens after the subcommand are not parsed as flags."""
        assert router.run(["--config", minimal_config, "greet", "--bogus"]) == 0


class TestDispatch:
    """Running a matched capability."""

    def test_known_command(self, router: Router, minimal_config: str, capsys):
        code = router.run(["--config", minimal_config, "greet"])

        assert code == 0
        assert "Hi there!" in capsys.readouterr().out

    def test_run_receives_config_secrets_presenter(self, minimal_config: str):
        run = MagicMock()
        router = Router([Capability(name="test", description="test", run=run)], environ={})

        assert router.run(["--config", minimal_config, "test"]) == 0
        run.assert_called_once()
        config, secrets, presenter = run.call_args.args
        assert config.calendar.calendar_id == ""
        assert secrets.google_credentials == ""
        assert isinstance(presenter, TerminalPresenter)

    def test_missing_config(self, router: Router, capsys):
        code = router.run(["--config", "/nonexistent/config.yaml", "greet"])

        assert code == 1
        assert "config file not found: /nonexistent/config.yaml" in capsys.readouterr().err

    def test_config_not_utf8(self, router: Router, tmp_path: Path, capsys):
        path = tmp_path / "config.yaml"
        path.write_bytes(b"calendar:\n  calendar_id: \xff\xfe\n")

        code = router.run(["--config", str(path), "greet"])

        assert code == 1
        assert "parsing config file" in capsys.readouterr().err

    def test_config_validation_failure(self, router: Router, capabilities, minimal_config, capsys):
        code = router.run(["--config", minimal_config, "calendar-sync"])

        assert code == 1
        assert "config error: calendar.calendar_id" in capsys.readouterr().err
        capabilities[1].run.assert_not_called()

    def test_missing_secrets(self, router: Router, capabilities, calendar_config, capsys):
        code = router.run(["--config", calendar_config, "calendar-sync"])

        assert code == 1
        assert "GOOGLE_CREDENTIALS (required by calendar/gmail)" in capsys.readouterr().err
        capabilities[1].run.assert_not_called()

    def test_secrets_resolved(self, capabilities, calendar_config):
        router = Router(capabilities, environ={"GOOGLE_CREDENTIALS": "creds"})

        assert router.run(["--config", calendar_config, "calendar-sync"]) == 0
        secrets = capabilities[1].run.call_args.args[1]
        assert secrets.google_credentials == "creds"
        assert secrets.todoist_api_token == ""

    def test_presenter_failure(self, capabilities, minimal_config, capsys):
        router = Router(capabilities, environ={"GITHUB_ACTIONS": "true"})

        assert router.run(["--config", minimal_config, "greet"]) == 1
        assert "SLACK_WEBHOOK_URL" in capsys.readouterr().err

    def test_run_error(self, minimal_config: str, capsys):
        run = MagicMock(side_effect=RuntimeError("boom"))
        router = Router([Capability(name="fail", description="", run=run)], environ={})

        assert router.run(["--config", minimal_config, "fail"]) == 1
        assert "error: boom" in capsys.readouterr().err

    def test_duplicate_last_wins(self, minimal_config: str):
        first, second = MagicMock(), MagicMock()
        router = Router(
            [
                Capability(name="dup", description="first", run=first),
                Capability(name="dup", description="second", run=second),
            ],
            environ={},
        )

        assert router.run(["--config", minimal_config, "dup"]) == 0
        first.assert_not_called()
        second.assert_called_once()


class TestClickCommand:
    """The router's click command works with CliRunner."""

    def test_cli_runner_help(self, router: Router):
        result = CliRunner().invoke(router.command, [])
        assert result.exit_code == 0
        assert "greet" in result.output

    def test_cli_runner_unknown(self, router: Router):
        result = CliRunner().invoke(router.command, ["nope"])
        assert result.exit_code == 1


class TestMain:
    """Tests for the entry point."""

    def test_main_lists_builtin_capabilities(self, capsys):
        with patch("samwise.cli.main.load_dotenv"):
            code = main([])

        out = capsys.readouterr().out
        assert code == 0
        assert "hello" in out
        assert "calendar-sync" in out
        assert "calendar-recommendations" in out

    def test_main_hello(self, minimal_config: str, capsys, monkeypatch):
        monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
        with patch("samwise.cli.main.load_dotenv"):
            code = main(["--config", minimal_config, "hello"])

        assert code == 0
        assert "# Good morning!" in capsys.readouterr().out

"""
Subcommand router.

Usage:
    router = Router(builtin_capabilities())
    exit_code = router.run(["--config", "config.yaml", "calendar-sync"])

Flags are parsed with click up to the first non-flag token, which names the
capability. Config is loaded and validated, then secrets and the presenter
are resolved, and only then does the capability run.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Mapping

import click

from samwise.cli.capability import Capability
from samwise.core.config import DEFAULT_PATH, Config
from samwise.core.exceptions import ConfigValidationError, SamwiseError
from samwise.core.secrets import resolve_secrets
from samwise.output.detect import detect_presenter

logger = logging.getLogger(__name__)

PROG_NAME = "sam"
SUGGESTION_DISTANCE = 3
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send logs to stderr so stdout stays the briefing."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    if verbose:
        logging.getLogger("samwise").setLevel(logging.DEBUG)


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost insert, delete and substitute."""
    la, lb = len(a), len(b)
    d = [[0] * (lb + 1) for _ in range(la + 1)]
    for i in range(la + 1):
        d[i][0] = i
    for j in range(lb + 1):
        d[0][j] = j

    for i in range(1, la + 1):
        for j in range(1, lb + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,
                d[i][j - 1] + 1,
                d[i - 1][j - 1] + cost,
            )
    return d[la][lb]


class Router:
    """
    Dispatches subcommands to registered capabilities.

    Duplicate capability names are allowed; the last one registered wins.
    """

    def __init__(
        self,
        capabilities: Iterable[Capability],
        environ: Mapping[str, str] | None = None,
    ):
        """
        Args:
            capabilities: Capabilities in registration order
            environ: Environment for secrets and presenter detection.
                Defaults to os.environ.
        """
        self.capabilities: dict[str, Capability] = {}
        for capability in capabilities:
            if capability.name in self.capabilities:
                logger.warning("Capability %s registered twice, keeping the last", capability.name)
            self.capabilities[capability.name] = capability

        self.environ = os.environ if environ is None else environ
        self.command = self._build_command()

    def __repr__(self) -> str:
        return f"Router(capabilities={self.sorted_names()})"

    def sorted_names(self) -> list[str]:
        return sorted(self.capabilities)

    def run(self, args: Iterable[str]) -> int:
        """
        Parse arguments and dispatch.

        Returns:
            Exit code: 0 for success, 1 for any error
        """
        try:
            return self.command.main(
                args=list(args),
                prog_name=PROG_NAME,
                standalone_mode=False,
            )
        except click.ClickException as e:
            e.show()
            return 1

    def _build_command(self) -> click.Command:
        @click.command(
            add_help_option=False,
            context_settings={"allow_interspersed_args": False},
        )
        @click.option(
            "--config",
            "config_path",
            default=DEFAULT_PATH,
            metavar="PATH",
            help="Path to config file.",
        )
        @click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
        @click.option("-h", "--help", "show_help", is_flag=True, help="Show commands.")
        @click.argument("name", required=False)
        @click.argument("extra", nargs=-1, type=click.UNPROCESSED)
        @click.pass_context
        def command(
            ctx: click.Context,
            config_path: str,
            verbose: bool,
            show_help: bool,
            name: str | None,
            extra: tuple[str, ...],
        ) -> None:
            configure_logging(verbose)
            if show_help or name is None:
                self.print_help()
                ctx.exit(0)
            if extra:
                logger.debug("Ignoring arguments after %s: %s", name, extra)
            ctx.exit(self.dispatch(name, config_path))

        return command

    def dispatch(self, name: str, config_path: str) -> int:
        """Run a capability by name. Returns the exit code."""
        capability = self.capabilities.get(name)
        if capability is None:
            click.echo(f"unknown command: {name}\n", err=True)
            self.print_suggestions(name)
            return 1

        try:
            config = Config.load(config_path)
        except SamwiseError as e:
            click.echo(f"error: {e}", err=True)
            return 1

        try:
            for section in capability.required_config:
                config.validate_for(section)
        except ConfigValidationError as e:
            click.echo(f"config error: {e}", err=True)
            return 1

        try:
            secrets = resolve_secrets(*capability.required_secrets, environ=self.environ)
            presenter = detect_presenter(self.environ)
        except SamwiseError as e:
            click.echo(f"error: {e}", err=True)
            return 1

        logger.info("Running capability: %s", name)
        try:
            capability.run(config, secrets, presenter)
        except Exception as e:
            logger.debug("Capability %s failed", name, exc_info=True)
            click.echo(f"error: {e}", err=True)
            return 1

        return 0

    def print_help(self) -> None:
        click.echo("Sam - your personal assistant")
        click.echo()
        click.echo(f"Usage: {PROG_NAME} [flags] <command>")
        click.echo()
        click.echo("Flags:")
        click.echo(f"  --config <path>  path to config file (default: {DEFAULT_PATH})")
        click.echo("  -v, --verbose    enable debug logging")
        click.echo()
        click.echo("Commands:")

        names = self.sorted_names()
        if not names:
            click.echo("  (no capabilities registered)")
            return

        width = max(len(name) for name in names)
        for name in names:
            click.echo(f"  {name:<{width}}  {self.capabilities[name].description}")

    def suggestions(self, unknown: str) -> list[str]:
        """Registered names sharing the first character or within edit distance."""
        return [
            name
            for name in self.sorted_names()
            if (unknown and name.startswith(unknown[0]))
            or levenshtein(unknown, name) <= SUGGESTION_DISTANCE
        ]

    def print_suggestions(self, unknown: str) -> None:
        suggestions = self.suggestions(unknown)
        if suggestions:
            click.echo("Did you mean:", err=True)
            for name in suggestions:
                click.echo(f"  {name}", err=True)
            click.echo(err=True)
        click.echo(f"Run '{PROG_NAME}' for a list of available commands.", err=True)

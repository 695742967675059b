"""Presenter selection from the execution context."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from samwise.core.exceptions import PresenterError
from samwise.core.secrets import SLACK_WEBHOOK_URL
from samwise.output.briefing import Presenter
from samwise.output.slack import SlackPresenter
from samwise.output.terminal import TerminalPresenter

logger = logging.getLogger(__name__)

CI_INDICATOR = "GITHUB_ACTIONS"


def detect_presenter(environ: Mapping[str, str]) -> Presenter:
    """
    Pick the presenter for this run.

    In GitHub Actions briefings go to Slack, which requires SLACK_WEBHOOK_URL.
    Everywhere else they are printed to the terminal.

    Args:
        environ: Environment mapping to read from

    Raises:
        PresenterError: If running in CI without a webhook URL
    """
    if environ.get(CI_INDICATOR) != "true":
        logger.debug("Using terminal presenter")
        return TerminalPresenter()

    webhook_url = environ.get(SLACK_WEBHOOK_URL, "")
    if not webhook_url:
        raise PresenterError(
            f"running in GitHub Actions but {SLACK_WEBHOOK_URL} is not set"
        )

    logger.debug("Using Slack presenter")
    return SlackPresenter(webhook_url)

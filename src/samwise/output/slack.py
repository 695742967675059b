"""
Slack presenter: posts briefings to an Incoming Webhook.

The whole briefing goes out as one mrkdwn section block.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from samwise.core.exceptions import AdapterError
from samwise.output.briefing import Briefing, Presenter

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 30.0


def render_mrkdwn(briefing: Briefing) -> str:
    """Render a briefing as Slack mrkdwn text."""
    text = f"*{briefing.title}*\n\n"
    for i, section in enumerate(briefing.sections):
        text += f"*{section.heading}*\n{section.body}\n"
        if i < len(briefing.sections) - 1:
            text += "\n"
    return text


def build_payload(briefing: Briefing) -> dict[str, Any]:
    """Build the webhook JSON payload for a briefing."""
    return {
        "blocks": [
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": render_mrkdwn(briefing)},
            }
        ]
    }


class SlackPresenter(Presenter):
    """
    Delivers briefings via a Slack Incoming Webhook.

    Usage:
        presenter = SlackPresenter("https://hooks.slack.com/services/...")
        presenter.present(briefing)
    """

    def __init__(self, webhook_url: str, http_client: httpx.Client | None = None):
        """
        Args:
            webhook_url: Incoming Webhook URL
            http_client: HTTP client to post with. A client with a 30s timeout
                is created when omitted.
        """
        self.webhook_url = webhook_url
        self._client = http_client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=HTTP_TIMEOUT)
        return self._client

    def present(self, briefing: Briefing) -> None:
        """
        Post the briefing.

        Raises:
            AdapterError: On transport failure or a non-200 response
        """
        payload = build_payload(briefing)
        client = self._get_client()

        try:
            response = client.post(
                self.webhook_url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise AdapterError(f"sending slack message: {e}", adapter="slack") from e

        if response.status_code != 200:
            raise AdapterError(
                "slack webhook rejected the message",
                adapter="slack",
                status_code=response.status_code,
            )

        logger.info("Briefing posted to Slack: %s", briefing.title)

    def __repr__(self) -> str:
        return "SlackPresenter(webhook_url=***)"

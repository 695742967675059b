"""
Output presenters for Samwise.

Briefings are printed to the terminal locally and posted to Slack in CI.
"""

from samwise.output.briefing import Briefing, Presenter, Section
from samwise.output.detect import detect_presenter
from samwise.output.slack import SlackPresenter
from samwise.output.terminal import TerminalPresenter

__all__ = [
    "Briefing",
    "Section",
    "Presenter",
    "TerminalPresenter",
    "SlackPresenter",
    "detect_presenter",
]

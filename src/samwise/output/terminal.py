"""Terminal presenter: prints briefings as markdown."""

from __future__ import annotations

from typing import TextIO

import click

from samwise.output.briefing import Briefing, Presenter


def render_markdown(briefing: Briefing) -> str:
    """Render a briefing as a markdown document."""
    lines = [f"# {briefing.title}", ""]
    for i, section in enumerate(briefing.sections):
        lines.append(f"## {section.heading}")
        lines.append("")
        lines.append(section.body)
        if i < len(briefing.sections) - 1:
            lines.append("")
    return "\n".join(lines) + "\n"


class TerminalPresenter(Presenter):
    """Writes briefings to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def present(self, briefing: Briefing) -> None:
        click.echo(render_markdown(briefing), file=self.stream, nl=False)

    def __repr__(self) -> str:
        return f"TerminalPresenter(stream={self.stream!r})"

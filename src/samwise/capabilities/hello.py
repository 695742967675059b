"""Hello - proves the whole pipeline works without touching any API."""

from __future__ import annotations

from datetime import datetime

from samwise.cli.capability import Capability
from samwise.core.config import Config
from samwise.core.secrets import Secrets
from samwise.output.briefing import Briefing, Presenter, Section


def run(config: Config, secrets: Secrets, presenter: Presenter) -> None:
    presenter.present(
        Briefing(
            "Good morning!",
            [
                Section("Status", f"Sam is running. Time: {datetime.now():%H:%M}"),
                Section(
                    "Pipeline",
                    "Config loaded, secrets resolved, presenter detected. All systems go.",
                ),
            ],
        )
    )


def hello() -> Capability:
    return Capability(
        name="hello",
        description="Check that the pipeline works end to end",
        run=run,
    )

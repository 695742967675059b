"""
Calendar recommendations - shows which areas got time on today's calendar.

Each configured area is matched against event titles by keyword
(case-insensitive substring). Areas with no matching event are listed as
needing time.
"""

from __future__ import annotations

import logging

from samwise.capabilities.calendar_sync import filter_declined
from samwise.cli.capability import Capability
from samwise.core.config import Area, Config
from samwise.core.exceptions import ActionError
from samwise.core.secrets import Secrets
from samwise.output.briefing import Briefing, Presenter, Section
from samwise.platform.calendar import CalendarEvent, CalendarReader
from samwise.platform.google_calendar import GoogleCalendarClient

logger = logging.getLogger(__name__)

TITLE = "Calendar Recommendations"


def matches(area: Area, event: CalendarEvent) -> bool:
    title = event.title.lower()
    return any(keyword.lower() in title for keyword in area.keywords if keyword)


def match_areas(
    areas: list[Area], events: list[CalendarEvent]
) -> tuple[dict[str, list[str]], list[str]]:
    """
    Group event titles by area.

    Returns:
        (area name -> matching event titles in area order, titles matching no area)
    """
    scheduled: dict[str, list[str]] = {area.name: [] for area in areas}
    unplanned = []
    for event in events:
        hit = False
        for area in areas:
            if matches(area, event):
                scheduled[area.name].append(event.title)
                hit = True
        if not hit:
            unplanned.append(event.title)
    return scheduled, unplanned


def build_briefing(areas: list[Area], events: list[CalendarEvent]) -> Briefing:
    scheduled, unplanned = match_areas(areas, events)

    with_time = [f"- {name}: {', '.join(titles)}" for name, titles in scheduled.items() if titles]
    without_time = [f"- {name}" for name, titles in scheduled.items() if not titles]

    needs_time = "Everything has time today"
    if without_time:
        needs_time = "\n".join(without_time + ["Consider blocking time for these."])

    return Briefing(
        TITLE,
        [
            Section("Scheduled", "\n".join(with_time) or "No area has time today"),
            Section("Needs time", needs_time),
            Section(
                "Unplanned",
                "\n".join(f"- {title}" for title in unplanned) or "None",
            ),
        ],
    )


class CalendarRecommendations:
    def __init__(self, calendar: CalendarReader):
        self.calendar = calendar

    def run(self, config: Config, secrets: Secrets, presenter: Presenter) -> None:
        try:
            events = self.calendar.today_events(config.calendar.calendar_id)
        except Exception as e:
            raise ActionError(
                f"fetching calendar events: {e}", action="calendar_recommendations"
            ) from e

        events = filter_declined(events)
        logger.info("Matching %d events against %d areas", len(events), len(config.areas))
        presenter.present(build_briefing(config.areas, events))


def run(config: Config, secrets: Secrets, presenter: Presenter) -> None:
    calendar = GoogleCalendarClient(secrets.google_credentials)
    try:
        CalendarRecommendations(calendar).run(config, secrets, presenter)
    finally:
        calendar.close()


def calendar_recommendations() -> Capability:
    return Capability(
        name="calendar-recommendations",
        description="Show which areas have time on today's calendar",
        run=run,
        required_config=("calendar", "calendar-recommendations"),
        required_secrets=("calendar",),
    )

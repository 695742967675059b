"""
Calendar sync - turns today's calendar events into Todoist tasks.

Declined events are skipped. Invitations still awaiting a response are
created with an "UNCONFIRMED: " prefix so they stand out.
"""

from __future__ import annotations

import logging

from samwise.cli.capability import Capability
from samwise.core.config import Config
from samwise.core.exceptions import ActionError
from samwise.core.secrets import Secrets
from samwise.output.briefing import Briefing, Presenter, Section
from samwise.platform.calendar import CalendarEvent, CalendarReader, RSVPStatus
from samwise.platform.google_calendar import GoogleCalendarClient
from samwise.platform.tasks import Task, TaskCreator
from samwise.platform.todoist import TodoistClient

logger = logging.getLogger(__name__)

TITLE = "Calendar Sync"
UNCONFIRMED_PREFIX = "UNCONFIRMED: "
TASK_PRIORITY = 3


def filter_declined(events: list[CalendarEvent]) -> list[CalendarEvent]:
    return [e for e in events if e.rsvp != RSVPStatus.DECLINED]


def to_task(event: CalendarEvent, project_id: str) -> Task:
    """Build the Todoist task for an event. Only timed events get a due time."""
    title = event.title
    if event.rsvp == RSVPStatus.NEEDS_ACTION:
        title = UNCONFIRMED_PREFIX + title

    task = Task(
        title=title,
        description=event.meeting_link,
        project_id=project_id,
        priority=TASK_PRIORITY,
    )
    if not event.all_day and event.start_time is not None:
        task.due_datetime = event.start_time
    return task


def format_task_list(titles: list[str]) -> str:
    return "\n".join(f"- {title}" for title in titles)


class CalendarSync:
    """
    Creates one task per actionable event, in calendar order.

    Stops at the first task that fails; tasks already created stay created.
    """

    def __init__(self, calendar: CalendarReader, tasks: TaskCreator):
        self.calendar = calendar
        self.tasks = tasks

    def run(self, config: Config, secrets: Secrets, presenter: Presenter) -> None:
        try:
            events = self.calendar.today_events(config.calendar.calendar_id)
        except Exception as e:
            raise ActionError(f"fetching calendar events: {e}", action="calendar_sync") from e

        actionable = filter_declined(events)
        logger.info(
            "%d events today, %d actionable", len(events), len(actionable)
        )

        if not actionable:
            presenter.present(
                Briefing(TITLE, [Section("Result", "No events today")])
            )
            return

        created = []
        for event in actionable:
            task = to_task(event, config.todoist.project_id)
            try:
                self.tasks.create_task(task)
            except Exception as e:
                raise ActionError(
                    f"creating todoist task {task.title!r}: {e}", action="calendar_sync"
                ) from e
            created.append(task.title)

        presenter.present(
            Briefing(
                TITLE,
                [
                    Section("Result", f"Created {len(created)} tasks"),
                    Section("Tasks", format_task_list(created)),
                ],
            )
        )


def run(config: Config, secrets: Secrets, presenter: Presenter) -> None:
    calendar = GoogleCalendarClient(secrets.google_credentials)
    tasks = TodoistClient(secrets.todoist_api_token)
    try:
        CalendarSync(calendar, tasks).run(config, secrets, presenter)
    finally:
        calendar.close()
        tasks.close()


def calendar_sync() -> Capability:
    return Capability(
        name="calendar-sync",
        description="Create Todoist tasks from today's calendar events",
        run=run,
        required_config=("calendar", "todoist"),
        required_secrets=("calendar", "todoist"),
    )

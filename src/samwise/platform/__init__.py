"""External platform adapters: Google Calendar (read) and Todoist (write)."""

from samwise.platform.calendar import CalendarEvent, CalendarReader, RSVPStatus
from samwise.platform.google_calendar import GoogleCalendarClient
from samwise.platform.tasks import Task, TaskCreator
from samwise.platform.todoist import TodoistClient

__all__ = [
    "CalendarEvent",
    "CalendarReader",
    "RSVPStatus",
    "GoogleCalendarClient",
    "Task",
    "TaskCreator",
    "TodoistClient",
]

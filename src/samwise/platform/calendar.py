"""Calendar data model and reader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RSVPStatus(str, Enum):
    """The user's response to a calendar invitation."""

    ACCEPTED = "accepted"
    DECLINED = "declined"
    NEEDS_ACTION = "needsAction"
    TENTATIVE = "tentative"


@dataclass
class CalendarEvent:
    """
    A single event from a calendar.

    Attributes:
        title: Event summary
        start_time: Start time, None for all-day events or unparseable starts
        all_day: Whether the event spans whole days
        meeting_link: Video call URL, empty when there is none
        rsvp: The user's response status
    """

    title: str
    start_time: datetime | None = None
    all_day: bool = False
    meeting_link: str = ""
    rsvp: RSVPStatus = RSVPStatus.ACCEPTED

    def __post_init__(self):
        if isinstance(self.rsvp, str) and not isinstance(self.rsvp, RSVPStatus):
            self.rsvp = RSVPStatus(self.rsvp)


class CalendarReader(ABC):
    """Fetches events from a calendar."""

    @abstractmethod
    def today_events(self, calendar_id: str) -> list[CalendarEvent]:
        """
        Return today's events, ordered by start time.

        Raises:
            SamwiseError: If the calendar cannot be read
        """
        pass

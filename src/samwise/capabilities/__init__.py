"""Built-in capabilities."""

from samwise.capabilities.calendar_sync import CalendarSync, calendar_sync
from samwise.capabilities.hello import hello
from samwise.capabilities.recommendations import (
    CalendarRecommendations,
    calendar_recommendations,
)
from samwise.cli.capability import Capability


def builtin_capabilities() -> list[Capability]:
    """All capabilities shipped with Samwise, in registration order."""
    return [
        hello(),
        calendar_sync(),
        calendar_recommendations(),
    ]


__all__ = [
    "CalendarSync",
    "CalendarRecommendations",
    "builtin_capabilities",
    "calendar_sync",
    "calendar_recommendations",
    "hello",
]

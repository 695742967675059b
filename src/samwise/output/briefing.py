"""
Briefing data model and the Presenter interface.

Every capability produces a Briefing; a Presenter delivers it once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class Section:
    """
    A titled block of content within a Briefing.

    Attributes:
        heading: Section heading
        body: Section body, may span several lines
    """

    heading: str
    body: str = ""


@dataclass
class Briefing:
    """
    Structured output of a capability.

    Attributes:
        title: Briefing title
        sections: Sections in display order
    """

    title: str
    sections: list[Section] = field(default_factory=list)


class Presenter(ABC):
    """
    Output sink for briefings.

    Example:
        >>> presenter = TerminalPresenter()
        >>> presenter.present(Briefing("Hello", [Section("Status", "All good")]))
    """

    @abstractmethod
    def present(self, briefing: Briefing) -> None:
        """
        Deliver a briefing.

        Raises:
            SamwiseError: If delivery fails
        """
        pass

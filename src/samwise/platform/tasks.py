"""Task data model and creator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass
class Task:
    """
    A task to be created in Todoist.

    Attributes:
        title: Task content
        description: Task description, may be empty
        project_id: Destination project
        due_datetime: Due time, None for all-day events or untimed tasks
        priority: Todoist priority, 1 (normal) to 4 (urgent)
    """

    title: str
    description: str = ""
    project_id: str = ""
    due_datetime: datetime | None = None
    priority: int = 1

    def __post_init__(self):
        if not 1 <= self.priority <= 4:
            raise ValueError(f"priority must be between 1 and 4, got {self.priority}")


class TaskCreator(ABC):
    """Creates tasks in a task manager."""

    @abstractmethod
    def create_task(self, task: Task) -> None:
        """
        Create a single task.

        Raises:
            SamwiseError: If the task could not be created
        """
        pass

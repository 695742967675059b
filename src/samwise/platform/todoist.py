"""
Todoist adapter - push-only task creation via the REST API v2.

Usage:
    client = TodoistClient(secrets.todoist_api_token)
    client.create_task(Task(title="Standup", project_id="12345", priority=3))
    client.close()
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from samwise.core.exceptions import AdapterError
from samwise.platform.tasks import Task, TaskCreator

logger = logging.getLogger(__name__)

TODOIST_API_BASE = "https://api.todoist.com/rest/v2"
HTTP_TIMEOUT = 30.0


def build_task_payload(task: Task) -> dict[str, Any]:
    """Build the create-task request body."""
    payload: dict[str, Any] = {
        "content": task.title,
        "project_id": task.project_id,
        "priority": task.priority,
    }
    if task.description:
        payload["description"] = task.description
    if task.due_datetime is not None:
        payload["due_datetime"] = task.due_datetime.isoformat()
    return payload


class TodoistClient(TaskCreator):
    """Creates tasks in Todoist with a personal API token."""

    def __init__(
        self,
        api_token: str,
        base_url: str = TODOIST_API_BASE,
        http_client: httpx.Client | None = None,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self._client = http_client

    def _get_client(self) -> httpx.Client:
        """Get HTTP client"""
        if self._client is None:
            self._client = httpx.Client(timeout=HTTP_TIMEOUT)
        return self._client

    def close(self) -> None:
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def create_task(self, task: Task) -> None:
        """
        Create a task.

        Raises:
            AdapterError: On transport failure or a response other than 200/201
        """
        client = self._get_client()
        try:
            response = client.post(
                f"{self.base_url}/tasks",
                json=build_task_payload(task),
                headers={"Authorization": f"Bearer {self.api_token}"},
            )
        except httpx.HTTPError as e:
            raise AdapterError(f"creating todoist task: {e}", adapter="todoist") from e

        if response.status_code not in (200, 201):
            raise AdapterError(
                f"Todoist API error: {response.text}",
                adapter="todoist",
                status_code=response.status_code,
            )

        logger.debug("Created Todoist task: %s", task.title)

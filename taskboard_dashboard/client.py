"""
HTTP client for the task service procedures.

Each method issues one ``POST /rpc/<procedure>`` round trip and parses the
JSON response into the shared ``Task`` schema. Failures surface as
``requests.RequestException`` (``HTTPError`` for non-2xx responses).
"""

import requests

from taskboard_api.schemas import Task

_UNSET = object()


class TaskServiceClient:

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30,
                 session=None, rpc_prefix: str = "/rpc"):
        self.base_url = base_url.rstrip("/")
        self.rpc_prefix = rpc_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    def _call(self, procedure: str, payload: dict | None = None):
        response = self.session.post(
            f"{self.base_url}{self.rpc_prefix}/{procedure}",
            json=payload or {},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def get_tasks(self) -> list[Task]:
        return [Task.model_validate(item) for item in self._call("getTasks")]

    def get_task(self, task_id: int) -> Task | None:
        data = self._call("getTask", {"id": task_id})
        return Task.model_validate(data) if data is not None else None

    def create_task(self, title: str, description: str | None = None,
                    is_completed: bool = False) -> Task:
        data = self._call("createTask", {
            "title": title,
            "description": description,
            "is_completed": is_completed,
        })
        return Task.model_validate(data)

    def update_task(self, task_id: int, title=_UNSET, description=_UNSET,
                    is_completed=_UNSET) -> Task | None:
        """Send only the fields that were passed; None for description clears it."""
        payload = {"id": task_id}
        for key, value in (("title", title), ("description", description),
                           ("is_completed", is_completed)):
            if value is not _UNSET:
                payload[key] = value
        data = self._call("updateTask", payload)
        return Task.model_validate(data) if data is not None else None

    def delete_task(self, task_id: int) -> bool:
        return bool(self._call("deleteTask", {"id": task_id}))

"""
Task list state for one dashboard session.

Mirrors the service's task list in memory and reconciles it from each
procedure response: append on create, replace on update or toggle,
filter out on delete. A failed call is logged and leaves the list, the
edit form and the delete confirmation as they were; nothing is retried.
"""

import logging

import param
import requests
from pydantic import ValidationError

from taskboard_api.schemas import Task
from taskboard_dashboard.client import TaskServiceClient

logger = logging.getLogger("taskboard_dashboard")

_SERVICE_ERRORS = (requests.RequestException, ValidationError)


class TaskBoard(param.Parameterized):
    """
    Single source of truth for the tasks shown in one browser session.

    Usage:
        board = TaskBoard(client=TaskServiceClient("http://localhost:8000"))
        board.load()
        board.create("Buy milk")
        board.pending_tasks
    """

    tasks = param.List(default=[], item_type=Task, doc="Tasks as last returned by the service")
    editing = param.ClassSelector(class_=Task, default=None, allow_None=True,
                                  doc="Task currently open in the edit form")
    confirming_delete = param.ClassSelector(class_=Task, default=None, allow_None=True,
                                            doc="Task waiting for the user to confirm its deletion")
    is_loading = param.Boolean(default=False, doc="True while a mutation is in flight")

    def __init__(self, client: TaskServiceClient, **kwargs):
        super().__init__(**kwargs)
        self._client = client

    # --- Derived views ---

    @property
    def pending_tasks(self) -> list[Task]:
        return [task for task in self.tasks if not task.is_completed]

    @property
    def completed_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.is_completed]

    # --- Service calls ---

    def load(self) -> bool:
        """Replace the list with the service's current contents."""
        try:
            self.tasks = self._client.get_tasks()
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to load tasks: {str(e)}")
            return False
        logger.info(f"Loaded {len(self.tasks)} tasks")
        return True

    def create(self, title: str, description: str | None = None,
               is_completed: bool = False) -> Task | None:
        self.is_loading = True
        try:
            task = self._client.create_task(title, description=description,
                                            is_completed=is_completed)
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to create task: {str(e)}")
            return None
        finally:
            self.is_loading = False
        self.tasks = self.tasks + [task]
        return task

    def _apply_update(self, task_id: int, fields: dict) -> Task | None:
        # Service errors propagate to the caller
        self.is_loading = True
        try:
            task = self._client.update_task(task_id, **fields)
        finally:
            self.is_loading = False
        if task is None:
            logger.warning(f"Task {task_id} no longer exists")
            return None
        self.tasks = [task if t.id == task_id else t for t in self.tasks]
        return task

    def update(self, task_id: int, **fields) -> Task | None:
        """Send the given fields and swap in the returned task."""
        try:
            return self._apply_update(task_id, fields)
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to update task {task_id}: {str(e)}")
            return None

    def toggle(self, task: Task) -> Task | None:
        return self.update(task.id, is_completed=not task.is_completed)

    def _apply_delete(self, task_id: int) -> bool:
        self.is_loading = True
        try:
            deleted = self._client.delete_task(task_id)
        finally:
            self.is_loading = False
        if deleted:
            self.tasks = [t for t in self.tasks if t.id != task_id]
        return deleted

    def delete(self, task_id: int) -> bool:
        try:
            return self._apply_delete(task_id)
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to delete task {task_id}: {str(e)}")
            return False

    # --- Edit form ---

    def start_editing(self, task: Task):
        self.editing = task

    def stop_editing(self):
        self.editing = None

    def save_edit(self, title: str, description: str | None, is_completed: bool) -> Task | None:
        """Submit the edit form for the task being edited.

        The form closes once the service has answered, including when the
        task no longer exists. It stays open when the call fails.
        """
        if self.editing is None:
            return None
        task_id = self.editing.id
        try:
            task = self._apply_update(task_id, {
                "title": title, "description": description, "is_completed": is_completed,
            })
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to save task {task_id}: {str(e)}")
            return None
        self.stop_editing()
        return task

    # --- Delete confirmation ---

    def request_delete(self, task: Task):
        self.confirming_delete = task

    def cancel_delete(self):
        self.confirming_delete = None

    def confirm_delete(self) -> bool:
        """Delete the task awaiting confirmation.

        The confirmation closes once the service has answered and stays
        open when the call fails.
        """
        if self.confirming_delete is None:
            return False
        task_id = self.confirming_delete.id
        try:
            deleted = self._apply_delete(task_id)
        except _SERVICE_ERRORS as e:
            logger.error(f"Failed to delete task {task_id}: {str(e)}")
            return False
        self.cancel_delete()
        return deleted

from typing import Dict, List, Optional
from .api import TaskAPI, TaskAPIError
from ..utils.coercion import normalize_completed, parse_timestamp
from ..utils.notifications import Notifier
from ..utils.logger import get_logger

logger = get_logger(__name__)

FILTERS = ("all", "completed", "incomplete")


def normalize_task(task: Dict) -> Dict:
    return {**task, "completed": normalize_completed(task.get("completed"))}


def apply_filter(tasks: List[Dict], current_filter: str) -> List[Dict]:
    """Partition by the active filter, then order newest first.

    ``sorted`` is stable, so tasks sharing a ``createdAt`` keep their order.
    """
    if current_filter == "completed":
        filtered = [task for task in tasks if task["completed"]]
    elif current_filter == "incomplete":
        filtered = [task for task in tasks if not task["completed"]]
    else:
        filtered = list(tasks)

    return sorted(filtered, key=lambda task: parse_timestamp(task.get("createdAt")), reverse=True)


class TaskBoard:
    """In-memory task collection for one UI session.

    Mutations are applied locally only after the server confirms them; the
    collection is never re-fetched after the initial load.
    """

    def __init__(self, api: Optional[TaskAPI] = None, notifier: Optional[Notifier] = None):
        self.api = api or TaskAPI()
        self.notifier = notifier or Notifier()
        self.tasks: List[Dict] = []
        self.current_filter = "all"
        self.filtered_tasks: List[Dict] = []
        self.is_loading = False
        self.is_initial_loading = True

    @property
    def is_ready(self) -> bool:
        return not self.is_initial_loading

    @property
    def task_counts(self) -> Dict[str, int]:
        completed = sum(1 for task in self.tasks if task["completed"])
        return {
            "all": len(self.tasks),
            "completed": completed,
            "incomplete": len(self.tasks) - completed,
        }

    def set_filter(self, current_filter: str):
        if current_filter not in FILTERS:
            raise ValueError(f"Unknown filter: {current_filter}")
        self.current_filter = current_filter
        self._refresh()

    def load_tasks(self):
        try:
            fetched = self.api.get_all_tasks()
            self._set_tasks([normalize_task(task) for task in fetched])
        except TaskAPIError as e:
            logger.error(f"Error loading tasks: {e}")
            self.notifier.error("Failed to load tasks")
        finally:
            self.is_initial_loading = False

    def create_task(self, data: Dict) -> Optional[Dict]:
        self.is_loading = True
        try:
            created = normalize_task(self.api.create_task(data))
            self._set_tasks([created] + self.tasks)
            self.notifier.success("Task created successfully!")
            return created
        except TaskAPIError as e:
            logger.error(f"Error creating task: {e}")
            self.notifier.error("Failed to create task")
            return None
        finally:
            self.is_loading = False

    def update_task(self, task_id: int, data: Dict) -> Optional[Dict]:
        try:
            updated = normalize_task(self.api.update_task(task_id, data))
        except TaskAPIError as e:
            logger.error(f"Error updating task {task_id}: {e}")
            self.notifier.error("Failed to update task")
            return None

        self._set_tasks([updated if task["id"] == task_id else task for task in self.tasks])

        if "completed" in data:
            if normalize_completed(data["completed"]):
                self.notifier.success("Task completed!")
            else:
                self.notifier.success("Task marked as incomplete")
        else:
            self.notifier.success("Task updated successfully!")
        return updated

    def delete_task(self, task_id: int) -> bool:
        try:
            self.api.delete_task(task_id)
        except TaskAPIError as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            self.notifier.error("Failed to delete task")
            return False

        self._set_tasks([task for task in self.tasks if task["id"] != task_id])
        self.notifier.success("Task deleted successfully!")
        return True

    def _set_tasks(self, tasks: List[Dict]):
        self.tasks = tasks
        self._refresh()

    def _refresh(self):
        self.filtered_tasks = apply_filter(self.tasks, self.current_filter)

from sqlalchemy.orm import Session
from typing import List, Optional
from ..db.models.task import Task, utcnow
from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse
from ..core.errors import ValidationError
from ..utils.coercion import normalize_completed, parse_due_date
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _parse_due_date_or_reject(value):
    try:
        return parse_due_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid dueDate: {value!r}")


class TaskService:
    def __init__(self, db: Session):
        self.db = db

    def create_task(self, task_data: TaskCreate) -> Task:
        if not task_data.title or not task_data.description:
            raise ValidationError("Missing title or description")

        due_date = _parse_due_date_or_reject(task_data.due_date)

        try:
            now = utcnow()
            task = Task(
                title=task_data.title,
                description=task_data.description,
                completed=False,
                due_date=due_date,
                created_at=now,
                updated_at=now,
            )

            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)

            logger.info(f"Task created: {task.id} - {task.title}")
            return task

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating task: {e}")
            raise

    def get_tasks(self) -> List[Task]:
        try:
            tasks = self.db.query(Task).order_by(Task.id.asc()).all()
            logger.info(f"Retrieved {len(tasks)} tasks")
            return tasks

        except Exception as e:
            logger.error(f"Error retrieving tasks: {e}")
            raise

    def get_task_by_id(self, task_id: int) -> Optional[Task]:
        try:
            task = self.db.query(Task).filter(Task.id == task_id).first()

            if not task:
                logger.warning(f"Task {task_id} not found")

            return task

        except Exception as e:
            logger.error(f"Error retrieving task {task_id}: {e}")
            raise

    def update_task(self, task_id: int, task_data: TaskUpdate) -> Optional[Task]:
        update_data = task_data.model_dump(exclude_unset=True)

        if "title" in update_data and not update_data["title"]:
            raise ValidationError("Title cannot be empty")
        if "description" in update_data and update_data["description"] is None:
            update_data["description"] = ""
        if "completed" in update_data:
            update_data["completed"] = normalize_completed(update_data["completed"])
        if "due_date" in update_data:
            update_data["due_date"] = _parse_due_date_or_reject(update_data["due_date"])

        try:
            task = self.get_task_by_id(task_id)
            if not task:
                return None

            for field, value in update_data.items():
                setattr(task, field, value)

            task.updated_at = utcnow()
            self.db.commit()
            self.db.refresh(task)

            logger.info(f"Task updated: {task.id} ({', '.join(update_data) or 'no fields'})")
            return task

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating task {task_id}: {e}")
            raise

    def delete_task(self, task_id: int) -> Optional[TaskResponse]:
        """Hard delete. Returns a snapshot of the row as it was before removal."""
        try:
            task = self.get_task_by_id(task_id)
            if not task:
                return None

            snapshot = TaskResponse.model_validate(task)
            self.db.delete(task)
            self.db.commit()

            logger.info(f"Task deleted: {task_id}")
            return snapshot

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting task {task_id}: {e}")
            raise

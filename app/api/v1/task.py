from fastapi import APIRouter, Query, status
from typing import Optional
from ...services.task_service import TaskService
from ...db.base import db_dependency
from ...schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskEnvelope,
    TaskDeleteResponse,
)
from ...core.errors import TaskError, ValidationError, NotFoundError, InternalError
from ...utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix='/api', tags=['tasks'])


def parse_task_id(id_param: Optional[str]) -> int:
    try:
        task_id = int(id_param)
    except (TypeError, ValueError):
        task_id = 0

    if task_id <= 0:
        raise ValidationError("Invalid or missing task ID")

    return task_id


@router.post("/createtasks", status_code=status.HTTP_200_OK, response_model=TaskResponse)
async def create_task(
    task_data: TaskCreate,
    db: db_dependency
):
    try:
        task_service = TaskService(db)
        task = task_service.create_task(task_data)
        return task
    except TaskError:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {e}")
        raise InternalError("Internal Server Error")


@router.get("/fetchdata", response_model=TaskListResponse)
async def get_tasks(db: db_dependency):
    try:
        task_service = TaskService(db)
        tasks = task_service.get_tasks()
    except Exception as e:
        logger.error(f"Error while fetching tasks: {e}")
        raise InternalError(
            "Server error",
            payload={"message": "Server error", "error": str(e) or "Unknown error"},
        )

    if not tasks:
        raise NotFoundError("No records found.", payload={"message": "No records found."})

    return TaskListResponse(data=[TaskResponse.model_validate(task) for task in tasks])


@router.patch("/update", response_model=TaskEnvelope)
async def update_task(
    task_data: TaskUpdate,
    db: db_dependency,
    id_param: Optional[str] = Query(None, alias="id")
):
    task_id = parse_task_id(id_param)
    try:
        task_service = TaskService(db)
        task = task_service.update_task(task_id, task_data)

        if not task:
            raise NotFoundError("Task not found")

        return TaskEnvelope(data=TaskResponse.model_validate(task))
    except TaskError:
        raise
    except Exception as e:
        logger.error(f"Error updating task: {e}")
        raise InternalError("Internal Server Error")


@router.delete("/delete", response_model=TaskDeleteResponse)
async def delete_task(
    db: db_dependency,
    id_param: Optional[str] = Query(None, alias="id")
):
    task_id = parse_task_id(id_param)
    try:
        task_service = TaskService(db)
        deleted = task_service.delete_task(task_id)

        if not deleted:
            raise NotFoundError("Task not found")

        return TaskDeleteResponse(data=deleted)
    except TaskError:
        raise
    except Exception as e:
        logger.error(f"Error deleting task: {e}")
        raise InternalError("Internal Server Error")

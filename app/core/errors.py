from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TaskError(Exception):
    """Base error for the task endpoints.

    Rendered as ``{"error": message}`` unless an explicit payload is given.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload

    def to_payload(self) -> Dict[str, Any]:
        if self.payload is not None:
            return self.payload
        return {"error": self.message}


class ValidationError(TaskError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(TaskError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid {location}: {first.get('msg')}"
    return f"Invalid request body: {first.get('msg')}"


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(TaskError)
    async def task_error_handler(request: Request, exc: TaskError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning(f"Rejected request to {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message},
        )

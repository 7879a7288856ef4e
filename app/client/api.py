import requests
from typing import Any, Dict, List, Optional
from ..core.config import TASKFLOW_API_URL, TASKFLOW_API_TIMEOUT
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TaskAPIError(Exception):
    """Single error type raised by every TaskAPI call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskAPI:
    """Thin HTTP wrapper around the four task endpoints.

    ``session`` may be any object with a requests-style ``request`` method,
    which lets tests pass FastAPI's ``TestClient`` directly.
    """

    def __init__(
        self,
        base_url: str = TASKFLOW_API_URL,
        session: Optional[Any] = None,
        timeout: int = TASKFLOW_API_TIMEOUT
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_all_tasks(self) -> List[Dict]:
        response = self._request("GET", "/api/fetchdata", fallback="Failed to fetch tasks")

        # the list endpoint answers 404 when the table is empty
        if response.status_code == 404 and "message" in self._json(response):
            logger.info("No tasks stored yet")
            return []

        body = self._check(response, fallback="Failed to fetch tasks")
        return body.get("data") or []

    def create_task(self, data: Dict) -> Dict:
        response = self._request("POST", "/api/createtasks", json=data, fallback="Failed to create task")
        return self._check(response, fallback="Failed to create task")

    def update_task(self, task_id: int, data: Dict) -> Dict:
        response = self._request(
            "PATCH",
            "/api/update",
            params={"id": task_id},
            json=data,
            fallback="Failed to update task"
        )
        body = self._check(response, fallback="Failed to update task")
        return self._payload(body, response, fallback="Failed to update task")

    def delete_task(self, task_id: int) -> Dict:
        response = self._request(
            "DELETE",
            "/api/delete",
            params={"id": task_id},
            fallback="Failed to delete task"
        )
        body = self._check(response, fallback="Failed to delete task")
        return self._payload(body, response, fallback="Failed to delete task")

    def _request(self, method: str, path: str, fallback: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TaskAPIError(fallback) from e

    @staticmethod
    def _json(response) -> Dict:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _check(self, response, fallback: str) -> Dict:
        body = self._json(response)

        if not 200 <= response.status_code < 300:
            message = body.get("error") or body.get("message") or fallback
            logger.error(f"Task API error {response.status_code}: {message}")
            raise TaskAPIError(message, status_code=response.status_code)

        if not body:
            raise TaskAPIError(fallback, status_code=response.status_code)

        return body

    @staticmethod
    def _payload(body: Dict, response, fallback: str) -> Dict:
        data = body.get("data")
        if not isinstance(data, dict):
            raise TaskAPIError(fallback, status_code=response.status_code)
        return data

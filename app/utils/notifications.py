from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from .logger import get_logger

logger = get_logger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass
class Toast:
    level: str
    message: str
    created_at: datetime = field(default_factory=datetime.now)


class Notifier:
    """Collects transient user-facing notifications.

    A presentation layer can pass ``on_toast`` to render each notification as
    it arrives; the history stays available on ``toasts`` either way.
    """

    def __init__(self, on_toast: Optional[Callable[[Toast], None]] = None):
        self.on_toast = on_toast
        self.toasts: List[Toast] = []

    def success(self, message: str) -> Toast:
        return self._push(SUCCESS, message)

    def error(self, message: str) -> Toast:
        return self._push(ERROR, message)

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def clear(self):
        self.toasts.clear()

    def _push(self, level: str, message: str) -> Toast:
        toast = Toast(level=level, message=message)
        self.toasts.append(toast)

        if level == ERROR:
            logger.warning(f"Notification ({level}): {message}")
        else:
            logger.info(f"Notification ({level}): {message}")

        if self.on_toast:
            self.on_toast(toast)
        return toast

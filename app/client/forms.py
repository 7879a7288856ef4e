from datetime import datetime, timezone
from typing import Dict, Optional
from ..utils.coercion import normalize_completed, parse_due_date


def _clean(title: str, description: str, due_date: str) -> Optional[Dict]:
    title = (title or "").strip()
    if not title:
        return None

    payload = {"title": title}
    description = (description or "").strip()
    if description:
        payload["description"] = description
    if due_date:
        payload["dueDate"] = due_date
    return payload


def prepare_create(title: str, description: str = "", due_date: str = "") -> Optional[Dict]:
    """Build the create payload from raw form input, or ``None`` when the title is blank."""
    return _clean(title, description, due_date)


def prepare_edit(title: str, description: str = "", due_date: str = "") -> Optional[Dict]:
    return _clean(title, description, due_date)


def toggle_payload(task: Dict) -> Dict:
    return {"completed": not normalize_completed(task.get("completed"))}


def is_overdue(task: Dict, now: Optional[datetime] = None) -> bool:
    if normalize_completed(task.get("completed")) or not task.get("dueDate"):
        return False
    try:
        due = parse_due_date(task["dueDate"])
    except ValueError:
        return False
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    return due < now


def format_due_input(task: Dict) -> str:
    """Due date as ``YYYY-MM-DD`` for a date input; empty when unset."""
    if not task.get("dueDate"):
        return ""
    try:
        return parse_due_date(task["dueDate"]).strftime("%Y-%m-%d")
    except ValueError:
        return ""

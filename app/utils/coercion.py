from datetime import datetime, timezone
from typing import Any, Optional


def normalize_completed(value: Any) -> bool:
    """Collapse any truthy/falsy representation of ``completed`` to a bool.

    ``None``, ``0``, ``""`` and ``False`` become ``False``; every other value,
    including the string ``"false"``, becomes ``True``.
    """
    return bool(value)


def parse_due_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date or datetime string. Empty values clear the due date.

    Aware datetimes are converted to naive UTC to match the stored columns.
    Raises ``ValueError`` for anything that is not ISO-8601.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_timestamp(value: Any) -> datetime:
    # unparseable values sort as oldest
    try:
        return parse_due_date(value) or datetime.min
    except (TypeError, ValueError):
        return datetime.min

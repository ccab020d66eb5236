"""린 문서 정규화 헬퍼 (Lean document normalisation helpers)."""

from datetime import datetime, timezone
from typing import Any

from zacatl.repositories.types import Lean


def coerce_datetime(value: Any) -> datetime:
    """값을 timezone-aware datetime으로 변환합니다.

    Coerce ``value`` to an aware datetime: naive datetimes are taken as UTC,
    numbers as epoch seconds, strings as ISO-8601. Anything else yields now.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return coerce_datetime(datetime.fromisoformat(value))
        except ValueError:
            return datetime.now(timezone.utc)
    return datetime.now(timezone.utc)


def finalize_lean(fields: dict[str, Any], id: Any) -> Lean | None:
    """``id``/타임스탬프를 정규화한 린 문서를 반환 (None if there is no id)."""
    if id is None:
        return None
    lean: Lean = dict(fields)
    lean["id"] = str(id)
    lean["created_at"] = coerce_datetime(lean.get("created_at"))
    lean["updated_at"] = coerce_datetime(lean.get("updated_at"))
    return lean

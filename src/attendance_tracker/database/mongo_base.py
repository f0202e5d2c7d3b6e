from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional

from bson import ObjectId

from ..common.datetime_utils import end_of_day_exclusive, start_of_day


def to_object_id(value: Any) -> Any:
    """Convert a hex id string to ObjectId; leave anything else untouched."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def to_object_ids(values: Iterable[Any]) -> list:
    return [to_object_id(v) for v in values]


def id_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def date_range_clause(start: Optional[date], end: Optional[date]) -> Optional[Dict[str, Any]]:
    """Build a `date` filter; `end` covers the whole day."""
    clause: Dict[str, Any] = {}
    if start is not None:
        clause["$gte"] = start_of_day(start)
    if end is not None:
        clause["$lt"] = end_of_day_exclusive(end)
    return clause or None

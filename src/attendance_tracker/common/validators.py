from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from bson import ObjectId

from ..core.constants import MAX_CONFIDENCE, MAX_SEMESTER, MIN_CONFIDENCE, MIN_SEMESTER
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_object_id(value: Optional[str], field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if not ObjectId.is_valid(value):
        raise ValidationError(f"{field_name} is not a valid identifier")
    return value


def require_choice(value, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip() if value is not None else value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_semester(value) -> int:
    if isinstance(value, bool):
        raise ValidationError("semester must be an integer")
    try:
        semester = int(value)
    except (TypeError, ValueError):
        raise ValidationError("semester must be an integer")
    if semester != value and str(semester) != str(value).strip():
        raise ValidationError("semester must be an integer")
    if not MIN_SEMESTER <= semester <= MAX_SEMESTER:
        raise ValidationError(f"semester must be between {MIN_SEMESTER} and {MAX_SEMESTER}")
    return semester


def require_confidence(value) -> float:
    """Missing confidence falls back to 0."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValidationError("detection_confidence must be a number")
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        raise ValidationError("detection_confidence must be a number")
    if not MIN_CONFIDENCE <= confidence <= MAX_CONFIDENCE:
        raise ValidationError("detection_confidence must be between 0 and 1")
    return confidence


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_CLASS_DURATION_MINUTES
from ..core.enums import Weekday


@dataclass(frozen=True)
class TimetableEntry:
    """Domain entity: one weekly teaching slot.

    `time` is the slot's start as stored ("09:00"). A room and a faculty
    member can each hold only one slot per (day, time).
    """

    entry_id: Optional[str]
    day: Weekday
    time: str
    subject_id: str
    subject_name: str
    faculty_id: str
    faculty_name: str
    division: str
    room: str
    department: str
    semester: int
    duration_minutes: int = DEFAULT_CLASS_DURATION_MINUTES
    is_active: bool = True

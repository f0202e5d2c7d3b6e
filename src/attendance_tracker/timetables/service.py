from __future__ import annotations

from typing import Optional

from ..common.validators import require_choice, require_object_id, require_semester
from ..core.enums import Department, Division, Role, Weekday
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .model import TimetableEntry
from .repository import TimetableRepository

DAY_ORDER = {day: i for i, day in enumerate(Weekday)}


class TimetableService:
    """Use case: read the weekly timetable as seen by the caller."""

    def __init__(self, timetables: TimetableRepository, users: UserRepository):
        self._timetables = timetables
        self._users = users

    def list_for_caller(
        self,
        *,
        caller_role,
        caller_id: str,
        day: Optional[str] = None,
        faculty_id: Optional[str] = None,
        department: Optional[str] = None,
        division: Optional[str] = None,
        semester=None,
    ) -> list[TimetableEntry]:
        """Students see their own cohort, faculty their own slots, admins filter freely."""
        role = require_choice(caller_role, Role, "role")
        day_v = require_choice(day, Weekday, "day") if day else None

        if role == Role.STUDENT:
            student = self._users.get_by_id(caller_id)
            if not student or not student.is_student:
                raise NotFoundError("Student not found")
            if not (student.department and student.division and student.semester):
                return []
            filters = dict(
                department=student.department,
                division=student.division,
                semester=student.semester,
            )
        elif role == Role.FACULTY:
            filters = dict(faculty_id=str(caller_id))
        else:
            filters = dict(
                faculty_id=require_object_id(faculty_id, "faculty_id") if faculty_id else None,
                department=require_choice(department, Department, "department").value if department else None,
                division=require_choice(division, Division, "division").value if division else None,
                semester=require_semester(semester) if semester not in (None, "") else None,
            )

        entries = self._timetables.find(day=day_v, **filters)
        return sorted(entries, key=lambda e: (DAY_ORDER[e.day], e.time))

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller roles used for permission checks."""

    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Per-student outcome for one session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Division(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class Department(str, Enum):
    CSE = "CSE"
    ME = "ME"
    CE = "CE"
    EE = "EE"
    ECE = "ECE"


class StandingStatus(str, Enum):
    """Attendance standing derived from the attended percentage."""

    EXCELLENT = "excellent"
    GOOD = "good"
    BAD = "bad"


class Weekday(str, Enum):
    """Teaching days a timetable slot can fall on."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

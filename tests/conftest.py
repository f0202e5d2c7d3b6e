from __future__ import annotations

from datetime import datetime, timezone
from itertools import count

import pytest

from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.sessions.service import SessionService
from attendance_tracker.statistics.service import AttendanceStatisticsService
from attendance_tracker.timetables.service import TimetableService

from fakes import (
    InMemoryAttendance,
    InMemorySessions,
    InMemorySubjects,
    InMemoryTimetables,
    InMemoryUsers,
    make_subjects,
    make_timetable,
    make_users,
)


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def users_repo():
    return InMemoryUsers(make_users())


@pytest.fixture
def subjects_repo():
    return InMemorySubjects(make_subjects())


@pytest.fixture
def sessions_repo():
    return InMemorySessions()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def session_service(sessions_repo, attendance_repo, users_repo, subjects_repo):
    seq = count(1)
    return SessionService(
        sessions_repo,
        attendance_repo,
        users_repo,
        subjects_repo,
        id_factory=lambda now, faculty_id, subject_id: f"s-{next(seq)}",
    )


@pytest.fixture
def attendance_service(attendance_repo, sessions_repo, users_repo, subjects_repo):
    return AttendanceService(
        attendance_repo,
        sessions_repo,
        users_repo,
        subjects_repo,
        statistics=AttendanceStatisticsService(),
    )


@pytest.fixture
def timetables_repo():
    return InMemoryTimetables(make_timetable())


@pytest.fixture
def timetable_service(timetables_repo, users_repo):
    return TimetableService(timetables_repo, users_repo)

from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_choice, require_non_empty, require_object_id, require_positive_int, require_semester
from ..core.constants import DEFAULT_SESSION_LIMIT
from ..core.enums import AttendanceStatus, Department, Division, SessionStatus
from ..core.exceptions import NotFoundError
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .model import AttendanceSession, SessionSummary
from .repository import SessionRepository

logger = logging.getLogger(__name__)

SessionIdFactory = Callable[[datetime, str, str], str]


def generate_session_id(now: datetime, faculty_id: str, subject_id: str) -> str:
    """Timestamp + faculty + subject, plus a random suffix.

    Two opens in the same millisecond still get distinct ids; the unique
    index on `session_id` is what actually guarantees it.
    """
    return f"{int(now.timestamp() * 1000)}_{faculty_id}_{subject_id}_{secrets.token_hex(4)}"


class SessionService:
    """Use cases: open, close and list attendance sessions."""

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        subjects: SubjectRepository,
        *,
        id_factory: Optional[SessionIdFactory] = None,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._users = users
        self._subjects = subjects
        self._id_factory = id_factory or generate_session_id

    def open_session(
        self,
        *,
        subject_id: str,
        faculty_id: str,
        division: str,
        department: str,
        semester,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        subject_id = require_object_id(subject_id, "subject_id")
        faculty_id = require_non_empty(faculty_id, "faculty_id")
        division_v = require_choice(division, Division, "division")
        department_v = require_choice(department, Department, "department")
        semester_v = require_semester(semester)
        now = now or now_utc()

        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise NotFoundError("Subject not found")

        faculty = self._users.get_by_id(faculty_id)
        if not faculty:
            raise NotFoundError("Faculty not found")

        total_students = self._users.count_active_students(
            department=department_v.value,
            division=division_v.value,
            semester=semester_v,
        )

        session = AttendanceSession(
            session_id=self._id_factory(now, faculty_id, subject_id),
            subject_id=subject_id,
            subject_name=subject.name,
            faculty_id=faculty_id,
            faculty_name=faculty.username,
            division=division_v.value,
            department=department_v.value,
            semester=semester_v,
            date=now,
            start_time=now,
            total_students=total_students,
            status=SessionStatus.ACTIVE,
            created_at=now,
        )
        self._sessions.create(session)

        logger.info(
            "Opened session %s (subject=%s faculty=%s %s/%s/%s, %d students)",
            session.session_id,
            subject_id,
            faculty_id,
            session.department,
            session.division,
            session.semester,
            total_students,
        )
        return session

    def close_session(self, *, session_id: str, faculty_id: str, now: Optional[datetime] = None) -> AttendanceSession:
        session_id = require_non_empty(session_id, "session_id")
        now = now or now_utc()

        session = self._sessions.find_active(session_id=session_id, faculty_id=faculty_id)
        if not session:
            raise NotFoundError("Active session not found")

        present = self._attendance.count_for_session(session_id=session_id, status=AttendanceStatus.PRESENT)
        # Late marks are not present, so they fall into the absent count.
        absent = session.total_students - present

        closed = self._sessions.complete(
            session_id=session_id,
            faculty_id=faculty_id,
            end_time=now,
            present_students=present,
            absent_students=absent,
        )
        if not closed:
            # Someone else closed it between the lookup and the update.
            raise NotFoundError("Active session not found")

        logger.info("Closed session %s (present=%d absent=%d)", session_id, present, absent)
        return closed

    def list_sessions(
        self,
        *,
        faculty_id: str,
        status: Optional[str] = None,
        limit=DEFAULT_SESSION_LIMIT,
    ) -> list[SessionSummary]:
        status_v = require_choice(status, SessionStatus, "status") if status else None
        limit_v = require_positive_int(limit, "limit")

        sessions = self._sessions.list_for_faculty(faculty_id=faculty_id, status=status_v, limit=limit_v)
        subjects = self._subjects.get_many(s.subject_id for s in sessions)

        out: list[SessionSummary] = []
        for s in sessions:
            subject = subjects.get(s.subject_id)
            out.append(
                SessionSummary(
                    session=s,
                    subject_code=subject.code if subject else None,
                    subject_name=subject.name if subject else s.subject_name,
                )
            )
        return out

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import now_utc
from ..common.validators import (
    require_choice,
    require_confidence,
    require_non_empty,
    require_object_id,
    require_semester,
)
from ..core.enums import AttendanceStatus, Department, Division, Role
from ..core.exceptions import InvalidSessionError, InvalidStudentError, ValidationError
from ..core.permissions import require_access, scope_faculty
from ..sessions.repository import SessionRepository
from ..statistics.service import AttendanceStatisticsService
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .model import AttendanceRecord, AttendanceRecordView, ReportFilters, StudentHistory
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        users: UserRepository,
        subjects: SubjectRepository,
        *,
        statistics: Optional[AttendanceStatisticsService] = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._users = users
        self._subjects = subjects
        self._statistics = statistics or AttendanceStatisticsService()

    def mark(
        self,
        *,
        session_id: str,
        student_id: str,
        faculty_id: str,
        status: str,
        detection_confidence=None,
        remarks: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[AttendanceRecord, bool]:
        """Record one student's outcome for an active session.

        A second mark for the same (student, session) updates status,
        confidence and remarks in place. Returns (record, created).
        """
        session_id = require_non_empty(session_id, "session_id")
        student_id = require_object_id(student_id, "student_id")
        status_v = require_choice(status, AttendanceStatus, "status")
        confidence = require_confidence(detection_confidence)
        now = now or now_utc()

        session = self._sessions.find_active(session_id=session_id, faculty_id=faculty_id)
        if not session:
            raise InvalidSessionError("Invalid or inactive session")

        student = self._users.get_by_id(student_id)
        if not student or not student.is_student:
            raise InvalidStudentError("Student not found")

        faculty = self._users.get_by_id(faculty_id)

        candidate = AttendanceRecord(
            record_id=None,
            student_id=student_id,
            session_id=session_id,
            status=status_v,
            student_name=student.username,
            enrollment_number=student.enrollment_number,
            subject_id=session.subject_id,
            subject_name=session.subject_name,
            faculty_id=faculty_id,
            faculty_name=faculty.username if faculty else session.faculty_name,
            date=session.date,
            division=session.division,
            department=session.department,
            semester=session.semester,
            detection_confidence=confidence,
            remarks=str(remarks) if remarks else "",
            created_at=now,
            updated_at=now,
        )
        record, created = self._attendance.upsert(candidate)

        if created:
            logger.info("Marked student %s %s in session %s", student_id, status_v.value, session_id)
        else:
            logger.debug("Updated student %s to %s in session %s", student_id, status_v.value, session_id)
        return record, created

    def query_by_student(
        self,
        *,
        student_id: str,
        caller_role,
        caller_id: str,
        subject_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> StudentHistory:
        student_id = require_object_id(student_id, "student_id")
        role = require_choice(caller_role, Role, "role")
        require_access(role, caller_id, student_id)
        if subject_id:
            subject_id = require_object_id(subject_id, "subject_id")
        self._check_range(start_date, end_date)

        records = self._attendance.find(
            student_id=student_id,
            subject_id=subject_id,
            start_date=start_date,
            end_date=end_date,
        )
        records = sorted(records, key=lambda r: r.date, reverse=True)

        subjects = self._subjects.get_many(r.subject_id for r in records)
        faculty = self._users.get_many(r.faculty_id for r in records)

        views = []
        for r in records:
            subject = subjects.get(r.subject_id)
            fac = faculty.get(r.faculty_id)
            views.append(
                AttendanceRecordView(
                    record=r,
                    subject={"name": subject.name, "code": subject.code, "credits": subject.credits} if subject else None,
                    faculty={"username": fac.username} if fac else None,
                )
            )

        return StudentHistory(records=views, statistics=self._statistics.compute_per_subject_stats(records))

    def query_report(self, *, filters: ReportFilters, caller_role, caller_id: str) -> list[AttendanceRecordView]:
        role = require_choice(caller_role, Role, "role")
        faculty_id = scope_faculty(role, caller_id, filters.faculty_id)
        if faculty_id:
            faculty_id = require_object_id(faculty_id, "faculty_id")

        subject_id = require_object_id(filters.subject_id, "subject_id") if filters.subject_id else None
        division = require_choice(filters.division, Division, "division").value if filters.division else None
        department = require_choice(filters.department, Department, "department").value if filters.department else None
        semester = require_semester(filters.semester) if filters.semester not in (None, "") else None
        self._check_range(filters.start_date, filters.end_date)

        records = self._attendance.find(
            subject_id=subject_id,
            division=division,
            department=department,
            semester=semester,
            faculty_id=faculty_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )
        # Stable sorts: name A-Z first, then newest date first on top of it.
        records = sorted(records, key=lambda r: r.student_name)
        records = sorted(records, key=lambda r: r.date, reverse=True)

        students = self._users.get_many(r.student_id for r in records)
        subjects = self._subjects.get_many(r.subject_id for r in records)
        faculty = self._users.get_many(r.faculty_id for r in records)

        views = []
        for r in records:
            student = students.get(r.student_id)
            subject = subjects.get(r.subject_id)
            fac = faculty.get(r.faculty_id)
            views.append(
                AttendanceRecordView(
                    record=r,
                    student=(
                        {"username": student.username, "enrollment_number": student.enrollment_number}
                        if student
                        else None
                    ),
                    subject={"name": subject.name, "code": subject.code} if subject else None,
                    faculty={"username": fac.username} if fac else None,
                )
            )
        return views

    @staticmethod
    def _check_range(start: Optional[date], end: Optional[date]) -> None:
        if start and end and end < start:
            raise ValidationError("end_date must be on or after start_date")

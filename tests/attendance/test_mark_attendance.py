from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import InvalidSessionError, InvalidStudentError, ValidationError

from fakes import (
    FACULTY_ID,
    MISSING_ID,
    OTHER_FACULTY_ID,
    STUDENT_ID,
    SUBJECT_ID,
)


@pytest.fixture
def session(session_service, fixed_now):
    return session_service.open_session(
        subject_id=SUBJECT_ID,
        faculty_id=FACULTY_ID,
        division="A",
        department="CSE",
        semester=5,
        now=fixed_now,
    )


def test_first_mark_creates_denormalized_record(attendance_service, session, fixed_now):
    record, created = attendance_service.mark(
        session_id=session.session_id,
        student_id=STUDENT_ID,
        faculty_id=FACULTY_ID,
        status="present",
        detection_confidence=0.87,
        remarks="front row",
        now=fixed_now,
    )

    assert created is True
    assert record.record_id is not None
    assert record.status == AttendanceStatus.PRESENT
    assert record.student_name == "asha"
    assert record.enrollment_number == "CSE2021001"
    assert record.subject_name == "Database Systems"
    assert record.faculty_name == "prof.sharma"
    assert (record.department, record.division, record.semester) == ("CSE", "A", 5)
    assert record.date == session.date
    assert record.detection_confidence == 0.87
    assert record.remarks == "front row"


def test_repeated_marks_keep_one_record_equal_to_last_call(attendance_service, attendance_repo, session, fixed_now):
    first, _ = attendance_service.mark(
        session_id=session.session_id,
        student_id=STUDENT_ID,
        faculty_id=FACULTY_ID,
        status="present",
        detection_confidence=0.9,
        remarks="on time",
        now=fixed_now,
    )
    record, created = attendance_service.mark(
        session_id=session.session_id,
        student_id=STUDENT_ID,
        faculty_id=FACULTY_ID,
        status="late",
        now=fixed_now + timedelta(minutes=3),
    )

    assert created is False
    assert len(attendance_repo.records) == 1
    assert record.record_id == first.record_id
    assert record.status == AttendanceStatus.LATE
    # Omitted confidence and remarks reset to their defaults on update.
    assert record.detection_confidence == 0.0
    assert record.remarks == ""
    assert record.updated_at == fixed_now + timedelta(minutes=3)
    assert attendance_repo.records[0] == record


def test_mark_against_closed_session_is_rejected(attendance_service, session_service, session, fixed_now):
    session_service.close_session(session_id=session.session_id, faculty_id=FACULTY_ID, now=fixed_now)

    with pytest.raises(InvalidSessionError, match="Invalid or inactive session"):
        attendance_service.mark(
            session_id=session.session_id, student_id=STUDENT_ID, faculty_id=FACULTY_ID, status="present"
        )


def test_mark_against_other_faculty_session_is_rejected(attendance_service, attendance_repo, session):
    with pytest.raises(InvalidSessionError):
        attendance_service.mark(
            session_id=session.session_id, student_id=STUDENT_ID, faculty_id=OTHER_FACULTY_ID, status="present"
        )
    assert attendance_repo.records == []


def test_mark_unknown_session_is_rejected(attendance_service):
    with pytest.raises(InvalidSessionError):
        attendance_service.mark(session_id="nope", student_id=STUDENT_ID, faculty_id=FACULTY_ID, status="present")


@pytest.mark.parametrize("student_id", [MISSING_ID, FACULTY_ID])
def test_mark_requires_a_student_account(attendance_service, session, student_id):
    with pytest.raises(InvalidStudentError, match="Student not found"):
        attendance_service.mark(
            session_id=session.session_id, student_id=student_id, faculty_id=FACULTY_ID, status="present"
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": "excused"},
        {"status": None},
        {"detection_confidence": 1.5},
        {"detection_confidence": -0.1},
        {"detection_confidence": "high"},
        {"detection_confidence": True},
        {"student_id": "123"},
    ],
)
def test_mark_rejects_bad_input(attendance_service, session, kwargs):
    call = dict(session_id=session.session_id, student_id=STUDENT_ID, faculty_id=FACULTY_ID, status="present")
    call.update(kwargs)
    with pytest.raises(ValidationError):
        attendance_service.mark(**call)


def test_concurrent_marks_never_duplicate(attendance_service, attendance_repo, session):
    """Service hands every mark to one repository upsert; no read-then-insert of its own.

    The store-side guarantee (unique index + DuplicateKeyError retry) is covered
    in tests/database/test_mongo_repositories.py.
    """
    statuses = ["present", "late", "absent"] * 10

    def mark(status):
        return attendance_service.mark(
            session_id=session.session_id, student_id=STUDENT_ID, faculty_id=FACULTY_ID, status=status
        )

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(mark, statuses))

    assert len(attendance_repo.records) == 1
    assert sum(1 for _, created in results if created) == 1
    assert len({record.record_id for record, _ in results}) == 1

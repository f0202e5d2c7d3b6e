from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from attendance_tracker.attendance.model import ReportFilters
from attendance_tracker.core.enums import AttendanceStatus, Role, StandingStatus
from attendance_tracker.core.exceptions import AccessDeniedError, ValidationError

from fakes import (
    ADMIN_ID,
    FACULTY_ID,
    OTHER_FACULTY_ID,
    OTHER_STUDENT_ID,
    OTHER_SUBJECT_ID,
    STUDENT_ID,
    SUBJECT_ID,
    make_record,
)

DAY1 = datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)
DAY2 = datetime(2026, 2, 3, 9, 0, tzinfo=timezone.utc)
DAY3_EVENING = datetime(2026, 2, 4, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def seeded(attendance_repo):
    attendance_repo.add(make_record(session_id="s-1", when=DAY1, status=AttendanceStatus.PRESENT))
    attendance_repo.add(make_record(session_id="s-2", when=DAY2, status=AttendanceStatus.LATE))
    attendance_repo.add(
        make_record(
            session_id="s-3",
            when=DAY3_EVENING,
            status=AttendanceStatus.ABSENT,
            subject_id=OTHER_SUBJECT_ID,
            subject_name="Operating Systems",
            faculty_id=OTHER_FACULTY_ID,
        )
    )
    attendance_repo.add(
        make_record(session_id="s-1", when=DAY1, student_id=OTHER_STUDENT_ID, student_name="ravi")
    )
    attendance_repo.add(
        make_record(session_id="s-2", when=DAY2, student_id=OTHER_STUDENT_ID, student_name="ravi")
    )
    return attendance_repo


def test_student_reads_own_history_newest_first(attendance_service, seeded):
    history = attendance_service.query_by_student(student_id=STUDENT_ID, caller_role=Role.STUDENT, caller_id=STUDENT_ID)

    assert [v.record.session_id for v in history.records] == ["s-3", "s-2", "s-1"]
    assert history.records[0].subject == {"name": "Operating Systems", "code": "CS502", "credits": 3}
    assert history.records[0].faculty == {"username": "prof.iyer"}


def test_student_history_statistics_per_subject(attendance_service, seeded):
    history = attendance_service.query_by_student(student_id=STUDENT_ID, caller_role="student", caller_id=STUDENT_ID)

    stats = {s.subject_id: s for s in history.statistics}
    db = stats[SUBJECT_ID]
    assert (db.total, db.present, db.late, db.absent) == (2, 1, 1, 0)
    assert db.percentage == 100.0
    assert db.status == StandingStatus.EXCELLENT

    os_ = stats[OTHER_SUBJECT_ID]
    assert (os_.total, os_.absent, os_.percentage) == (1, 1, 0.0)
    assert os_.status == StandingStatus.BAD


def test_student_cannot_read_another_students_history(attendance_service, seeded):
    with pytest.raises(AccessDeniedError):
        attendance_service.query_by_student(
            student_id=OTHER_STUDENT_ID, caller_role=Role.STUDENT, caller_id=STUDENT_ID
        )


@pytest.mark.parametrize("role,caller", [(Role.FACULTY, FACULTY_ID), (Role.ADMIN, ADMIN_ID)])
def test_staff_can_read_any_student_history(attendance_service, seeded, role, caller):
    history = attendance_service.query_by_student(student_id=OTHER_STUDENT_ID, caller_role=role, caller_id=caller)
    assert len(history.records) == 2


def test_student_history_subject_and_date_filters(attendance_service, seeded):
    history = attendance_service.query_by_student(
        student_id=STUDENT_ID,
        caller_role=Role.STUDENT,
        caller_id=STUDENT_ID,
        subject_id=SUBJECT_ID,
        start_date=date(2026, 2, 3),
    )
    assert [v.record.session_id for v in history.records] == ["s-2"]


def test_end_date_includes_the_whole_day(attendance_service, seeded):
    history = attendance_service.query_by_student(
        student_id=STUDENT_ID,
        caller_role=Role.STUDENT,
        caller_id=STUDENT_ID,
        start_date=date(2026, 2, 4),
        end_date=date(2026, 2, 4),
    )
    assert [v.record.session_id for v in history.records] == ["s-3"]


def test_inverted_date_range_is_rejected(attendance_service, seeded):
    with pytest.raises(ValidationError):
        attendance_service.query_by_student(
            student_id=STUDENT_ID,
            caller_role=Role.STUDENT,
            caller_id=STUDENT_ID,
            start_date=date(2026, 2, 4),
            end_date=date(2026, 2, 1),
        )


def test_report_orders_by_date_desc_then_name(attendance_service, seeded):
    views = attendance_service.query_report(filters=ReportFilters(), caller_role=Role.ADMIN, caller_id=ADMIN_ID)

    assert [(v.record.session_id, v.record.student_name) for v in views] == [
        ("s-3", "asha"),
        ("s-2", "asha"),
        ("s-2", "ravi"),
        ("s-1", "asha"),
        ("s-1", "ravi"),
    ]


def test_report_populates_display_data(attendance_service, seeded):
    views = attendance_service.query_report(
        filters=ReportFilters(subject_id=SUBJECT_ID), caller_role=Role.ADMIN, caller_id=ADMIN_ID
    )

    ravi = [v for v in views if v.record.student_id == OTHER_STUDENT_ID][0]
    assert ravi.student == {"username": "ravi", "enrollment_number": "CSE2021002"}
    assert ravi.subject == {"name": "Database Systems", "code": "CS501"}
    assert ravi.faculty == {"username": "prof.sharma"}


def test_faculty_report_is_pinned_to_own_sessions(attendance_service, seeded):
    views = attendance_service.query_report(
        filters=ReportFilters(faculty_id=OTHER_FACULTY_ID),
        caller_role=Role.FACULTY,
        caller_id=FACULTY_ID,
    )

    assert views
    assert {v.record.faculty_id for v in views} == {FACULTY_ID}


def test_admin_report_honours_requested_faculty(attendance_service, seeded):
    views = attendance_service.query_report(
        filters=ReportFilters(faculty_id=OTHER_FACULTY_ID),
        caller_role=Role.ADMIN,
        caller_id=ADMIN_ID,
    )
    assert [v.record.session_id for v in views] == ["s-3"]


def test_report_cohort_filters(attendance_service, attendance_repo, seeded):
    attendance_repo.add(make_record(session_id="s-9", division="B", semester=3, department="ME"))

    views = attendance_service.query_report(
        filters=ReportFilters(division="B", department="ME", semester="3"),
        caller_role=Role.ADMIN,
        caller_id=ADMIN_ID,
    )
    assert [v.record.session_id for v in views] == ["s-9"]


def test_student_cannot_run_report(attendance_service, seeded):
    with pytest.raises(AccessDeniedError):
        attendance_service.query_report(filters=ReportFilters(), caller_role=Role.STUDENT, caller_id=STUDENT_ID)


@pytest.mark.parametrize(
    "filters",
    [
        ReportFilters(division="Z"),
        ReportFilters(semester=12),
        ReportFilters(subject_id="cs501"),
        ReportFilters(faculty_id="not-an-id"),
    ],
)
def test_report_rejects_bad_filters(attendance_service, filters):
    with pytest.raises(ValidationError):
        attendance_service.query_report(filters=filters, caller_role=Role.ADMIN, caller_id=ADMIN_ID)

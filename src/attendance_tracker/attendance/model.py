from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's outcome for one session.

    Subject/faculty/student names and the scheduling descriptors are copied
    from the session at creation so reports need no joins.
    """

    record_id: Optional[str]
    student_id: str
    session_id: str
    status: AttendanceStatus
    student_name: str
    subject_id: str
    subject_name: str
    faculty_id: str
    faculty_name: str
    date: datetime
    division: str
    department: str
    semester: int
    enrollment_number: Optional[str] = None
    detection_confidence: float = 0.0
    remarks: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceRecordView:
    """Read-model: a record with populated student/subject/faculty display data."""

    record: AttendanceRecord
    student: Optional[Dict[str, Any]] = None
    subject: Optional[Dict[str, Any]] = None
    faculty: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ReportFilters:
    subject_id: Optional[str] = None
    division: Optional[str] = None
    department: Optional[str] = None
    semester: Optional[int] = None
    faculty_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class StudentHistory:
    records: list = field(default_factory=list)
    statistics: list = field(default_factory=list)

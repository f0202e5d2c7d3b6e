from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SessionStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one attendance-taking window.

    `present_students` / `absent_students` are only meaningful once the
    session is COMPLETED.
    """

    session_id: str
    subject_id: str
    subject_name: str
    faculty_id: str
    faculty_name: str
    division: str
    department: str
    semester: int
    date: datetime
    start_time: datetime
    total_students: int
    status: SessionStatus = SessionStatus.ACTIVE
    end_time: Optional[datetime] = None
    present_students: int = 0
    absent_students: int = 0
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE


@dataclass(frozen=True)
class SessionSummary:
    """Read-model for session listings (session + populated subject)."""

    session: AttendanceSession
    subject_code: Optional[str] = None
    subject_name: Optional[str] = None

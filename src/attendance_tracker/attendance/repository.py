from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(self, record: AttendanceRecord) -> Tuple[AttendanceRecord, bool]:
        """Create-or-update keyed by (student_id, session_id).

        On update only status, detection_confidence and remarks change.
        Returns the stored record and whether it was newly created.
        """

        raise NotImplementedError

    def count_for_session(self, *, session_id: str, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def find(
        self,
        *,
        student_id: Optional[str] = None,
        subject_id: Optional[str] = None,
        division: Optional[str] = None,
        department: Optional[str] = None,
        semester: Optional[int] = None,
        faculty_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Matching records, newest date first, then student name A-Z."""

        raise NotImplementedError

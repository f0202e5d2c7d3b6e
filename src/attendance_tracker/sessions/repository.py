from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import AttendanceSession


class SessionRepository(Protocol):
    def create(self, session: AttendanceSession) -> None:
        """Persist a new session; raises ConflictError if `session_id` is taken."""

        raise NotImplementedError

    def find_active(self, *, session_id: str, faculty_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def complete(
        self,
        *,
        session_id: str,
        faculty_id: str,
        end_time: datetime,
        present_students: int,
        absent_students: int,
    ) -> Optional[AttendanceSession]:
        """Atomically flip an ACTIVE session to COMPLETED.

        Returns None when no active session matched (already closed or not owned).
        """

        raise NotImplementedError

    def list_for_faculty(
        self,
        *,
        faculty_id: str,
        status: Optional[SessionStatus] = None,
        limit: int = 10,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

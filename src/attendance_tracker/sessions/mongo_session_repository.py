from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.constants import SESSIONS_COLLECTION
from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id
from .model import AttendanceSession
from .repository import SessionRepository


def _to_session(doc: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=doc["session_id"],
        subject_id=id_str(doc["subject_id"]),
        subject_name=doc.get("subject_name", ""),
        faculty_id=id_str(doc["faculty_id"]),
        faculty_name=doc.get("faculty_name", ""),
        division=doc["division"],
        department=doc["department"],
        semester=int(doc["semester"]),
        date=doc["date"],
        start_time=doc["start_time"],
        end_time=doc.get("end_time"),
        total_students=int(doc.get("total_students", 0)),
        present_students=int(doc.get("present_students", 0)),
        absent_students=int(doc.get("absent_students", 0)),
        status=SessionStatus(doc["status"]),
        created_at=doc.get("created_at"),
    )


class MongoSessionRepository(SessionRepository):
    def __init__(self, conn: DatabaseConnection):
        self._sessions = conn.collection(SESSIONS_COLLECTION)

    def create(self, session: AttendanceSession) -> None:
        doc = {
            "session_id": session.session_id,
            "subject_id": to_object_id(session.subject_id),
            "subject_name": session.subject_name,
            "faculty_id": to_object_id(session.faculty_id),
            "faculty_name": session.faculty_name,
            "division": session.division,
            "department": session.department,
            "semester": int(session.semester),
            "date": session.date,
            "start_time": session.start_time,
            "end_time": session.end_time,
            "total_students": int(session.total_students),
            "present_students": int(session.present_students),
            "absent_students": int(session.absent_students),
            "status": session.status.value,
            "created_at": session.created_at or session.start_time,
            "updated_at": session.created_at or session.start_time,
        }
        try:
            self._sessions.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(f"Session id {session.session_id} already exists, retry the request")

    def find_active(self, *, session_id: str, faculty_id: str) -> Optional[AttendanceSession]:
        doc = self._sessions.find_one(
            {
                "session_id": session_id,
                "faculty_id": to_object_id(faculty_id),
                "status": SessionStatus.ACTIVE.value,
            }
        )
        return _to_session(doc) if doc else None

    def complete(
        self,
        *,
        session_id: str,
        faculty_id: str,
        end_time: datetime,
        present_students: int,
        absent_students: int,
    ) -> Optional[AttendanceSession]:
        doc = self._sessions.find_one_and_update(
            {
                "session_id": session_id,
                "faculty_id": to_object_id(faculty_id),
                "status": SessionStatus.ACTIVE.value,
            },
            {
                "$set": {
                    "end_time": end_time,
                    "present_students": int(present_students),
                    "absent_students": int(absent_students),
                    "status": SessionStatus.COMPLETED.value,
                    "updated_at": end_time,
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        return _to_session(doc) if doc else None

    def list_for_faculty(
        self,
        *,
        faculty_id: str,
        status: Optional[SessionStatus] = None,
        limit: int = 10,
    ) -> Sequence[AttendanceSession]:
        query: Dict[str, Any] = {"faculty_id": to_object_id(faculty_id)}
        if status is not None:
            query["status"] = status.value

        cursor = self._sessions.find(query).sort("created_at", DESCENDING).limit(int(limit))
        return [_to_session(d) for d in cursor]

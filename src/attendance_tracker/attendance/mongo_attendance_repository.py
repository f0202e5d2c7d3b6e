from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from ..common.datetime_utils import now_utc
from ..core.constants import ATTENDANCE_COLLECTION
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import date_range_clause, id_str, to_object_id
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# A racing upsert on the unique (student_id, session_id) index loses with
# DuplicateKeyError; the second attempt then matches the winner's document.
UPSERT_ATTEMPTS = 2


def _to_record(doc: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=id_str(doc.get("_id")),
        student_id=id_str(doc["student_id"]),
        session_id=doc["session_id"],
        status=AttendanceStatus(doc["status"]),
        student_name=doc.get("student_name", ""),
        enrollment_number=doc.get("enrollment_number"),
        subject_id=id_str(doc["subject_id"]),
        subject_name=doc.get("subject_name", ""),
        faculty_id=id_str(doc["faculty_id"]),
        faculty_name=doc.get("faculty_name", ""),
        date=doc["date"],
        division=doc["division"],
        department=doc["department"],
        semester=int(doc["semester"]),
        detection_confidence=float(doc.get("detection_confidence") or 0.0),
        remarks=doc.get("remarks") or "",
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: DatabaseConnection):
        self._records = conn.collection(ATTENDANCE_COLLECTION)

    def upsert(self, record: AttendanceRecord) -> Tuple[AttendanceRecord, bool]:
        now = record.updated_at or now_utc()
        key = {"student_id": to_object_id(record.student_id), "session_id": record.session_id}
        update = {
            "$set": {
                "status": record.status.value,
                "detection_confidence": float(record.detection_confidence),
                "remarks": record.remarks,
                "updated_at": now,
            },
            "$setOnInsert": {
                "student_name": record.student_name,
                "enrollment_number": record.enrollment_number,
                "subject_id": to_object_id(record.subject_id),
                "subject_name": record.subject_name,
                "faculty_id": to_object_id(record.faculty_id),
                "faculty_name": record.faculty_name,
                "date": record.date,
                "division": record.division,
                "department": record.department,
                "semester": int(record.semester),
                "created_at": record.created_at or now,
            },
        }

        result = None
        for attempt in range(1, UPSERT_ATTEMPTS + 1):
            try:
                result = self._records.update_one(key, update, upsert=True)
                break
            except DuplicateKeyError:
                if attempt == UPSERT_ATTEMPTS:
                    raise ConflictError("Attendance is being marked concurrently, retry the request")
                logger.debug(
                    "Concurrent upsert for student=%s session=%s, retrying as update",
                    record.student_id,
                    record.session_id,
                )

        created = result.upserted_id is not None
        doc = self._records.find_one(key)
        return _to_record(doc), created

    def count_for_session(self, *, session_id: str, status: AttendanceStatus) -> int:
        return int(self._records.count_documents({"session_id": session_id, "status": status.value}))

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
        query: Dict[str, Any] = {}
        if student_id:
            query["student_id"] = to_object_id(student_id)
        if subject_id:
            query["subject_id"] = to_object_id(subject_id)
        if division:
            query["division"] = division
        if department:
            query["department"] = department
        if semester is not None:
            query["semester"] = int(semester)
        if faculty_id:
            query["faculty_id"] = to_object_id(faculty_id)

        dates = date_range_clause(start_date, end_date)
        if dates:
            query["date"] = dates

        cursor = self._records.find(query).sort([("date", DESCENDING), ("student_name", ASCENDING)])
        return [_to_record(d) for d in cursor]

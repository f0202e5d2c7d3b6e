from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import DEFAULT_CLASS_DURATION_MINUTES, TIMETABLES_COLLECTION
from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id
from .model import TimetableEntry
from .repository import TimetableRepository


def _to_entry(doc: Dict[str, Any]) -> TimetableEntry:
    return TimetableEntry(
        entry_id=id_str(doc.get("_id")),
        day=Weekday(doc["day"]),
        time=doc["time"],
        subject_id=id_str(doc["subject_id"]),
        subject_name=doc.get("subject_name", ""),
        faculty_id=id_str(doc["faculty_id"]),
        faculty_name=doc.get("faculty_name", ""),
        division=doc["division"],
        room=doc["room"],
        department=doc["department"],
        semester=int(doc["semester"]),
        duration_minutes=int(doc.get("duration_minutes") or DEFAULT_CLASS_DURATION_MINUTES),
        is_active=bool(doc.get("is_active", True)),
    )


class MongoTimetableRepository(TimetableRepository):
    def __init__(self, conn: DatabaseConnection):
        self._entries = conn.collection(TIMETABLES_COLLECTION)

    def find(
        self,
        *,
        faculty_id: Optional[str] = None,
        department: Optional[str] = None,
        division: Optional[str] = None,
        semester: Optional[int] = None,
        day: Optional[Weekday] = None,
    ) -> Sequence[TimetableEntry]:
        query: Dict[str, Any] = {"is_active": True}
        if faculty_id:
            query["faculty_id"] = to_object_id(faculty_id)
        if department:
            query["department"] = department
        if division:
            query["division"] = division
        if semester is not None:
            query["semester"] = int(semester)
        if day is not None:
            query["day"] = day.value

        return [_to_entry(d) for d in self._entries.find(query)]

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..core.constants import SUBJECTS_COLLECTION
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id, to_object_ids
from .model import Subject
from .repository import SubjectRepository


def _to_subject(doc: Dict[str, Any]) -> Subject:
    return Subject(
        subject_id=id_str(doc["_id"]),
        name=doc["name"],
        code=doc["code"],
        department=doc.get("department"),
        credits=doc.get("credits"),
        semester=doc.get("semester"),
        faculty_id=id_str(doc.get("faculty_id")),
        faculty_name=doc.get("faculty_name"),
        description=doc.get("description"),
        syllabus=doc.get("syllabus"),
        is_active=bool(doc.get("is_active", True)),
    )


class MongoSubjectRepository(SubjectRepository):
    def __init__(self, conn: DatabaseConnection):
        self._subjects = conn.collection(SUBJECTS_COLLECTION)

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        doc = self._subjects.find_one({"_id": to_object_id(subject_id)})
        return _to_subject(doc) if doc else None

    def get_many(self, subject_ids: Iterable[str]) -> Dict[str, Subject]:
        ids = {str(s) for s in subject_ids if s}
        if not ids:
            return {}
        docs = self._subjects.find({"_id": {"$in": to_object_ids(ids)}})
        return {id_str(d["_id"]): _to_subject(d) for d in docs}

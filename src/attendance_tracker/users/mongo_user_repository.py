from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id, to_object_ids
from .model import User
from .repository import UserRepository


def _to_user(doc: Dict[str, Any]) -> User:
    semester = doc.get("semester")
    return User(
        user_id=id_str(doc["_id"]),
        username=doc["username"],
        password_hash=doc.get("password_hash", ""),
        role=Role(doc["role"]),
        department=doc.get("department"),
        division=doc.get("division"),
        semester=int(semester) if semester is not None else None,
        enrollment_number=doc.get("enrollment_number"),
        is_active=bool(doc.get("is_active", True)),
    )


class MongoUserRepository(UserRepository):
    def __init__(self, conn: DatabaseConnection):
        self._users = conn.collection(USERS_COLLECTION)

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._users.find_one({"_id": to_object_id(user_id)})
        return _to_user(doc) if doc else None

    def get_by_username(self, username: str) -> Optional[User]:
        doc = self._users.find_one({"username": username})
        return _to_user(doc) if doc else None

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        ids = {str(u) for u in user_ids if u}
        if not ids:
            return {}
        docs = self._users.find({"_id": {"$in": to_object_ids(ids)}})
        return {id_str(d["_id"]): _to_user(d) for d in docs}

    def count_active_students(self, *, department: str, division: str, semester: int) -> int:
        return int(
            self._users.count_documents(
                {
                    "role": Role.STUDENT.value,
                    "department": department,
                    "division": division,
                    "semester": int(semester),
                    "is_active": True,
                }
            )
        )

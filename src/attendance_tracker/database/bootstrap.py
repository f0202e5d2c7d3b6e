from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_utc
from ..core.constants import (
    ATTENDANCE_COLLECTION,
    SESSIONS_COLLECTION,
    SUBJECTS_COLLECTION,
    TIMETABLES_COLLECTION,
    USERS_COLLECTION,
)
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def ensure_indexes(conn: DatabaseConnection) -> None:
    """Create the indexes the services rely on. Safe to run repeatedly."""
    db = conn.db

    sessions = db[SESSIONS_COLLECTION]
    sessions.create_index([("session_id", ASCENDING)], unique=True, name="uniq_session_id")
    sessions.create_index([("faculty_id", ASCENDING), ("created_at", DESCENDING)], name="faculty_recent")

    attendance = db[ATTENDANCE_COLLECTION]
    attendance.create_index(
        [("student_id", ASCENDING), ("session_id", ASCENDING)],
        unique=True,
        name="uniq_student_session",
    )
    attendance.create_index([("session_id", ASCENDING), ("status", ASCENDING)], name="session_status")
    attendance.create_index([("date", DESCENDING), ("student_name", ASCENDING)], name="report_order")

    users = db[USERS_COLLECTION]
    users.create_index([("username", ASCENDING)], unique=True, name="uniq_username")
    users.create_index(
        [
            ("role", ASCENDING),
            ("department", ASCENDING),
            ("division", ASCENDING),
            ("semester", ASCENDING),
            ("is_active", ASCENDING),
        ],
        name="cohort",
    )

    db[SUBJECTS_COLLECTION].create_index([("code", ASCENDING)], unique=True, name="uniq_code")

    # A room, and a faculty member, can only hold one slot at a time.
    timetables = db[TIMETABLES_COLLECTION]
    timetables.create_index(
        [("day", ASCENDING), ("time", ASCENDING), ("room", ASCENDING)],
        unique=True,
        name="uniq_room_slot",
    )
    timetables.create_index(
        [("faculty_id", ASCENDING), ("day", ASCENDING), ("time", ASCENDING)],
        unique=True,
        name="uniq_faculty_slot",
    )
    timetables.create_index(
        [("department", ASCENDING), ("division", ASCENDING), ("semester", ASCENDING)],
        name="timetable_cohort",
    )


def ensure_demo_data(conn: DatabaseConnection) -> None:
    db = conn.db
    users = db[USERS_COLLECTION]
    subjects = db[SUBJECTS_COLLECTION]
    now = now_utc()

    def upsert_user(username: str, password: str, role: str, **profile) -> None:
        users.update_one(
            {"username": username},
            {
                "$set": {
                    "password_hash": generate_password_hash(password),
                    "role": role,
                    "is_active": True,
                    "updated_at": now,
                    **profile,
                },
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

    upsert_user("admin", "admin123", "admin")
    upsert_user("prof.sharma", "faculty123", "faculty", department="CSE")
    upsert_user(
        "asha",
        "student123",
        "student",
        department="CSE",
        division="A",
        semester=5,
        enrollment_number="CSE2021001",
    )
    upsert_user(
        "ravi",
        "student123",
        "student",
        department="CSE",
        division="A",
        semester=5,
        enrollment_number="CSE2021002",
    )

    faculty = users.find_one({"username": "prof.sharma"})
    subjects.update_one(
        {"code": "CS501"},
        {
            "$set": {
                "name": "Database Systems",
                "department": "CSE",
                "credits": 4,
                "semester": 5,
                "faculty_id": faculty["_id"],
                "faculty_name": faculty["username"],
                "description": "Relational model, SQL, transactions and indexing.",
                "is_active": True,
                "updated_at": now,
            },
            "$setOnInsert": {"created_at": now},
        },
        upsert=True,
    )

    subject = subjects.find_one({"code": "CS501"})
    db[TIMETABLES_COLLECTION].update_one(
        {"day": "Monday", "time": "09:00", "room": "CSE-301"},
        {
            "$set": {
                "subject_id": subject["_id"],
                "subject_name": subject["name"],
                "faculty_id": faculty["_id"],
                "faculty_name": faculty["username"],
                "department": "CSE",
                "division": "A",
                "semester": 5,
                "duration_minutes": 60,
                "is_active": True,
                "updated_at": now,
            },
            "$setOnInsert": {"created_at": now},
        },
        upsert=True,
    )
    logger.info("Demo users, subjects and timetable ready")


def list_collections(conn: DatabaseConnection) -> list[str]:
    return sorted(conn.db.list_collection_names())

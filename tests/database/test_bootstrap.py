from __future__ import annotations

from collections import defaultdict
from unittest.mock import MagicMock

from pymongo import ASCENDING

from attendance_tracker.core.constants import (
    ATTENDANCE_COLLECTION,
    SESSIONS_COLLECTION,
    SUBJECTS_COLLECTION,
    TIMETABLES_COLLECTION,
    USERS_COLLECTION,
)
from attendance_tracker.database.bootstrap import ensure_demo_data, ensure_indexes


def _conn():
    collections = defaultdict(MagicMock)
    conn = MagicMock()
    conn.db.__getitem__.side_effect = lambda name: collections[name]
    return conn, collections


def _unique_indexes(collection):
    return {c.kwargs["name"] for c in collection.create_index.call_args_list if c.kwargs.get("unique")}


def test_ensure_indexes_declares_uniqueness_constraints():
    conn, collections = _conn()

    ensure_indexes(conn)

    assert _unique_indexes(collections[SESSIONS_COLLECTION]) == {"uniq_session_id"}
    assert _unique_indexes(collections[ATTENDANCE_COLLECTION]) == {"uniq_student_session"}
    assert _unique_indexes(collections[USERS_COLLECTION]) == {"uniq_username"}


def test_demo_users_are_stored_with_hashed_passwords():
    conn, collections = _conn()
    users = collections[USERS_COLLECTION]
    users.find_one.return_value = {"_id": "f1", "username": "prof.sharma"}

    ensure_demo_data(conn)

    seeded = {c.args[0]["username"]: c.args[1]["$set"] for c in users.update_one.call_args_list}
    assert set(seeded) == {"admin", "prof.sharma", "asha", "ravi"}
    assert seeded["asha"]["password_hash"] != "student123"
    assert seeded["asha"]["semester"] == 5


def test_timetable_slots_cannot_double_book_room_or_faculty():
    conn, collections = _conn()

    ensure_indexes(conn)

    timetables = collections[TIMETABLES_COLLECTION]
    assert _unique_indexes(timetables) == {"uniq_room_slot", "uniq_faculty_slot"}
    keys = {c.kwargs["name"]: c.args[0] for c in timetables.create_index.call_args_list}
    assert keys["uniq_room_slot"] == [("day", ASCENDING), ("time", ASCENDING), ("room", ASCENDING)]
    assert keys["uniq_faculty_slot"] == [("faculty_id", ASCENDING), ("day", ASCENDING), ("time", ASCENDING)]


def test_demo_timetable_slot_is_seeded():
    conn, collections = _conn()
    collections[USERS_COLLECTION].find_one.return_value = {"_id": "f1", "username": "prof.sharma"}
    collections[SUBJECTS_COLLECTION].find_one.return_value = {"_id": "c1", "name": "Database Systems"}

    ensure_demo_data(conn)

    key, update = collections[TIMETABLES_COLLECTION].update_one.call_args.args
    assert key == {"day": "Monday", "time": "09:00", "room": "CSE-301"}
    assert update["$set"]["subject_id"] == "c1"
    assert update["$set"]["faculty_id"] == "f1"

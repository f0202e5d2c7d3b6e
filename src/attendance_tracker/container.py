from __future__ import annotations

from dataclasses import dataclass

from .attendance.mongo_attendance_repository import MongoAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, MongoConfig
from .sessions.mongo_session_repository import MongoSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .statistics.service import AttendanceStatisticsService
from .subjects.mongo_subject_repository import MongoSubjectRepository
from .subjects.repository import SubjectRepository
from .timetables.mongo_timetable_repository import MongoTimetableRepository
from .timetables.repository import TimetableRepository
from .timetables.service import TimetableService
from .users.mongo_user_repository import MongoUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    subjects_repo: SubjectRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    timetables_repo: TimetableRepository

    auth_service: AuthService
    session_service: SessionService
    attendance_service: AttendanceService
    statistics_service: AttendanceStatisticsService
    timetable_service: TimetableService


def build_services(
    *,
    users_repo: UserRepository,
    subjects_repo: SubjectRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    timetables_repo: TimetableRepository,
) -> Container:
    statistics_service = AttendanceStatisticsService()
    return Container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        timetables_repo=timetables_repo,
        auth_service=AuthService(users_repo),
        session_service=SessionService(sessions_repo, attendance_repo, users_repo, subjects_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            sessions_repo,
            users_repo,
            subjects_repo,
            statistics=statistics_service,
        ),
        statistics_service=statistics_service,
        timetable_service=TimetableService(timetables_repo, users_repo),
    )


def build_container(*, mongo_uri: str, db_name: str) -> Container:
    conn = DatabaseConnection.get_instance(MongoConfig(uri=mongo_uri, database=db_name))
    return build_services(
        users_repo=MongoUserRepository(conn),
        subjects_repo=MongoSubjectRepository(conn),
        sessions_repo=MongoSessionRepository(conn),
        attendance_repo=MongoAttendanceRepository(conn),
        timetables_repo=MongoTimetableRepository(conn),
    )

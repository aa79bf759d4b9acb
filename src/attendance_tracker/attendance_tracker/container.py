from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, ProfileService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    subjects_repo: SubjectRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    profile_service: ProfileService
    subject_service: SubjectService
    attendance_service: AttendanceService


def wire_services(
    *,
    users_repo: UserRepository,
    subjects_repo: SubjectRepository,
    attendance_repo: AttendanceRepository,
    secret_key: str,
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
) -> Container:
    tokens = TokenService(secret_key, expire_minutes=token_expire_minutes)
    subject_service = SubjectService(subjects_repo)

    return Container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo, tokens),
        profile_service=ProfileService(users_repo),
        subject_service=subject_service,
        attendance_service=AttendanceService(attendance_repo, subject_service),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        secret_key=secret_key,
        token_expire_minutes=token_expire_minutes,
    )

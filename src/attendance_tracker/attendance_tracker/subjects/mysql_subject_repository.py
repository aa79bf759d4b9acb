from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subject
from .repository import SubjectRepository


def _row_to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=str(r["subject_id"]),
        name=r["name"],
        total_classes=int(r["total_classes"]),
        attended_classes=int(r["attended_classes"]),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT subject_id, name, total_classes, attended_classes
                FROM subjects
                WHERE user_id=%s
                ORDER BY created_at ASC, subject_id ASC
                """,
                (user_id,),
            )
            return [_row_to_subject(r) for r in fetchall(cur)]

    def get_for_user(self, subject_id: int, user_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT subject_id, name, total_classes, attended_classes
                FROM subjects
                WHERE subject_id=%s AND user_id=%s
                """,
                (subject_id, user_id),
            )
            r = fetchone(cur)
            return _row_to_subject(r) if r else None

    def create(self, *, user_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO subjects(user_id, name, total_classes, attended_classes) VALUES(%s,%s,0,0)",
                (user_id, name),
            )
            return int(cur.lastrowid)

    def delete(self, subject_id: int) -> bool:
        # Records are removed in the same transaction; the FK cascade is a backstop.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE subject_id=%s", (subject_id,))
            cur.execute("DELETE FROM subjects WHERE subject_id=%s", (subject_id,))
            return cur.rowcount > 0

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        subject_id=str(r["subject_id"]),
        class_date=normalize_mysql_date(r["class_date"]),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_subject(self, subject_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, subject_id, class_date, status
                FROM attendance_records
                WHERE subject_id=%s
                ORDER BY class_date DESC
                """,
                (subject_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT record_id, subject_id, class_date, status FROM attendance_records WHERE record_id=%s",
                (record_id,),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_subject_and_date(self, subject_id: int, class_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, subject_id, class_date, status
                FROM attendance_records
                WHERE subject_id=%s AND class_date=%s
                """,
                (subject_id, class_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, *, subject_id: int, class_date: date, status: AttendanceStatus) -> int:
        attended = 1 if status == AttendanceStatus.PRESENT else 0
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance_records(subject_id, class_date, status) VALUES(%s,%s,%s)",
                    (subject_id, class_date, status.value),
                )
                record_id = int(cur.lastrowid)
                cur.execute(
                    """
                    UPDATE subjects
                    SET total_classes = total_classes + 1, attended_classes = attended_classes + %s
                    WHERE subject_id=%s
                    """,
                    (attended, subject_id),
                )
                return record_id
        except mysql_errors.IntegrityError:
            # UNIQUE(subject_id, class_date) lost a race with a concurrent insert.
            raise ConflictError("Attendance already marked for this date")

    def delete(self, record: AttendanceRecord) -> bool:
        attended = 1 if record.is_present else 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record.record_id),))
            if cur.rowcount == 0:
                return False
            cur.execute(
                """
                UPDATE subjects
                SET total_classes = GREATEST(total_classes - 1, 0),
                    attended_classes = GREATEST(attended_classes - %s, 0)
                WHERE subject_id=%s
                """,
                (attended, int(record.subject_id)),
            )
            return True

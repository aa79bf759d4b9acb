from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Backend persistence for attendance records.

    create/delete also maintain the owning subject's class counts in the same
    transaction.
    """

    def list_for_subject(self, subject_id: int) -> Sequence[AttendanceRecord]:
        """Records of one subject, newest date first."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_subject_and_date(self, subject_id: int, class_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, subject_id: int, class_date: date, status: AttendanceStatus) -> int:
        """Insert a record; raises ConflictError if the date is already recorded."""

        raise NotImplementedError

    def delete(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

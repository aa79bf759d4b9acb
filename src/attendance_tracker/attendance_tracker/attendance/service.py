from __future__ import annotations

from datetime import date

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..subjects.service import SubjectService
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    """Backend use cases for attendance records of the current user's subjects."""

    def __init__(self, attendance: AttendanceRepository, subjects: SubjectService):
        self._attendance = attendance
        self._subjects = subjects

    @staticmethod
    def parse_status(value: str) -> AttendanceStatus:
        try:
            return AttendanceStatus((value or "").strip().lower())
        except ValueError:
            raise ValidationError("Status must be 'present' or 'absent'")

    def list_for_subject(self, *, user_id: int, subject_id: int) -> list[AttendanceRecord]:
        self._subjects.get_subject(user_id=user_id, subject_id=subject_id)
        return list(self._attendance.list_for_subject(subject_id))

    def mark(self, *, user_id: int, subject_id: int, class_date: date, status: AttendanceStatus) -> AttendanceRecord:
        self._subjects.get_subject(user_id=user_id, subject_id=subject_id)

        if self._attendance.get_for_subject_and_date(subject_id, class_date):
            raise ConflictError("Attendance already marked for this date")

        record_id = self._attendance.create(subject_id=subject_id, class_date=class_date, status=status)
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def delete(self, *, user_id: int, record_id: int) -> None:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        try:
            self._subjects.get_subject(user_id=user_id, subject_id=int(record.subject_id))
        except NotFoundError:
            # Someone else's record: do not reveal it exists.
            raise NotFoundError("Attendance record not found")

        if not self._attendance.delete(record):
            raise NotFoundError("Attendance record not found")

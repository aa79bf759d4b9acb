from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceStore(Protocol):
    """Async collaborator used by AttendanceSession.

    Errors follow the domain taxonomy: ConflictError for an already recorded
    date, NotFoundError for a vanished subject/record, AuthError for a bad
    credential and TransientError for everything else.
    """

    async def list_attendance(self, subject_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def create_attendance(self, subject_id: str, class_date: date, status: AttendanceStatus) -> AttendanceRecord:
        raise NotImplementedError

    async def delete_attendance(self, record_id: str) -> None:
        raise NotImplementedError

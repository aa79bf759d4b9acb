from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one dated presence/absence entry for a subject.

    Never updated in place; changing a status means delete + create.
    """

    record_id: str
    subject_id: str
    class_date: date
    status: AttendanceStatus

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT

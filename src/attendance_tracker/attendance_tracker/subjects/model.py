from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Subject:
    """Domain entity: a trackable course with cumulative class counts.

    Counts change only as a side effect of creating/deleting attendance records.
    """

    subject_id: str
    name: str
    total_classes: int = 0
    attended_classes: int = 0

    def __post_init__(self) -> None:
        if self.total_classes < 0 or self.attended_classes < 0:
            raise ValidationError("Class counts cannot be negative")
        if self.attended_classes > self.total_classes:
            raise ValidationError("Attended classes cannot exceed total classes")

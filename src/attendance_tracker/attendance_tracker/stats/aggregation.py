from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.enums import AttendanceCategory
from ..subjects.model import Subject
from .percentage import AttendanceStatusInfo, classify, percentage_of, round_ratio


@dataclass(frozen=True)
class BarPoint:
    name: str
    percentage: int


@dataclass(frozen=True)
class DistributionEntry:
    category: AttendanceCategory
    count: int


@dataclass(frozen=True)
class SubjectStats:
    subject_id: str
    name: str
    attended: int
    absent: int
    total: int
    percentage: int
    status: AttendanceStatusInfo


_CATEGORY_ORDER = (AttendanceCategory.GOOD, AttendanceCategory.AVERAGE, AttendanceCategory.POOR)


def subject_percentage(subject: Subject) -> int:
    return percentage_of(subject.attended_classes, subject.total_classes)


def overall_percentage(subjects: Sequence[Subject]) -> int:
    """Unweighted mean of the per-subject percentages (0 when there are none).

    A subject with two classes counts as much as one with forty.
    """
    if not subjects:
        return 0
    total = sum(subject_percentage(s) for s in subjects)
    return round_ratio(total, len(subjects))


def bar_series(subjects: Sequence[Subject]) -> list[BarPoint]:
    return [BarPoint(name=s.name, percentage=subject_percentage(s)) for s in subjects]


def distribution(subjects: Sequence[Subject]) -> list[DistributionEntry]:
    counts = {c: 0 for c in _CATEGORY_ORDER}
    for s in subjects:
        counts[classify(subject_percentage(s)).category] += 1

    return [DistributionEntry(category=c, count=counts[c]) for c in _CATEGORY_ORDER if counts[c] > 0]


def subject_stats(subject: Subject) -> SubjectStats:
    percentage = subject_percentage(subject)
    return SubjectStats(
        subject_id=subject.subject_id,
        name=subject.name,
        attended=subject.attended_classes,
        absent=subject.total_classes - subject.attended_classes,
        total=subject.total_classes,
        percentage=percentage,
        status=classify(percentage),
    )

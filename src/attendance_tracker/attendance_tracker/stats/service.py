from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.enums import AttendanceCategory
from ..subjects.model import Subject
from .aggregation import (
    BarPoint,
    DistributionEntry,
    SubjectStats,
    bar_series,
    distribution,
    overall_percentage,
    subject_stats,
)
from .percentage import AttendanceStatusInfo, classify, status_info


CHART_LABELS = {
    AttendanceCategory.GOOD: "Good Attendance",
    AttendanceCategory.AVERAGE: "Average Attendance",
    AttendanceCategory.POOR: "Poor Attendance",
}


@dataclass(frozen=True)
class DashboardSummary:
    total_subjects: int
    total_classes: int
    attended_classes: int
    overall_percentage: int
    overall_status: AttendanceStatusInfo
    cards: list[SubjectStats]


@dataclass(frozen=True)
class AnalyticsReport:
    overall_percentage: int
    overall_status: AttendanceStatusInfo
    bars: list[BarPoint]
    distribution: list[DistributionEntry]
    pie: list[dict]
    details: list[SubjectStats]


class AnalyticsService:
    """Read models for the dashboard and analytics views.

    Both views use the same overall figure (unweighted mean of subject
    percentages). Everything is recomputed per call from the given subjects.
    """

    def dashboard(self, subjects: Sequence[Subject]) -> DashboardSummary:
        overall = overall_percentage(subjects)
        return DashboardSummary(
            total_subjects=len(subjects),
            total_classes=sum(s.total_classes for s in subjects),
            attended_classes=sum(s.attended_classes for s in subjects),
            overall_percentage=overall,
            overall_status=classify(overall),
            cards=[subject_stats(s) for s in subjects],
        )

    def analytics(self, subjects: Sequence[Subject]) -> AnalyticsReport:
        overall = overall_percentage(subjects)
        dist = distribution(subjects)
        return AnalyticsReport(
            overall_percentage=overall,
            overall_status=classify(overall),
            bars=bar_series(subjects),
            distribution=dist,
            pie=[self._pie_slice(e) for e in dist],
            details=[subject_stats(s) for s in subjects],
        )

    @staticmethod
    def _pie_slice(entry: DistributionEntry) -> dict:
        return {
            "name": CHART_LABELS[entry.category],
            "value": entry.count,
            "color": status_info(entry.category).chart_color,
        }

"""Percentage and category rules shared by the client core and the backend."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import AVERAGE_THRESHOLD, CHART_COLORS, GOOD_THRESHOLD
from ..core.enums import AttendanceCategory


@dataclass(frozen=True)
class AttendanceStatusInfo:
    category: AttendanceCategory
    display_color: str
    chart_color: str


_GOOD = AttendanceStatusInfo(AttendanceCategory.GOOD, "success", CHART_COLORS["good"])
_AVERAGE = AttendanceStatusInfo(AttendanceCategory.AVERAGE, "warning", CHART_COLORS["average"])
_POOR = AttendanceStatusInfo(AttendanceCategory.POOR, "error", CHART_COLORS["poor"])


def round_ratio(numerator: int, denominator: int) -> int:
    """Round numerator/denominator half-up, for non-negative integers."""
    return (2 * numerator + denominator) // (2 * denominator)


def percentage_of(attended: int, total: int) -> int:
    """Attended share of total as an integer percentage.

    Returns 0 when total is 0. Does not clamp: attended > total is a caller bug.
    """
    if not total:
        return 0
    return round_ratio(attended * 100, total)


def classify(percentage: int) -> AttendanceStatusInfo:
    if percentage >= GOOD_THRESHOLD:
        return _GOOD
    if percentage >= AVERAGE_THRESHOLD:
        return _AVERAGE
    return _POOR


def status_info(category: AttendanceCategory) -> AttendanceStatusInfo:
    return {
        AttendanceCategory.GOOD: _GOOD,
        AttendanceCategory.AVERAGE: _AVERAGE,
        AttendanceCategory.POOR: _POOR,
    }[category]

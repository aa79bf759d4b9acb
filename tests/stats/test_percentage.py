from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import AttendanceCategory
from src.attendance_tracker.attendance_tracker.stats.percentage import classify, percentage_of, status_info


def test_no_classes_is_zero_percent():
    assert percentage_of(0, 0) == 0


@pytest.mark.parametrize(
    "attended,total,expected",
    [
        (1, 8, 13),  # 12.5 rounds up
        (2, 3, 67),
        (1, 3, 33),
        (15, 20, 75),
        (15, 21, 71),
        (3, 3, 100),
        (0, 5, 0),
    ],
)
def test_percentage_rounds_half_up(attended, total, expected):
    assert percentage_of(attended, total) == expected


def test_percentage_is_monotonic_in_attended():
    for total in range(1, 25):
        values = [percentage_of(a, total) for a in range(total + 1)]
        assert values == sorted(values)
        assert values[0] == 0 and values[-1] == 100


def test_percentage_does_not_grow_with_more_classes():
    for attended in range(0, 10):
        values = [percentage_of(attended, total) for total in range(max(attended, 1), 40)]
        assert values == sorted(values, reverse=True)


@pytest.mark.parametrize(
    "percentage,category",
    [
        (100, AttendanceCategory.GOOD),
        (75, AttendanceCategory.GOOD),
        (74, AttendanceCategory.AVERAGE),
        (65, AttendanceCategory.AVERAGE),
        (64, AttendanceCategory.POOR),
        (0, AttendanceCategory.POOR),
    ],
)
def test_classify_thresholds(percentage, category):
    assert classify(percentage).category == category


def test_one_more_absence_drops_good_to_average():
    assert classify(percentage_of(15, 20)).category == AttendanceCategory.GOOD
    assert classify(percentage_of(15, 21)).category == AttendanceCategory.AVERAGE


def test_status_info_colors():
    good = status_info(AttendanceCategory.GOOD)
    assert good.display_color == "success"
    assert good.chart_color == "#4CAF50"
    assert status_info(AttendanceCategory.AVERAGE).chart_color == "#FFC107"
    assert status_info(AttendanceCategory.POOR).display_color == "error"
    assert classify(10) is status_info(AttendanceCategory.POOR)

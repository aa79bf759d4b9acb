from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of a single dated attendance record."""

    PRESENT = "present"
    ABSENT = "absent"


class AttendanceCategory(str, Enum):
    """Three-tier classification of an attendance percentage."""

    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"


class SessionState(str, Enum):
    """Lifecycle of an attendance-marking session."""

    IDLE = "IDLE"
    LOADING_HISTORY = "LOADING_HISTORY"
    READY = "READY"
    MARKING = "MARKING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    DELETING = "DELETING"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.container import wire_services
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictError, NotFoundError
from src.attendance_tracker.attendance_tracker.subjects.model import Subject
from src.attendance_tracker.attendance_tracker.users.model import User


# ---------------------------------------------------------------------------
# Backend repositories (sync), sharing one in-memory "database"
# ---------------------------------------------------------------------------


@dataclass
class InMemoryDb:
    users: dict[int, User] = field(default_factory=dict)
    subjects: dict[int, dict] = field(default_factory=dict)
    records: dict[int, AttendanceRecord] = field(default_factory=dict)
    next_id: int = 0

    def new_id(self) -> int:
        self.next_id += 1
        return self.next_id


class InMemoryUsers:
    def __init__(self, db: InMemoryDb):
        self._db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._db.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        uid = self._db.new_id()
        self._db.users[uid] = User(user_id=uid, name=name, email=email, password_hash=password_hash)
        return uid

    def update_user(self, *, user_id: int, name: str, email: str, password_hash: str) -> bool:
        self._db.users[user_id] = User(user_id=user_id, name=name, email=email, password_hash=password_hash)
        return True


class InMemorySubjects:
    def __init__(self, db: InMemoryDb):
        self._db = db

    @staticmethod
    def _to_subject(subject_id: int, row: dict) -> Subject:
        return Subject(
            subject_id=str(subject_id),
            name=row["name"],
            total_classes=row["total"],
            attended_classes=row["attended"],
        )

    def list_for_user(self, user_id: int):
        return [self._to_subject(sid, r) for sid, r in self._db.subjects.items() if r["user_id"] == user_id]

    def get_for_user(self, subject_id: int, user_id: int) -> Optional[Subject]:
        row = self._db.subjects.get(int(subject_id))
        if not row or row["user_id"] != user_id:
            return None
        return self._to_subject(int(subject_id), row)

    def create(self, *, user_id: int, name: str) -> int:
        sid = self._db.new_id()
        self._db.subjects[sid] = {"user_id": user_id, "name": name, "total": 0, "attended": 0}
        return sid

    def delete(self, subject_id: int) -> bool:
        for rid, rec in list(self._db.records.items()):
            if rec.subject_id == str(subject_id):
                del self._db.records[rid]
        return self._db.subjects.pop(int(subject_id), None) is not None


class InMemoryAttendance:
    def __init__(self, db: InMemoryDb):
        self._db = db

    def list_for_subject(self, subject_id: int):
        items = [r for r in self._db.records.values() if r.subject_id == str(subject_id)]
        items.sort(key=lambda r: r.class_date, reverse=True)
        return items

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self._db.records.get(int(record_id))

    def get_for_subject_and_date(self, subject_id: int, class_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self._db.records.values() if r.subject_id == str(subject_id) and r.class_date == class_date),
            None,
        )

    def create(self, *, subject_id: int, class_date: date, status: AttendanceStatus) -> int:
        if self.get_for_subject_and_date(subject_id, class_date):
            raise ConflictError("Attendance already marked for this date")
        rid = self._db.new_id()
        self._db.records[rid] = AttendanceRecord(str(rid), str(subject_id), class_date, status)
        row = self._db.subjects[int(subject_id)]
        row["total"] += 1
        row["attended"] += 1 if status == AttendanceStatus.PRESENT else 0
        return rid

    def delete(self, record: AttendanceRecord) -> bool:
        if self._db.records.pop(int(record.record_id), None) is None:
            return False
        row = self._db.subjects[int(record.subject_id)]
        row["total"] -= 1
        row["attended"] -= 1 if record.is_present else 0
        return True


@pytest.fixture
def memory_db() -> InMemoryDb:
    return InMemoryDb()


@pytest.fixture
def container(memory_db):
    return wire_services(
        users_repo=InMemoryUsers(memory_db),
        subjects_repo=InMemorySubjects(memory_db),
        attendance_repo=InMemoryAttendance(memory_db),
        secret_key="test-secret",
    )


# ---------------------------------------------------------------------------
# Client-side async collaborators
# ---------------------------------------------------------------------------


class FakeAttendanceStore:
    """Async AttendanceStore with scripted failures and an optional gate on writes."""

    def __init__(self, records=None):
        self.records: dict[str, AttendanceRecord] = {r.record_id: r for r in records or []}
        self.list_calls: list[str] = []
        self.create_calls: list[tuple[str, date, AttendanceStatus]] = []
        self.delete_calls: list[str] = []
        self.list_errors: list[Exception] = []
        self.create_errors: list[Exception] = []
        self.delete_errors: list[Exception] = []
        self.gate: Optional[asyncio.Event] = None
        self._next_id = 100

    async def _wait_gate(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def list_attendance(self, subject_id: str):
        self.list_calls.append(subject_id)
        if self.list_errors:
            raise self.list_errors.pop(0)
        return [r for r in self.records.values() if r.subject_id == subject_id]

    async def create_attendance(self, subject_id: str, class_date: date, status: AttendanceStatus):
        self.create_calls.append((subject_id, class_date, status))
        await self._wait_gate()
        if self.create_errors:
            raise self.create_errors.pop(0)
        if any(r.subject_id == subject_id and r.class_date == class_date for r in self.records.values()):
            raise ConflictError("Attendance already marked for this date")
        self._next_id += 1
        record = AttendanceRecord(str(self._next_id), subject_id, class_date, status)
        self.records[record.record_id] = record
        return record

    async def delete_attendance(self, record_id: str) -> None:
        self.delete_calls.append(record_id)
        await self._wait_gate()
        if self.delete_errors:
            raise self.delete_errors.pop(0)
        if self.records.pop(record_id, None) is None:
            raise NotFoundError("")


class FakeSubjectStore:
    def __init__(self, subjects=None):
        self.subjects: list[Subject] = list(subjects or [])
        self.list_errors: list[Exception] = []
        self.calls: list[str] = []
        self._next_id = 0

    async def list_subjects(self):
        self.calls.append("list")
        if self.list_errors:
            raise self.list_errors.pop(0)
        return list(self.subjects)

    async def create_subject(self, name: str) -> Subject:
        self.calls.append("create")
        self._next_id += 1
        subject = Subject(subject_id=f"s{self._next_id}", name=name)
        self.subjects.append(subject)
        return subject

    async def delete_subject(self, subject_id: str) -> None:
        self.calls.append("delete")
        before = len(self.subjects)
        self.subjects = [s for s in self.subjects if s.subject_id != subject_id]
        if len(self.subjects) == before:
            raise NotFoundError("Subject not found")


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 3, 10)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def attendance_store() -> FakeAttendanceStore:
    return FakeAttendanceStore()


@pytest.fixture
def subject_store() -> FakeSubjectStore:
    return FakeSubjectStore()

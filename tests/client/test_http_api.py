from __future__ import annotations

import asyncio
import json
from datetime import date

import httpx
import pytest

from src.attendance_tracker.attendance_tracker.client.context import ClientContext
from src.attendance_tracker.attendance_tracker.client.http_api import HttpTrackerApi
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from src.attendance_tracker.attendance_tracker.users.model import UserProfile

BASE_URL = "http://api.test"


def _api(handler, *, token="t0k3n"):
    context = ClientContext(base_url=BASE_URL)
    if token:
        context = context.signed_in(token, UserProfile("1", "Ana", "ana@example.com"))
    return HttpTrackerApi(context, transport=httpx.MockTransport(handler))


def _reply(status, body=None):
    def handler(request):
        return httpx.Response(status, json=body)

    return handler


def test_list_subjects_sends_bearer_token():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json=[{"id": "7", "name": "Math", "totalClasses": 4, "attendedClasses": 3, "attendancePercentage": 75}],
        )

    subjects = asyncio.run(_api(handler).list_subjects())

    assert seen[0].url == httpx.URL(f"{BASE_URL}/api/subjects")
    assert seen[0].headers["Authorization"] == "Bearer t0k3n"
    assert subjects[0].subject_id == "7"
    assert (subjects[0].total_classes, subjects[0].attended_classes) == (4, 3)


def test_missing_token_fails_before_any_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    with pytest.raises(AuthError):
        asyncio.run(_api(handler, token=None).list_attendance("7"))
    assert calls == []


def test_create_attendance_payload():
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "9", "subjectId": "7", "date": "2026-03-10", "status": "absent"})

    record = asyncio.run(_api(handler).create_attendance("7", date(2026, 3, 10), AttendanceStatus.ABSENT))

    assert seen == [{"subjectId": "7", "date": "2026-03-10", "status": "absent"}]
    assert record.record_id == "9"
    assert record.class_date == date(2026, 3, 10)
    assert record.status == AttendanceStatus.ABSENT


def test_record_date_may_carry_a_time_part():
    handler = _reply(200, [{"_id": "1", "subject": "7", "date": "2026-03-10T00:00:00.000Z", "status": "present"}])
    records = asyncio.run(_api(handler).list_attendance("7"))
    assert records[0].class_date == date(2026, 3, 10)
    assert records[0].subject_id == "7"


@pytest.mark.parametrize(
    "status,body,error",
    [
        (401, {"message": "Not authorized, token failed"}, AuthError),
        (404, {"message": "Subject not found"}, NotFoundError),
        (409, {"message": "dup"}, ConflictError),
        (400, {"message": "Attendance already marked for this date", "code": "conflict"}, ConflictError),
        (400, {"message": "Attendance already marked for this date"}, ConflictError),
        (400, {"message": "Invalid date", "code": "validation"}, ValidationError),
        (500, {"message": "Server error"}, TransientError),
    ],
)
def test_error_mapping_on_create_attendance(status, body, error):
    with pytest.raises(error):
        asyncio.run(_api(_reply(status, body)).create_attendance("7", date(2026, 3, 10), AttendanceStatus.PRESENT))


def test_plain_bad_request_is_validation_elsewhere():
    with pytest.raises(ValidationError, match="Subject name is required"):
        asyncio.run(_api(_reply(400, {"message": "Subject name is required"})).create_subject(""))


def test_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="<html>Bad gateway</html>")

    with pytest.raises(TransientError):
        asyncio.run(_api(handler).list_subjects())


def test_network_failure_is_transient():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransientError):
        asyncio.run(_api(handler).delete_attendance("3"))


def test_malformed_payload_is_transient():
    with pytest.raises(TransientError, match="Malformed"):
        asyncio.run(_api(_reply(200, [{"name": "no id"}])).list_subjects())


def test_login_signs_in_the_context():
    def handler(request):
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"token": "abc", "user": {"id": 3, "name": "Ana", "email": "ana@example.com"}})

    api = _api(handler, token=None)
    context = asyncio.run(api.login(email="ana@example.com", password="secret1"))

    assert context.token == "abc"
    assert context.user == UserProfile("3", "Ana", "ana@example.com")
    assert api.context is context

    assert not api.logout().authenticated


def test_login_without_token_in_response():
    with pytest.raises(TransientError):
        asyncio.run(_api(_reply(200, {"user": {"id": 1}}), token=None).login(email="a@b.c", password="secret1"))


def test_record_without_subject_is_malformed():
    handler = _reply(200, [{"id": "1", "date": "2026-03-10", "status": "present"}])

    with pytest.raises(TransientError, match="Malformed"):
        asyncio.run(_api(handler).list_attendance("7"))

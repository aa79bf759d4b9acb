from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

import httpx

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthError, ConflictError, NotFoundError, TransientError, ValidationError
from ..subjects.model import Subject
from ..users.model import UserProfile
from .context import ClientContext

logger = logging.getLogger(__name__)


def _message(response: httpx.Response) -> tuple[str, Optional[str]]:
    try:
        body = response.json()
    except ValueError:
        return "", None
    if not isinstance(body, dict):
        return "", None
    return str(body.get("message") or ""), body.get("code")


def raise_for_status(response: httpx.Response, *, bad_request_is_conflict: bool = False) -> None:
    """Translate an error response into the domain error taxonomy."""

    if response.is_success:
        return

    status = response.status_code
    message, code = _message(response)

    if status == 401:
        raise AuthError(message or "Session expired. Please login again.")
    if status == 404:
        raise NotFoundError(message)
    if status == 409 or code == "conflict":
        raise ConflictError(message)
    if status == 400:
        if bad_request_is_conflict and code is None:
            raise ConflictError(message)
        raise ValidationError(message or "Invalid request")
    raise TransientError(message or f"Server responded with HTTP {status}")


def subject_from_json(data: dict) -> Subject:
    return Subject(
        subject_id=str(data.get("id") or data["_id"]),
        name=str(data["name"]),
        total_classes=int(data.get("totalClasses", 0)),
        attended_classes=int(data.get("attendedClasses", 0)),
    )


def record_from_json(data: dict) -> AttendanceRecord:
    subject = data.get("subjectId") or data.get("subject")
    if subject is None:
        raise KeyError("subjectId")
    return AttendanceRecord(
        record_id=str(data.get("id") or data["_id"]),
        subject_id=str(subject),
        class_date=parse_iso_date(str(data["date"])[:10]),
        status=AttendanceStatus(data["status"]),
    )


def profile_from_json(data: dict) -> UserProfile:
    return UserProfile(user_id=str(data.get("id") or data["_id"]), name=str(data["name"]), email=str(data["email"]))


class HttpTrackerApi:
    """REST implementation of SubjectStore and AttendanceStore (plus auth/profile calls).

    One short-lived ``httpx.AsyncClient`` per call. Transport failures become
    TransientError; calls needing a credential fail with AuthError before any
    request when the context has no token.
    """

    def __init__(self, context: ClientContext, *, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._context = context
        self._transport = transport

    @property
    def context(self) -> ClientContext:
        return self._context

    def use_context(self, context: ClientContext) -> None:
        self._context = context

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        auth: bool = True,
        bad_request_is_conflict: bool = False,
    ) -> Any:
        if auth and not self._context.authenticated:
            raise AuthError("Please login to continue")

        headers = self._context.auth_headers() if auth else {}
        try:
            async with httpx.AsyncClient(
                base_url=self._context.base_url.rstrip("/"),
                timeout=self._context.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransientError("Network error. Please try again.") from e

        raise_for_status(response, bad_request_is_conflict=bad_request_is_conflict)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransientError("Malformed server response") from e

    @staticmethod
    def _parse(parser, data):
        try:
            return parser(data)
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            raise TransientError(f"Malformed server response: {e}") from e

    # Auth / profile

    async def register(self, *, name: str, email: str, password: str) -> ClientContext:
        data = await self._request(
            "POST", "/api/auth/register", json={"name": name, "email": email, "password": password}, auth=False
        )
        return self._sign_in(data)

    async def login(self, *, email: str, password: str) -> ClientContext:
        data = await self._request("POST", "/api/auth/login", json={"email": email, "password": password}, auth=False)
        return self._sign_in(data)

    def logout(self) -> ClientContext:
        self._context = self._context.signed_out()
        return self._context

    def _sign_in(self, data: dict) -> ClientContext:
        user = self._parse(lambda d: profile_from_json(d["user"]), data)
        token = self._parse(lambda d: str(d["token"]), data)
        self._context = self._context.signed_in(token, user)
        return self._context

    async def get_profile(self) -> UserProfile:
        return self._parse(profile_from_json, await self._request("GET", "/api/users/profile"))

    async def update_profile(
        self,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> UserProfile:
        payload = {"name": name, "email": email}
        if new_password:
            payload.update(currentPassword=current_password, newPassword=new_password)
        data = await self._request("PUT", "/api/users/profile", json={k: v for k, v in payload.items() if v is not None})
        profile = self._parse(profile_from_json, data)
        self._context = self._context.with_user(profile)
        return profile

    # SubjectStore

    async def list_subjects(self) -> Sequence[Subject]:
        data = await self._request("GET", "/api/subjects")
        return [self._parse(subject_from_json, d) for d in data or []]

    async def create_subject(self, name: str) -> Subject:
        return self._parse(subject_from_json, await self._request("POST", "/api/subjects", json={"name": name}))

    async def delete_subject(self, subject_id: str) -> None:
        await self._request("DELETE", f"/api/subjects/{subject_id}")

    # AttendanceStore

    async def list_attendance(self, subject_id: str) -> Sequence[AttendanceRecord]:
        data = await self._request("GET", f"/api/attendance/subject/{subject_id}")
        return [self._parse(record_from_json, d) for d in data or []]

    async def create_attendance(self, subject_id: str, class_date: date, status: AttendanceStatus) -> AttendanceRecord:
        data = await self._request(
            "POST",
            "/api/attendance",
            json={"subjectId": subject_id, "date": format_iso_date(class_date), "status": AttendanceStatus(status).value},
            bad_request_is_conflict=True,
        )
        return self._parse(record_from_json, data)

    async def delete_attendance(self, record_id: str) -> None:
        await self._request("DELETE", f"/api/attendance/{record_id}")

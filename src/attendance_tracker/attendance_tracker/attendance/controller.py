from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.web import current_user_id, json_body, make_token_required
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord


def record_to_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "subjectId": record.subject_id,
        "date": format_iso_date(record.class_date),
        "status": record.status.value,
    }


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.authenticate_token)

    @app.route("/api/attendance/subject/<int:subject_id>", methods=["GET"], endpoint="list_attendance")
    @token_required
    def list_attendance(subject_id: int):
        records = container.attendance_service.list_for_subject(user_id=current_user_id(), subject_id=subject_id)
        return jsonify([record_to_json(r) for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @token_required
    def create_attendance():
        data = json_body()
        try:
            subject_id = int(data.get("subjectId"))
        except (TypeError, ValueError):
            raise ValidationError("subjectId is required")
        if not data.get("date"):
            raise ValidationError("Please select a date")

        record = container.attendance_service.mark(
            user_id=current_user_id(),
            subject_id=subject_id,
            class_date=parse_iso_date(str(data["date"])),
            status=container.attendance_service.parse_status(str(data.get("status", ""))),
        )
        return jsonify(record_to_json(record)), 201

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="delete_attendance")
    @token_required
    def delete_attendance(record_id: int):
        container.attendance_service.delete(user_id=current_user_id(), record_id=record_id)
        return jsonify({"message": "Attendance record removed"})

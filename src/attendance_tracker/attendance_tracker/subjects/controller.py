from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, json_body, make_token_required
from ..container import Container
from ..stats.percentage import percentage_of
from .model import Subject


def subject_to_json(subject: Subject) -> dict:
    return {
        "id": subject.subject_id,
        "name": subject.name,
        "totalClasses": subject.total_classes,
        "attendedClasses": subject.attended_classes,
        "attendancePercentage": percentage_of(subject.attended_classes, subject.total_classes),
    }


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.authenticate_token)

    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    @token_required
    def list_subjects():
        subjects = container.subject_service.list_subjects(current_user_id())
        return jsonify([subject_to_json(s) for s in subjects])

    @app.route("/api/subjects", methods=["POST"], endpoint="create_subject")
    @token_required
    def create_subject():
        data = json_body()
        subject = container.subject_service.create_subject(user_id=current_user_id(), name=data.get("name", ""))
        return jsonify(subject_to_json(subject)), 201

    @app.route("/api/subjects/<int:subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @token_required
    def delete_subject(subject_id: int):
        container.subject_service.delete_subject(user_id=current_user_id(), subject_id=subject_id)
        return jsonify({"message": "Subject removed"})

from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.web import current_user_id, json_body, make_token_required
from ..container import Container
from .model import UserProfile
from .service import AuthResult


def profile_to_json(profile: UserProfile) -> dict:
    data = asdict(profile)
    return {"id": data.pop("user_id"), **data}


def auth_to_json(result: AuthResult) -> dict:
    return {"token": result.token, "user": profile_to_json(result.user)}


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.authenticate_token)

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_user():
        data = json_body()
        result = container.auth_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return jsonify(auth_to_json(result)), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        result = container.auth_service.login(email=data.get("email", ""), password=data.get("password", ""))
        return jsonify(auth_to_json(result))

    @app.route("/api/users/profile", methods=["GET"], endpoint="get_profile")
    @token_required
    def get_profile():
        return jsonify(profile_to_json(container.profile_service.get_profile(current_user_id())))

    @app.route("/api/users/profile", methods=["PUT"], endpoint="update_profile")
    @token_required
    def update_profile():
        data = json_body()
        profile = container.profile_service.update_profile(
            user_id=current_user_id(),
            name=data.get("name"),
            email=data.get("email"),
            current_password=data.get("currentPassword"),
            new_password=data.get("newPassword"),
        )
        return jsonify(profile_to_json(profile))

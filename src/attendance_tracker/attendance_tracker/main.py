from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from .core.exceptions import AuthError, ConflictError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .subjects.controller import register as register_subjects
from .users.controller import register as register_users

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def register_error_handlers(app: Flask) -> None:
    def _error(message: str, code: str, status: int):
        return jsonify({"message": message, "code": code}), status

    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        return _error(str(exc), "validation", 400)

    @app.errorhandler(ConflictError)
    def handle_conflict(exc: ConflictError):
        return _error(str(exc), "conflict", 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return _error(str(exc), "not_found", 404)

    @app.errorhandler(AuthError)
    def handle_auth(exc: AuthError):
        return _error(str(exc), "auth", 401)

    @app.errorhandler(DomainError)
    def handle_domain(exc: DomainError):
        app.logger.warning("unhandled domain error: %s", exc)
        return _error("Server error", "server", 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)), schema_path=SCHEMA_PATH)

        container = build_container(
            db_config=db_config,
            secret_key=app.secret_key,
            token_expire_minutes=int(getattr(settings, "TOKEN_EXPIRE_MINUTES", DEFAULT_TOKEN_EXPIRE_MINUTES)),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_subjects(app, container)
    register_attendance(app, container)

    return app

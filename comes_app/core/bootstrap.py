"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..config import validate_config
from .error_handlers import AuthenticationError
from .extensions import db, login_manager, migrate
from .logging_config import setup_logging
from .module_registry import register_default_modules
from ..utils.routing import MAX_ID


def configure_logging(app: Flask) -> None:
    """Configure the package logger and the Flask app logger."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )

    if app.logger.handlers:
        return

    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def check_configuration(app: Flask) -> None:
    """Fail fast on unsafe production settings."""

    validate_config(app.config)


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)


def register_identity_loader(app: Flask) -> None:
    """Resolve the calling student from the request header set by the auth layer."""

    @login_manager.request_loader
    def load_student_from_request(request):
        from ..modules.student.interface import find_student_by_id

        raw_id = request.headers.get(app.config.get("STUDENT_ID_HEADER", "X-Student-Id"))
        if not raw_id:
            return None
        try:
            student_id = int(raw_id)
        except (TypeError, ValueError):
            return None
        if not 1 <= student_id <= MAX_ID:
            return None
        return find_student_by_id(student_id)

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        raise AuthenticationError("Please provide a valid student identity to access this resource")


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)

    @app.route("/api/health")
    def health():
        return jsonify({"success": True, "status": "ok"})


def initialize_database(app: Flask) -> None:
    """Create database tables for all registered models."""

    from .. import models  # noqa: F401  (registers the mappers)

    db.create_all()
    app.logger.info("Database tables ensured at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))

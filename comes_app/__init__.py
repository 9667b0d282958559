"""Application factory for the ComES backend."""

from __future__ import annotations

from flask import Flask

from .config import Config
from .core.bootstrap import (
    check_configuration,
    configure_logging,
    initialize_database,
    register_blueprints,
    register_extensions,
    register_identity_loader,
)
from .core.error_handlers import register_error_handlers
from .core.extensions import db
from .utils.routing import IdConverter

__all__ = ["create_app", "db"]


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure a Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_class)
    # Keep JSON key order as written by the serializers
    app.json.sort_keys = False
    app.url_map.converters["id"] = IdConverter

    check_configuration(app)
    configure_logging(app)
    register_extensions(app)
    register_identity_loader(app)
    register_error_handlers(app)
    register_blueprints(app)

    with app.app_context():
        initialize_database(app)

    return app

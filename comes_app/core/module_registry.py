"""Utilities for declaratively registering application modules.

The registry allows each blueprint/module to be described with metadata so that
module discovery and registration can be automated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a blueprint-backed module is registered with the app."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None
    version: str = "1.0"

    def load_blueprint(self) -> Blueprint:
        """Import and return the blueprint described by this definition."""

        module = import_string(self.import_path)
        blueprint = getattr(module, self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        return blueprint

    def setup(self, app: Flask) -> None:
        """Run the optional ``setup_module`` hook of the module package."""

        module = import_string(self.import_path)
        setup_module = getattr(module, "setup_module", None)
        if callable(setup_module):
            setup_module(app)


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Register all modules in the provided iterable with the Flask app."""

    for module in modules:
        module.setup(app)
        blueprint = module.load_blueprint()
        app.register_blueprint(blueprint, url_prefix=module.url_prefix)
        app.logger.debug(
            "Registered module %s (version %s) at prefix %s",
            module.import_path,
            module.version,
            module.url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in ComES modules."""

    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("comes_app.modules.quiz", "blueprint", url_prefix="/api/v1/quizzes", version="1.0"),
    ModuleDefinition(
        "comes_app.modules.competition_team",
        "blueprint",
        url_prefix="/api/v1/competition-teams",
        version="1.0",
    ),
    ModuleDefinition("comes_app.modules.student", "blueprint", url_prefix="/api/v1/students", version="1.0"),
)

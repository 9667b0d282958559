"""Quiz module: authoring, listing, attempt scoring and leaderboards."""

from flask import Blueprint

blueprint = Blueprint('quiz', __name__)

# Module Metadata
module_metadata = {
    'name': 'Quizzes',
    'category': 'Engagement',
    'url_prefix': '/api/v1/quizzes',
    'enabled': True
}

def setup_module(app):
    """Attach routes and signal subscribers."""
    from .routes import api  # noqa: F401
    from .events import init_events
    init_events(app)

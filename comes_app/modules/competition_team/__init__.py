"""Competition teams: invitations, approvals and disbanding."""

from flask import Blueprint

blueprint = Blueprint('competition_team', __name__)

module_metadata = {
    'name': 'Competition Teams',
    'category': 'Community',
    'url_prefix': '/api/v1/competition-teams',
    'enabled': True
}

def setup_module(app):
    from .routes import api  # noqa: F401
    from .events import init_events
    init_events(app)

"""Student directory: identity lookups for team invitations."""

from flask import Blueprint

blueprint = Blueprint('student', __name__)

module_metadata = {
    'name': 'Student Directory',
    'category': 'Community',
    'url_prefix': '/api/v1/students',
    'enabled': True
}

def setup_module(app):
    from .routes import api  # noqa: F401

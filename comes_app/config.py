# File: comes_app/config.py
# Application configuration read from the environment.

import os

# Project root: comes_app/ sits one level below it.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Default SQLite database file, used when DATABASE_URL is not set
DATABASE_PATH = os.path.join(BASE_DIR, "database", "comes.db")

DEFAULT_SECRET_KEY = 'default-secret-key-change-in-production'


class Config:
    """
    Configuration class for the Flask application.
    """
    APP_ENV = os.environ.get('APP_ENV', 'development')

    # Secret key for signing sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or DEFAULT_SECRET_KEY

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Pagination
    ITEMS_PER_PAGE = int(os.environ.get('ITEMS_PER_PAGE', 10))
    MAX_ITEMS_PER_PAGE = 100

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON = os.environ.get('LOG_JSON', 'false').lower() == 'true'

    # Header carrying the calling student's id (set by the upstream auth layer)
    STUDENT_ID_HEADER = 'X-Student-Id'

    # Make sure the database directory exists for the default SQLite file
    if SQLALCHEMY_DATABASE_URI.startswith('sqlite:///'):
        os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)


def validate_config(config) -> None:
    """Reject unsafe settings when running in production."""

    if config.get('APP_ENV') != 'production':
        return

    if not os.environ.get('DATABASE_URL'):
        raise RuntimeError('Environment variable DATABASE_URL is required in production')
    if config.get('SECRET_KEY') == DEFAULT_SECRET_KEY:
        raise RuntimeError('SECRET_KEY must be changed in production')

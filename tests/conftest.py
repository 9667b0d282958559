import pytest

from comes_app import create_app, db
from comes_app.config import Config
from comes_app.models import Student


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_DIR = None
    LOG_LEVEL = 'WARNING'


@pytest.fixture
def app():
    # Requests must not share an app context: Flask-Login caches the caller on g
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_student(app):
    counter = {'n': 0}

    def _make(name=None, **overrides):
        counter['n'] += 1
        n = counter['n']
        student = Student(
            name=name or f'Student {n}',
            email=overrides.pop('email', f'student{n}@example.com'),
            username=overrides.pop('username', f'eg_2024_{n:04d}'),
            registration_no=overrides.pop('registration_no', f'EG/2024/{n:04d}'),
            batch='2024',
            **overrides,
        )
        with app.app_context():
            db.session.add(student)
            db.session.commit()
            db.session.refresh(student)
        return student

    return _make


def as_student(student_or_id):
    student_id = getattr(student_or_id, 'student_id', student_or_id)
    return {'X-Student-Id': str(student_id)}


def quiz_payload(title='General Knowledge', questions=None, **extra):
    payload = {
        'title': title,
        'description': 'A short quiz',
        'questions': questions or [
            {
                'question_text': 'What is 2 + 2?',
                'answers': [
                    {'text': '3', 'is_correct': False},
                    {'text': '4', 'is_correct': True},
                    {'text': '5', 'is_correct': False},
                    {'text': '22', 'is_correct': False},
                ],
                'time_limit_seconds': 20,
                'marks': 10,
            },
            {
                'question_text': 'Capital of Sri Lanka?',
                'answers': [
                    {'text': 'Kandy', 'is_correct': False},
                    {'text': 'Galle', 'is_correct': False},
                    {'text': 'Sri Jayawardenepura Kotte', 'is_correct': True},
                    {'text': 'Jaffna', 'is_correct': False},
                ],
                'time_limit_seconds': 30,
                'marks': 5,
            },
        ],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def row_count(app):
    def _count(model, **filters):
        with app.app_context():
            return model.query.filter_by(**filters).count()

    return _count

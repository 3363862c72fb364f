import pytest
import os
import tempfile
from datetime import timedelta
from flask_jwt_extended import create_access_token

# Keep test logs out of the working tree; must be set before synccircle is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='synccircle-test-logs-'))

from synccircle import create_app, db, cache
from synccircle.models import User, Space, SpaceMember, Form
from synccircle.models.space_member import SpaceRole

class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = 'test-jwt-secret-key-long-enough-for-hs256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    CACHE_TYPE = 'SimpleCache'

QUESTIONS = [
    {'id': 'q1', 'type': 'text', 'title': 'What did you work on?', 'required': True},
    {'id': 'q2', 'type': 'rating', 'title': 'How was your week?', 'required': True, 'maxRating': 5},
    {'id': 'q3', 'type': 'multiple-choice', 'title': 'Mood', 'required': False,
     'options': ['Great', 'Okay', 'Rough']},
    {'id': 'q4', 'type': 'textarea', 'title': 'Anything else?', 'required': False},
]

@pytest.fixture(scope='function')
def app():
    """Fresh application with an empty in-memory database."""
    _app = create_app(TestConfig)

    with _app.app_context():
        db.create_all()

    yield _app

    with _app.app_context():
        cache.clear()
        db.session.remove()
        db.drop_all()

@pytest.fixture(scope='function')
def app_context(app):
    with app.app_context() as ctx:
        yield ctx

@pytest.fixture(scope='function')
def session(app_context):
    yield db.session
    db.session.rollback()

@pytest.fixture(scope='function')
def client(app):
    return app.test_client()

def _make_user(session, username, first_name=None):
    user = User(username=username, first_name=first_name, email=f'{username}@example.com')
    user.set_password('password123')
    session.add(user)
    session.commit()
    return user

@pytest.fixture(scope='function')
def admin_user(session):
    return _make_user(session, 'alice', 'Alice')

@pytest.fixture(scope='function')
def member_user(session):
    return _make_user(session, 'bob', 'Bob')

@pytest.fixture(scope='function')
def outsider_user(session):
    return _make_user(session, 'mallory', 'Mallory')

@pytest.fixture(scope='function')
def space(session, admin_user, member_user):
    """A space administered by alice with bob as participant."""
    space = Space(name='Platform Team', owner_id=admin_user.id)
    session.add(space)
    session.flush()
    session.add_all([
        SpaceMember(space_id=space.id, user_id=admin_user.id, role=SpaceRole.ADMIN),
        SpaceMember(space_id=space.id, user_id=member_user.id, role=SpaceRole.PARTICIPANT),
    ])
    session.commit()
    return space

@pytest.fixture(scope='function')
def form(session, space, admin_user):
    form = Form(
        title='Weekly check-in',
        description='How did the week go?',
        space_id=space.id,
        created_by=admin_user.id,
        questions=[dict(q) for q in QUESTIONS],
        frequency='weekly',
        send_time='09:00',
    )
    session.add(form)
    session.commit()
    return form

@pytest.fixture(scope='function')
def auth_headers(app):
    """Factory returning bearer headers for a user."""
    def _headers(user):
        with app.app_context():
            token = create_access_token(identity=user.username)
        return {'Authorization': f'Bearer {token}'}
    return _headers

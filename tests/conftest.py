"""
Pytest configuration and fixtures for testing the Translation API.
"""

import os
import sys
import pytest
import fakeredis
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from translations_api import create_app, db
from translations_api.models import User, Locale, Tag, Translation
from translations_api.services.translations import TranslationService

fake = Faker()


@pytest.fixture(scope='session')
def redis_client():
    """In-process Redis stand-in shared by the whole test session."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(scope='session')
def app(redis_client):
    """Create application for testing."""
    app = create_app(
        'testing',
        overrides={'JWT_SECRET_KEY': 'test-secret-key-for-testing'},
        redis_client=redis_client
    )

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app, redis_client):
    """Start every test from empty tables and an empty cache."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        redis_client.flushall()
        yield db.session
        db.session.rollback()


@pytest.fixture
def export_cache(app):
    return app.extensions['export_cache']


@pytest.fixture
def service(db_session, export_cache):
    """Translation service bound to the test cache (inside an app context)."""
    return TranslationService(export_cache)


def _create_user(password='testpassword123', **overrides):
    """Helper to create a user with sensible defaults."""
    data = {
        'name': fake.name(),
        'email': fake.unique.email().lower(),
    }
    data.update(overrides)
    user = User(**data)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'password': password,
    }


@pytest.fixture
def test_user(app, db_session):
    """Create a test user."""
    with app.app_context():
        return _create_user()


def _get_token(client, email, password):
    """Login and return the bearer token."""
    resp = client.post('/api/auth/login', json={
        'email': email,
        'password': password,
    })
    data = resp.get_json()
    if resp.status_code != 200 or not data or not data.get('token'):
        raise RuntimeError(f"Login failed: status={resp.status_code}, body={data}")
    return data['token']


@pytest.fixture
def auth_headers(client, test_user):
    """Get authentication headers for test user."""
    token = _get_token(client, test_user['email'], test_user['password'])
    return {'Authorization': f'Bearer {token}'}


def _create_locale(code, name):
    locale = Locale(code=code, name=name)
    db.session.add(locale)
    db.session.commit()
    return {'id': locale.id, 'code': locale.code, 'name': locale.name}


@pytest.fixture
def en_locale(app, db_session):
    with app.app_context():
        return _create_locale('en', 'English')


@pytest.fixture
def fr_locale(app, db_session):
    with app.app_context():
        return _create_locale('fr', 'French')


@pytest.fixture
def tags(app, db_session):
    """Create mobile/web/desktop tags; returns {name: id}."""
    with app.app_context():
        created = {}
        for name in ('mobile', 'web', 'desktop'):
            tag = Tag(name=name)
            db.session.add(tag)
            db.session.commit()
            created[name] = tag.id
        return created


@pytest.fixture
def make_translation(app, db_session):
    """Factory inserting a translation directly, bypassing the service."""
    def _make(locale_id, key=None, value=None, tag_ids=()):
        with app.app_context():
            translation = Translation(
                locale_id=locale_id,
                key=key or f"{fake.unique.word()}.{fake.unique.word()}",
                value=value if value is not None else fake.sentence()
            )
            if tag_ids:
                translation.tags = Tag.query.filter(Tag.id.in_(tag_ids)).all()
            db.session.add(translation)
            db.session.commit()
            return {
                'id': translation.id,
                'locale_id': translation.locale_id,
                'key': translation.key,
                'value': translation.value,
            }
    return _make

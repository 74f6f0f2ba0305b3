from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from expense_assistant.core.config import Settings
from expense_assistant.db.dal import Database
from expense_assistant.main import create_app
from expense_assistant.models.constants import SESSION_COOKIE_NAME
from expense_assistant.services.dates import utcnow


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    """Settings pointing at a fresh SQLite file per test."""
    settings = Settings(data_dir=tmp_path, db_path=tmp_path / "test.sqlite3", debug=False)
    settings.init_post_load()
    return settings


@pytest.fixture(name="app")
def app_fixture(settings):
    return create_app(settings_override=settings)


@pytest.fixture(name="db")
def db_fixture(app, settings):
    # app fixture applies migrations before the DAL is used
    return Database(settings.db_path)


@pytest.fixture(name="client")
def client_fixture(app):
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="user_id")
def user_id_fixture(db):
    return db.create_user(email="alice@example.com", name="Alice")


@pytest.fixture(name="session_token")
def session_token_fixture(db, user_id):
    return db.create_session(user_id, utcnow() + timedelta(days=1))


@pytest.fixture(name="auth_client")
def auth_client_fixture(client, session_token):
    """Test client carrying a live session cookie."""
    client.cookies.set(SESSION_COOKIE_NAME, session_token)
    return client

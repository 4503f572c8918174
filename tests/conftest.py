"""Shared fixtures.

Settings are read once at import time, so the environment is prepared before
any prayerboard module is imported.
"""

import os

os.environ["SITE_PASSWORD"] = "site-secret"
os.environ["ADMIN_PASSWORD"] = "admin-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUPABASE_URL"] = "http://localhost:54321"
os.environ["SUPABASE_KEY"] = "test-anon-key"

import pytest
from fastapi.testclient import TestClient

from prayerboard.core.session import SessionStore, get_session_store
from prayerboard.database.supabase_client import get_supabase
from prayerboard.main import app
from prayerboard.modules.photos.url_cache import url_cache

from tests.fake_supabase import FakeSupabase

SITE_PASSWORD = "site-secret"
ADMIN_PASSWORD = "admin-secret"


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def client(fake_db, store):
    url_cache.clear()
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    url_cache.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/v1/auth/login", json={"password": SITE_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, auth_headers):
    response = client.post(
        "/api/v1/auth/admin-login", json={"password": ADMIN_PASSWORD}, headers=auth_headers
    )
    assert response.status_code == 200
    return auth_headers

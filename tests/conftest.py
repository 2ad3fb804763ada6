import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at throwaway locations first.
_TMP = Path(tempfile.mkdtemp(prefix="azport-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-pass-123"
os.environ["PUBLIC_DIR"] = str(_TMP / "public")
os.environ["LOCALES_DIR"] = str(_TMP / "locales")

import pytest
from fastapi.testclient import TestClient

from azport.core.rate_limiter import login_throttle
from azport.database import Base, SessionLocal, engine
from azport.main import app
from azport.services.catalog_store import CatalogStore, get_catalog_store
from azport.services.schema_initializer import initialize_database
from azport.services.translation_store import TranslationStore, get_translation_store

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"


@pytest.fixture
def seeded_db():
    """Fresh schema with default seed data."""
    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(seeded_db):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def catalog_store(tmp_path) -> CatalogStore:
    return CatalogStore(tmp_path / "public")


@pytest.fixture
def translation_store(tmp_path) -> TranslationStore:
    return TranslationStore(tmp_path / "locales", ["en", "az", "ru"])


@pytest.fixture
def client(seeded_db, catalog_store, translation_store):
    login_throttle.clear()
    app.dependency_overrides[get_catalog_store] = lambda: catalog_store
    app.dependency_overrides[get_translation_store] = lambda: translation_store
    yield TestClient(app)
    app.dependency_overrides.clear()
    login_throttle.clear()


@pytest.fixture
def token(client) -> str:
    resp = client.post("/api/auth", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


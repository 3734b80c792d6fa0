import os
import tempfile
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

# Ensure tests always use SQLite and a fast bcrypt cost
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_jobtrack.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from app.database import Base, get_db
from app.main import app
from app import models  # noqa: F401  registers tables


@pytest.fixture(scope="session")
def test_db_url():
    # Use a temporary SQLite file to persist across tests within a session
    db_fd, db_path = tempfile.mkstemp(prefix="test_jobtrack_", suffix=".db")
    os.close(db_fd)
    url = f"sqlite:///{db_path}"
    yield url
    try:
        os.remove(db_path)
    except FileNotFoundError:
        pass


@pytest.fixture()
def db_session(test_db_url):
    engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    # Create all tables
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
    # Ensure file handles are released on Windows
    engine.dispose()


@pytest.fixture()
def client(db_session):
    # Override the dependency to use the test session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _register(client, email="user@example.com", password="password123", name=None):
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    return client.post("/api/auth/register", json=body)


def _login(client, email="user@example.com", password="password123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture()
def auth_headers(client):
    """Factory: register + login a user and return its Authorization header."""
    def _make(email="owner@example.com", password="password123"):
        _register(client, email, password)
        token = _login(client, email, password).json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _make

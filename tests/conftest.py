import os
import tempfile

# Settings are read at import time, so the environment has to be ready first
_db_dir = tempfile.mkdtemp(prefix="tidyhome-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ALLOW_SIGNUPS"] = "true"

import time  # noqa: E402
import uuid  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tidyhome.database import Base, SessionLocal, engine  # noqa: E402
from tidyhome.main import app  # noqa: E402
from tidyhome.models import User  # noqa: E402

PASSWORD = "correct_horse"


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def owner(db):
    """A user row created directly, for service-level tests."""
    user = User(username=f"owner_{uuid.uuid4().hex[:8]}", hashed_password="not-a-real-hash")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_owner(db):
    user = User(username=f"other_{uuid.uuid4().hex[:8]}", hashed_password="not-a-real-hash")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def register(client):
    """Register through the API and return bearer headers."""
    def _register(username: str, password: str = PASSWORD) -> dict:
        r = client.post("/api/v1/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _register


@pytest.fixture
def auth_headers(register):
    return register(f"user_{uuid.uuid4().hex[:8]}")


@pytest.fixture
def other_headers(register):
    return register(f"other_{uuid.uuid4().hex[:8]}")


@pytest.fixture
def local_timezone(monkeypatch):
    """Switch the process timezone; restored after the test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def _set(name: str):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()

"""Pytest configuration and fixtures."""

import os
import tempfile

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/user_auth", "/user_auth_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
    os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="userauth-uploads-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from userauth import models  # noqa: E402, F401
from userauth.config import Settings, get_settings  # noqa: E402
from userauth.database import Base, get_db  # noqa: E402
from userauth.main import app  # noqa: E402
from userauth.services.auth import TokenSigner  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FILE_PATH = "http://testserver/uploads/"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

ANN = {
    "name": "Ann Lee",
    "email": "ann@x.com",
    "password": "secret",
    "phone": "10",
    "address": "1 Rd",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def upload_dir(tmp_path):
    """Per-test directory for stored images."""
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    """Settings with a throwaway upload directory and a cheap bcrypt cost."""
    return Settings(
        database_url=SQLALCHEMY_DATABASE_URL,
        secret_key="test-secret",
        bcrypt_rounds=4,
        file_path=FILE_PATH,
        upload_dir=str(upload_dir),
    )


@pytest.fixture
def signer(settings):
    return TokenSigner(settings.secret_key, settings.jwt_algorithm)


@pytest.fixture(scope="function")
def client(db, settings):
    """Create a test client with database and settings overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def image_file(filename: str = "ann.png"):
    """Multipart ``files`` argument carrying a profile image."""
    return {"image": (filename, PNG_BYTES, "image/png")}


@pytest.fixture
def registered_user(client):
    """Register Ann and return the created record."""
    response = client.post("/api/v1/register", data=ANN, files=image_file())
    assert response.status_code == 201
    return response.json()["data"]["newUser"]


@pytest.fixture
def auth_headers(client, registered_user):
    """Login as Ann and return bearer auth headers."""
    response = client.post(
        "/api/v1/login", json={"email": ANN["email"], "password": ANN["password"]}
    )
    assert response.status_code == 200
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}

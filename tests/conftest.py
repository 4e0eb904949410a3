"""
Pytest configuration and fixtures for testing.
"""
import itertools
import json
import os
import tempfile
from datetime import datetime, timedelta

# Settings are read at import time; give them something before korelium loads.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="korelium-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from korelium.core.security import get_password_hash
from korelium.db.base import Base
from korelium.db.deps import get_db
from korelium.integrations.storage import LocalImageStorage, get_image_storage
from korelium.main import app
from korelium.modules.admins.models import LocalAdmin
from korelium.modules.courses.models import Course


# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "password123"


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    """Image storage rooted in a per-test directory."""
    return LocalImageStorage(root=tmp_path / "uploads", url_prefix="uploads")


@pytest.fixture(scope="function")
def client(db, storage):
    """FastAPI test client with test database and storage."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_course(db):
    """Factory for courses with strictly increasing created_at."""
    base_time = datetime(2024, 1, 1, 12, 0, 0)
    counter = itertools.count()

    def _make(title, category="Web Development", **fields):
        step = next(counter)
        if "tags" in fields and isinstance(fields["tags"], list):
            fields["tags"] = json.dumps(fields["tags"])
        if "what_youll_learn" in fields and isinstance(fields["what_youll_learn"], list):
            fields["what_youll_learn"] = json.dumps(fields["what_youll_learn"])
        fields.setdefault("slug", f"{title.lower().replace(' ', '-')}-{step}")
        created = base_time + timedelta(minutes=step)
        course = Course(
            title=title,
            category=category,
            created_at=created,
            updated_at=created,
            **fields,
        )
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make


def _make_admin(db, email, role, name="Test Admin"):
    admin = LocalAdmin(
        name=name,
        email=email,
        password_hash=get_password_hash(PASSWORD),
        role=role,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def super_admin(db):
    return _make_admin(db, "root@korelium.org", "super_admin", name="Root")


@pytest.fixture
def course_creator(db):
    return _make_admin(db, "creator@korelium.org", "course_creator", name="Creator")


@pytest.fixture
def course_manager(db):
    return _make_admin(db, "manager@korelium.org", "course_manager", name="Manager")


@pytest.fixture
def comment_manager(db):
    return _make_admin(db, "moderator@korelium.org", "comment_manager", name="Moderator")


def login(client, admin, password=PASSWORD):
    response = client.post(
        "/api/admin/login",
        json={"email": admin.email, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def super_admin_headers(client, super_admin):
    return login(client, super_admin)


@pytest.fixture
def creator_headers(client, course_creator):
    return login(client, course_creator)


@pytest.fixture
def manager_headers(client, course_manager):
    return login(client, course_manager)


@pytest.fixture
def login_as(client):
    """Log an admin in and return bearer headers."""
    def _login(admin, password=PASSWORD):
        return login(client, admin, password)
    return _login

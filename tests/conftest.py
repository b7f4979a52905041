import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="swachhsnap-media-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from swachhsnap.core.database import Base, get_db, get_session_factory
from swachhsnap.core.exceptions import MediaUploadError
from swachhsnap.core.security import create_access_token, get_password_hash
from swachhsnap.main import app
from swachhsnap.models import User, UserRole
from swachhsnap.services.media_service import get_media_storage


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

# Neither City Hospital nor Global School is within 1.5 km of this point.
FAR_AWAY = (12.95, 77.60)


class FakeStorage:
    """In-memory upload backend that records every upload."""

    def __init__(self):
        self.uploads = []
        self.fail_with = None

    def upload(self, data, path, content_type):
        if self.fail_with:
            raise MediaUploadError(self.fail_with)
        self.uploads.append((path, content_type, data))
        return f"https://cdn.test/{path}"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: storage
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(role, name, email, password="secret123", is_active=True):
        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            name=name,
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def citizen(make_user):
    return make_user(UserRole.CITIZEN, "John Doe", "john@swachhsnap.in")


@pytest.fixture
def other_citizen(make_user):
    return make_user(UserRole.CITIZEN, "Asha Rao", "asha@swachhsnap.in")


@pytest.fixture
def sweeper(make_user):
    return make_user(UserRole.SWEEPER, "Rajesh Kumar", "rajesh@swachhsnap.in")


@pytest.fixture
def other_sweeper(make_user):
    return make_user(UserRole.SWEEPER, "Meena Das", "meena@swachhsnap.in")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, "Ward Admin", "admin@swachhsnap.in")


def token_for(user):
    return create_access_token({"sub": str(user.id), "role": user.role.value})


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {token_for(user)}"}

    return _auth_headers


@pytest.fixture
def user_token():
    return token_for


@pytest.fixture
def report_complaint(client, auth_headers):
    """Post a complaint as a citizen with a PNG before-photo."""

    def _report(user, latitude=FAR_AWAY[0], longitude=FAR_AWAY[1], category="garbage",
                description="Overflowing bin"):
        return client.post(
            "/citizen/complaints",
            headers=auth_headers(user),
            data={
                "category": category,
                "latitude": str(latitude),
                "longitude": str(longitude),
                "description": description,
            },
            files={"photo": ("before.png", PNG_BYTES, "image/png")},
        )

    return _report


@pytest.fixture
def upload_proof(client, auth_headers):
    """Post an after-photo as a sweeper."""

    def _upload(user, complaint_id):
        return client.post(
            f"/sweeper/tasks/{complaint_id}/proof",
            headers=auth_headers(user),
            files={"photo": ("after.png", PNG_BYTES, "image/png")},
        )

    return _upload

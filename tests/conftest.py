"""Pytest configuration and fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cinexnema.auth import create_access_token, hash_password
from cinexnema.database import Base, get_db
from cinexnema.dependencies import get_optional_storage, get_storage
from cinexnema.errors import UpstreamFailure
from cinexnema.main import app
from cinexnema.models import User, UserRole
from cinexnema.services.storage import BucketResult, SignedUpload

PUBLIC_BASE = "http://storage.test"


class FakeStorage:
    """In-memory stand-in for ObjectStorage; records what the API asked for."""

    def __init__(self, public_buckets=("covers", "banners", "thumbnails", "screenshots")):
        self.public_buckets = set(public_buckets)
        self.buckets = {"videos", "covers"}
        self.objects = {}
        self.signed_uploads = []
        self.removed = []
        self.fail_remove = False

    def is_public(self, bucket):
        return bucket in self.public_buckets

    def public_url(self, bucket, path):
        return f"{PUBLIC_BASE}/{bucket}/{path}"

    def create_signed_upload(self, bucket, path):
        created = bucket not in self.buckets
        self.buckets.add(bucket)
        self.signed_uploads.append((bucket, path))
        return SignedUpload(
            bucket=bucket,
            path=path,
            upload_url=f"{PUBLIC_BASE}/{bucket}/{path}?X-Amz-Signature=fake",
            public_url=self.public_url(bucket, path),
            expires_in=7200,
            created_bucket=created,
        )

    def create_signed_url(self, bucket, path, expires_in=None):
        return f"{PUBLIC_BASE}/{bucket}/{path}?X-Amz-Expires={expires_in}"

    def upload_bytes(self, bucket, path, data, content_type):
        self.objects[(bucket, path)] = (data, content_type)
        return self.public_url(bucket, path)

    def remove(self, bucket, paths):
        if self.fail_remove:
            raise UpstreamFailure("storage down", reason="STORAGE_ERROR")
        for path in paths:
            self.removed.append((bucket, path))
            self.objects.pop((bucket, path), None)

    def ensure_buckets(self, buckets):
        results = []
        for b in buckets:
            status = "exists" if b in self.buckets else "created"
            self.buckets.add(b)
            results.append(BucketResult(bucket=b, status=status, public=self.is_public(b)))
        return results

    def list_buckets(self):
        return sorted(self.buckets)


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(db_engine, storage):
    """TestClient wired to the in-memory database and the fake storage."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_optional_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db_session, email, role):
    user = User(email=email, password=hash_password("secret123"), full_name=email.split("@")[0], role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def creator(db_session):
    return _make_user(db_session, "creator@example.com", UserRole.CREATOR.value)


@pytest.fixture
def other_creator(db_session):
    return _make_user(db_session, "other@example.com", UserRole.CREATOR.value)


@pytest.fixture
def admin(db_session):
    return _make_user(db_session, "admin@example.com", UserRole.ADMIN.value)


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def headers_for():
    return auth_headers

"""Shared fixtures: in-memory SQLite database, API client and auth headers."""

import os

# Must be set before app modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.infrastructure.database import Base, get_db
from app.application.services.auth_service import create_access_token, create_user
from app.domain.models.product import Product
from app.domain.models.upload import InventoryUpload
from app.domain.models.user import ROLE_ADMIN, ROLE_VIEWER
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.upload_repository import SQLAlchemyUploadRepository

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def product_repo(db):
    return SQLAlchemyProductRepository(db, Product)


@pytest.fixture
def upload_repo(db):
    return SQLAlchemyUploadRepository(db, InventoryUpload)


def _auth_headers(user) -> dict:
    token = create_access_token(data={"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db):
    admin = create_user(db, name="Admin", email="admin@test.com", password="secret", role=ROLE_ADMIN)
    return _auth_headers(admin)


@pytest.fixture
def viewer_headers(db):
    viewer = create_user(db, name="Viewer", email="viewer@test.com", password="secret", role=ROLE_VIEWER)
    return _auth_headers(viewer)

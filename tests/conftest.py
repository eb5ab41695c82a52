"""
Pytest fixtures for the Fornecedor API.

Every test gets a fresh in-memory SQLite database shared by the app (through
a get_db override) and by the test itself (db_session).
"""

import os

# Set environment variables for tests before settings are cached
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import fornecedor_api.models  # noqa: F401
from fornecedor_api.core.database import Base, get_db
from fornecedor_api.identity.service import IdentityService
from fornecedor_api.main import create_app
from fornecedor_api.web.policies import EXCLUIR_FORNECEDOR

DEFAULT_PASSWORD = "Senha@123"


@pytest.fixture
def engine():
    """Create an in-memory database with every table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """Database session for direct setup and assertions."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    """Application wired to the test database."""
    application = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post("/registro", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    """Headers for an authenticated caller without extra claims."""
    body = register(client, "usuario@teste.com")
    return bearer(body["access_token"])


@pytest.fixture
def admin_headers(client, session_factory):
    """Headers for a caller holding the ExcluirFornecedor claim."""
    register(client, "admin@teste.com")

    db = session_factory()
    try:
        result = IdentityService(db).add_claim("admin@teste.com", EXCLUIR_FORNECEDOR, "true")
        assert result.succeeded
    finally:
        db.close()

    # Claims are read at issuance, so log in again for a token carrying it
    body = login(client, "admin@teste.com")
    return bearer(body["access_token"])


@pytest.fixture
def fornecedor_payload():
    return {"nome": "Acme", "documento": "12345678901"}


@pytest.fixture
def created_fornecedor(client, auth_headers, fornecedor_payload):
    """A fornecedor created through the API."""
    response = client.post("/fornecedor", json=fornecedor_payload, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()

"""
Shared fixtures.

Test strategy:
1. API tests go through FastAPI's TestClient against an in-memory SQLite database
2. The Groq client is replaced with a fake; no real API calls in tests
"""
import os
import tempfile

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="invoicely-uploads-")
os.environ["GROQ_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import invoicely.models  # noqa: F401 - register models
from invoicely.ai import categorizer, descriptions
from invoicely.api.deps import get_db
from invoicely.core.security import get_password_hash
from invoicely.db.base import Base
from invoicely.db.session import build_engine
from invoicely.main import app
from invoicely.models.user import User


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    session.add(User(username="owner", password_hash=get_password_hash("owner-password")))
    session.commit()
    yield session
    session.close()


@pytest.fixture
def user_id(db):
    return db.query(User).filter(User.username == "owner").one().id


@pytest.fixture
def client(session_factory, db):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class FakeGroqClient:
    """Stands in for GroqClient; returns a canned completion."""

    def __init__(self, response=None, available=True):
        self.response = response
        self.available = available
        self.calls = []

    def is_available(self):
        return self.available

    def complete(self, messages, json_mode=False, max_retries=2):
        self.calls.append({"messages": messages, "json_mode": json_mode})
        return self.response


@pytest.fixture
def fake_ai(monkeypatch):
    """Install a FakeGroqClient for both AI helpers and return it."""

    def install(response=None, available=True):
        fake = FakeGroqClient(response=response, available=available)
        monkeypatch.setattr(categorizer, "get_groq_client", lambda: fake)
        monkeypatch.setattr(descriptions, "get_groq_client", lambda: fake)
        return fake

    return install


@pytest.fixture
def invoice_payload(user_id):
    def build(**overrides):
        payload = {
            "userId": user_id,
            "clientName": "Acme Corp",
            "invoiceNumber": "INV-001",
            "status": "pending",
            "dueDate": "2099-01-31",
            "template": "modern",
            "lineItems": [
                {"description": "Design work", "quantity": 2, "unitPrice": 10, "amount": 20},
                {"description": "Hosting", "quantity": 1, "unitPrice": 5, "amount": 5},
            ],
        }
        payload.update(overrides)
        return payload

    return build

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chorechart.db import Base, GetDb
from chorechart.main import app
from chorechart.modules.auth.models import User
from chorechart.modules.auth.service import HashPassword

API_KEY = "test-api-key"
USERNAME = "parent"
PASSWORD = "correct-horse-battery"


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_user(db):
    user = User(Username=USERNAME, PasswordHash=HashPassword(PASSWORD), ApiKey=API_KEY)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def client(session_factory, seeded_user, monkeypatch):
    monkeypatch.delenv("CHORES_DEPENDENT_POLICY", raising=False)
    monkeypatch.delenv("AUTH_REALM", raising=False)

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[GetDb] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Token token={API_KEY}"}

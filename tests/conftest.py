import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from academy.core.db import create_tables, get_db
from academy.core.security import create_token
from academy.main import app
from academy.services.bootstrap import initialize_database


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = _memory_engine()
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    initialize_database(db=db)
    return db


def _client_for(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def client(engine, seeded):
    with _client_for(engine) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def bare_client():
    """Client over a database with no tables at all"""
    engine = _memory_engine()
    with _client_for(engine) as c:
        yield c
    app.dependency_overrides.clear()
    engine.dispose()


def auth_header(user_id: str, roles: list[str], name: str) -> dict:
    return {"Authorization": f"Bearer {create_token(sub=user_id, roles=roles, name=name)}"}


@pytest.fixture
def admin():
    return auth_header("1", ["admin"], "Admin One")


@pytest.fixture
def teacher():
    # نهاد teaches Saturday-13 and Saturday-15
    return auth_header("6", ["teacher"], "نهاد")


@pytest.fixture
def other_teacher():
    return auth_header("7", ["teacher"], "حازم")


@pytest.fixture
def manager():
    return auth_header("5", ["upper-management"], "MC")

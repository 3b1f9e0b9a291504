"""
Shared fixtures for the meetcal test suite.

Every test gets its own in-memory SQLite database, so committed data never
leaks between tests.
"""

from typing import Callable, Dict, Generator, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from meetcal.api.dependencies.database import get_db
from meetcal.auth import create_access_token
from meetcal.core.ulid_helper import generate_ulid
from meetcal.database import Base
from meetcal.main import create_app

# Import models so Base.metadata is populated for create_all.
import meetcal.models  # noqa: F401
from meetcal.models.user import User

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def enforce_foreign_keys(engine: Engine) -> None:
    """Turn on SQLite foreign key checks, as PostgreSQL always has them."""
    # StaticPool hands every session the same connection, so the pragma sticks
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory committing a user row; returns the User."""
    counter = {"n": 0}

    def _make_user(
        name: Optional[str] = None,
        timezone: str = "UTC",
        user_id: Optional[str] = None,
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            id=user_id or generate_ulid(),
            name=name or f"User {n}",
            email=f"user{n}-{generate_ulid().lower()}@example.com",
            timezone=timezone,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    app = create_app(database_url=TEST_DATABASE_URL)

    def _get_test_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    def _auth_headers(user: User) -> Dict[str, str]:
        token = create_access_token({"sub": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

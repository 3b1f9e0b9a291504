# meetcal/api/dependencies/database.py
"""
Database-related dependencies.

The session factory is created by the application lifespan and lives on
``app.state``; nothing here opens an engine of its own.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.session_factory


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        Database session that will be closed after use
    """
    db = get_session_factory(request)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

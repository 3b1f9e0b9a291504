"""Session helpers that do not depend on how the session was bound."""

from __future__ import annotations

from sqlalchemy.exc import UnboundExecutionError
from sqlalchemy.orm import Session


def get_dialect_name(session: Session, default: str = "sqlite") -> str:
    """
    Name of the SQL dialect behind ``session`` ("postgresql", "sqlite", ...).

    Returns ``default`` for a session with no bind.
    """
    try:
        bind = session.get_bind()
    except UnboundExecutionError:
        return default
    return getattr(getattr(bind, "dialect", None), "name", None) or default

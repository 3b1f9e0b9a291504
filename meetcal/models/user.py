# meetcal/models/user.py
"""
User model for meetcal.

Accounts are provisioned by the identity collaborator; this table holds only
what scheduling needs: a stable id, a display name, an avatar and a timezone for
resolving "today".
"""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base


class User(Base):
    """
    Registered user.

    Attributes:
        id: ULID primary key
        name: Display name shown in group views
        email: Unique email address
        timezone: IANA timezone name used for "today"
        profile_img: Avatar URL from the identity provider, if any
        created_at: Account creation timestamp
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(100), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")
    profile_img = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"

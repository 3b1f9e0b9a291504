"""Meet group and membership models."""

from datetime import date, datetime

from sqlalchemy import TIMESTAMP, Date, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class MeetGroup(Base):
    """A named group of users anchored to a start date, with one owner."""

    __tablename__ = "meet_groups"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted groups.
    __table_args__ = {"sqlite_autoincrement": True}

    # Store-assigned, monotonically increasing; list ordering relies on it.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<MeetGroup(id={self.id}, name={self.name!r}, owner={self.owner_id})>"


class GroupMember(Base):
    """Junction table for users participating in a meet group."""

    __tablename__ = "meet_members"

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("meet_groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,  # Index for faster lookups by user
    )
    joined_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<GroupMember(group={self.group_id}, user={self.user_id})>"

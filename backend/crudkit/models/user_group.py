"""UserGroup ORM — named role groups, many-to-many with users.

Invariants:
    - role is unique per group
    - membership rows are removed with either side (ON DELETE CASCADE)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, String, DateTime, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crudkit.db.base import Base

user_group_members = Table(
    "user_group_members",
    Base.metadata,
    Column(
        "user_id", Uuid,
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "user_group_id", Uuid,
        ForeignKey("user_groups.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class UserGroup(Base):
    """User group entity."""
    __tablename__ = "user_groups"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    users: Mapped[list["User"]] = relationship(
        "User", secondary=user_group_members,
        back_populates="groups", lazy="raise", passive_deletes=True,
    )

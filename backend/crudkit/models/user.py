"""User ORM — an account exposed through the generic REST actions.

Invariants:
    - id is UUID primary key (uuid4, generated client-side)
    - username and email are unique and non-nullable
    - groups is never lazy-loaded implicitly; resources eager-load it on `populate`
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crudkit.db.base import Base
from crudkit.models.user_group import user_group_members


class User(Base):
    """User entity."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    groups: Mapped[list["UserGroup"]] = relationship(
        "UserGroup", secondary=user_group_members,
        back_populates="users", lazy="raise", passive_deletes=True,
    )

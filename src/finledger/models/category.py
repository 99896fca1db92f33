"""Ledger category definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .journal import Journal
    from .user import User

NAME_MAX_LENGTH = 64


class Category(SQLModel, table=True):
    """User-defined label applied to journals for grouping and reporting."""

    __tablename__: ClassVar[str] = "category"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
        # Ids of destroyed categories are never handed out again.
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(index=True, nullable=False, max_length=NAME_MAX_LENGTH)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    journals: list["Journal"] = Relationship(
        back_populates="category",
        sa_relationship=relationship("Journal", back_populates="category"),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="categories"))

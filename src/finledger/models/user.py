"""User model used to scope ownership of categories and journals."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class User(SQLModel, table=True):
    """Account whose data is being accessed."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    categories = Relationship(
        back_populates="user",
        sa_relationship=relationship("Category", back_populates="user"),
    )
    journals = Relationship(
        back_populates="user",
        sa_relationship=relationship("Journal", back_populates="user"),
    )

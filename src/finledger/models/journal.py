"""SQLModel definitions for ledger journals."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .category import Category
    from .user import User

WITHDRAWAL = "withdrawal"
DEPOSIT = "deposit"
TRANSFER = "transfer"
JOURNAL_TYPES = (WITHDRAWAL, DEPOSIT, TRANSFER)


class Journal(SQLModel, table=True):
    """A single recorded financial transaction line."""

    __tablename__: ClassVar[str] = "journal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    description: str = Field(default="", max_length=255)
    amount: float = Field(nullable=False, description="Positive for inflow, negative for outflow")
    currency: str = Field(default="USD", max_length=3, description="ISO-4217 currency code")
    journal_type: str = Field(default=WITHDRAWAL, nullable=False, max_length=16, index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", index=True)

    category: "Category | None" = Relationship(
        back_populates="journals",
        sa_relationship=relationship("Category", back_populates="journals"),
    )
    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="journals"))

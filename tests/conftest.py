"""Pytest configuration and shared fixtures for FinLedger tests.

Database fixtures, test data factories and helpers for exercising the
category repository without touching a real application database.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

# Import all models to ensure they're registered with SQLModel metadata
from finledger.infra.repositories import SQLModelCategoryRepository
from finledger.models import WITHDRAWAL, Category, Journal, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session used by the data factories to seed rows."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one built by ``create_session_factory``."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def repo(session_factory) -> SQLModelCategoryRepository:
    """Category repository with default page size and USD reporting."""
    return SQLModelCategoryRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(db_session):
    """Factory for creating owners."""

    def _create_user(username: str) -> User:
        existing = db_session.exec(select(User).where(User.username == username)).first()
        if existing:
            return existing
        u = User(username=username)
        db_session.add(u)
        db_session.commit()
        db_session.refresh(u)
        return u

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """Default owner for scoping data."""
    return user_factory("tester")


@pytest.fixture
def other_user(user_factory) -> User:
    """A second owner whose data must never leak into ``user``'s results."""
    return user_factory("intruder")


@pytest.fixture
def category_factory(db_session, user):
    """Factory for creating test categories.

    Returns:
        Callable: Function that creates and persists Category instances
    """

    def _create_category(name: str = "Test Category", owner: User | None = None) -> Category:
        owner = owner or user
        category = Category(user_id=owner.id, name=name)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _create_category


@pytest.fixture
def journal_factory(db_session, user):
    """Factory for creating test journals.

    Returns:
        Callable: Function that creates and persists Journal instances
    """

    def _create_journal(
        amount: float,
        occurred_on: date | None = None,
        category: Category | None = None,
        journal_type: str = WITHDRAWAL,
        currency: str = "USD",
        description: str = "Test journal",
        owner: User | None = None,
    ) -> Journal:
        """Create a test journal.

        Args:
            amount: Signed amount (positive inflow, negative outflow)
            occurred_on: Journal date (defaults to today)
            category: Category to link, if any
            journal_type: withdrawal, deposit or transfer
            currency: ISO-4217 currency code
        """
        owner = owner or user
        journal = Journal(
            user_id=owner.id,
            occurred_on=occurred_on or date.today(),
            amount=amount,
            currency=currency,
            journal_type=journal_type,
            description=description,
            category_id=category.id if category else None,
        )
        db_session.add(journal)
        db_session.commit()
        db_session.refresh(journal)
        return journal

    return _create_journal

"""SQLModel implementation of Category repository."""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Iterator, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ...config import BaseConfig
from ...domain.dates import DateLike, DateRange, resolve_timezone
from ...domain.forms import CategoryData
from ...domain.repositories.category import CategoryExpense, CategoryRef
from ...errors import NotFoundError, StorageError, ValidationError
from ...logging_config import get_logger
from ...models.category import Category
from ...models.journal import DEPOSIT, WITHDRAWAL, Journal
from ...services.currency import CurrencyConverter

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation.

    Every operation opens its own session from ``session_factory`` and is
    scoped to the ``user_id`` passed in. SQLAlchemy failures are translated
    at the session boundary: integrity violations become ``ValidationError``,
    anything else becomes ``StorageError``.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        converter: CurrencyConverter | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        tz: tzinfo | None = None,
    ):
        """Initialize with a session factory."""
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.session_factory = session_factory
        self.converter = converter or CurrencyConverter()
        self.page_size = page_size
        self.tz = tz

    @classmethod
    def from_config(
        cls, session_factory: Callable[[], Session], config: BaseConfig
    ) -> "SQLModelCategoryRepository":
        """Build a repository using the reporting currency, page size and timezone from config."""
        return cls(
            session_factory,
            converter=CurrencyConverter.from_config(config),
            page_size=config.JOURNALS_PER_PAGE,
            tz=resolve_timezone(config.TIMEZONE),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find(self, category_id: int, *, user_id: int) -> Category:
        """Retrieve an owned category by ID or raise ``NotFoundError``."""
        with self._session("find") as session:
            category = self._owned(session, category_id, user_id)
            session.expunge(category)
            return category

    def find_by_name(self, name: str, *, user_id: int) -> Optional[Category]:
        """Retrieve an owned category by exact name."""
        with self._session("find_by_name") as session:
            obj = session.exec(
                select(Category).where(Category.user_id == user_id, Category.name == name.strip())
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_categories(self, *, user_id: int) -> list[Category]:
        """List owned categories ordered by name, ignoring case."""
        with self._session("get_categories") as session:
            rows = self._ordered_categories(session, user_id)
            session.expunge_all()
            return rows

    def count_journals(self, category: CategoryRef, *, user_id: int) -> int:
        """Count journals linked to the category; a destroyed category has none."""
        with self._session("count_journals") as session:
            category_id = self._linked_category_id(session, category, user_id)
            if category_id is None:
                return 0
            statement = (
                select(func.count())
                .select_from(Journal)
                .where(Journal.category_id == category_id)
            )
            return int(session.exec(statement).one())

    def get_journals(self, category: CategoryRef, page: int, *, user_id: int) -> list[Journal]:
        """Return one page of linked journals, newest first.

        Pages are 1-indexed; a page before the first or past the last is empty,
        and so is every page of a category instance that has since been destroyed.
        """
        with self._session("get_journals") as session:
            category_id = self._linked_category_id(session, category, user_id)
            if category_id is None or page < 1:
                return []
            statement = (
                select(Journal)
                .where(Journal.category_id == category_id)
                .order_by(Journal.occurred_on.desc(), Journal.id.desc())  # type: ignore
                .offset((page - 1) * self.page_size)
                .limit(self.page_size)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_latest_activity(self, category: CategoryRef, *, user_id: int) -> Optional[date]:
        """Return the most recent linked journal date, or None."""
        with self._session("get_latest_activity") as session:
            owned = self._owned(session, category, user_id)
            return session.exec(
                select(func.max(Journal.occurred_on)).where(Journal.category_id == owned.id)
            ).one()

    def get_first_activity(self, category: CategoryRef, *, user_id: int) -> Optional[date]:
        """Return the oldest linked journal date, or None."""
        with self._session("get_first_activity") as session:
            owned = self._owned(session, category, user_id)
            return session.exec(
                select(func.min(Journal.occurred_on)).where(Journal.category_id == owned.id)
            ).one()

    def get_without_category(self, start: DateLike, end: DateLike, *, user_id: int) -> list[Journal]:
        """List owned journals in [start, end] that carry no category."""
        period = self._range(start, end)
        with self._session("get_without_category") as session:
            statement = (
                select(Journal)
                .where(Journal.user_id == user_id)
                .where(Journal.category_id.is_(None))  # type: ignore
                .where(Journal.occurred_on >= period.start)
                .where(Journal.occurred_on <= period.end)
                .order_by(Journal.occurred_on.desc(), Journal.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def get_categories_and_expenses(
        self, start: DateLike, end: DateLike, *, user_id: int
    ) -> list[CategoryExpense]:
        """Pair every owned category with its withdrawal total in [start, end].

        Categories without matching journals are included with 0.0.
        """
        period = self._range(start, end)
        with self._session("get_categories_and_expenses") as session:
            categories = self._ordered_categories(session, user_id)
            totals = self._sums_by_category(session, user_id, period, WITHDRAWAL)
            session.expunge_all()
        return [
            CategoryExpense(category=c, amount=self._expense(totals.get(c.id, [])))
            for c in categories
        ]

    def spent_in_period(
        self, category: CategoryRef, start: DateLike, end: DateLike, *, user_id: int
    ) -> float:
        """Withdrawal total for one category in [start, end]."""
        period = self._range(start, end)
        with self._session("spent_in_period") as session:
            category_id = self._owned(session, category, user_id).id
            totals = self._sums_by_category(session, user_id, period, WITHDRAWAL, category_id)
        return self._expense(totals.get(category_id, []))

    def earned_in_period(
        self, category: CategoryRef, start: DateLike, end: DateLike, *, user_id: int
    ) -> float:
        """Deposit total for one category in [start, end]."""
        period = self._range(start, end)
        with self._session("earned_in_period") as session:
            category_id = self._owned(session, category, user_id).id
            totals = self._sums_by_category(session, user_id, period, DEPOSIT, category_id)
        return self.converter.total(totals.get(category_id, []))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def store(self, data: CategoryData, *, user_id: int) -> Category:
        """Create a new category; the name must be unique for the user."""
        cleaned = data.validate()
        with self._session("store") as session:
            self._ensure_name_available(session, cleaned.name, user_id)
            category = Category(user_id=user_id, name=cleaned.name)
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
        logger.info(
            "Category created",
            extra={"category_id": category.id, "user_id": user_id},
        )
        return category

    def update(self, category: CategoryRef, data: CategoryData, *, user_id: int) -> Category:
        """Apply new field values to an existing category."""
        cleaned = data.validate()
        with self._session("update") as session:
            owned = self._owned(session, category, user_id)
            self._ensure_name_available(session, cleaned.name, user_id, exclude_id=owned.id)
            owned.name = cleaned.name
            owned.updated_at = datetime.now(timezone.utc)
            session.add(owned)
            session.commit()
            session.refresh(owned)
            session.expunge(owned)
        logger.info(
            "Category updated",
            extra={"category_id": owned.id, "user_id": user_id},
        )
        return owned

    def destroy(self, category: CategoryRef, *, user_id: int) -> bool:
        """Detach all linked journals, then delete the category."""
        with self._session("destroy") as session:
            owned = self._owned(session, category, user_id)
            category_id = owned.id
            journals = session.exec(select(Journal).where(Journal.category_id == category_id)).all()
            for journal in journals:
                journal.category_id = None
                session.add(journal)
            session.flush()
            session.delete(owned)
            session.commit()
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "user_id": user_id, "detached": len(journals)},
        )
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self.session_factory() as session:
                yield session
        except IntegrityError as exc:
            logger.error(f"Constraint violation during {operation}: {exc.orig}")
            raise ValidationError("Category violates a storage constraint") from exc
        except SQLAlchemyError as exc:
            logger.error(f"Storage failure during {operation}: {exc}", exc_info=True)
            raise StorageError(f"Storage failure during {operation}") from exc

    def _owned(self, session: Session, category: CategoryRef, user_id: int) -> Category:
        category_id = category.id if isinstance(category, Category) else category
        if category_id is None:
            raise NotFoundError("Category has not been stored")
        obj = session.exec(
            select(Category).where(Category.id == category_id, Category.user_id == user_id)
        ).first()
        if obj is None:
            raise NotFoundError(f"Category {category_id} was not found")
        return obj

    def _linked_category_id(
        self, session: Session, category: CategoryRef, user_id: int
    ) -> Optional[int]:
        """Resolve the id whose journals are listed, or None for a destroyed instance.

        A ``Category`` instance this owner once stored has no journals after
        ``destroy``; bare ids and other owners' instances still raise ``NotFoundError``.
        """
        if (
            isinstance(category, Category)
            and category.id is not None
            and category.user_id == user_id
            and session.get(Category, category.id) is None
        ):
            return None
        return self._owned(session, category, user_id).id

    def _ordered_categories(self, session: Session, user_id: int) -> list[Category]:
        rows = session.exec(select(Category).where(Category.user_id == user_id)).all()
        # SQLite's lower() folds ASCII only; casefold handles accented names.
        return sorted(rows, key=lambda c: (c.name.casefold(), c.id))

    def _ensure_name_available(
        self, session: Session, name: str, user_id: int, exclude_id: int | None = None
    ) -> None:
        statement = select(Category.id).where(Category.user_id == user_id, Category.name == name)
        if exclude_id is not None:
            statement = statement.where(Category.id != exclude_id)
        if session.exec(statement).first() is not None:
            raise ValidationError(f"Category {name!r} already exists")

    def _sums_by_category(
        self,
        session: Session,
        user_id: int,
        period: DateRange,
        journal_type: str,
        category_id: int | None = None,
    ) -> dict[int, list[tuple[str, float]]]:
        """Signed amount sums grouped by category and currency."""
        statement = (
            select(Journal.category_id, Journal.currency, func.sum(Journal.amount))
            .where(Journal.user_id == user_id)
            .where(Journal.journal_type == journal_type)
            .where(Journal.occurred_on >= period.start)
            .where(Journal.occurred_on <= period.end)
        )
        if category_id is None:
            statement = statement.where(Journal.category_id.is_not(None))  # type: ignore
        else:
            statement = statement.where(Journal.category_id == category_id)
        statement = statement.group_by(Journal.category_id, Journal.currency)

        totals: dict[int, list[tuple[str, float]]] = defaultdict(list)
        for cat_id, currency, amount in session.exec(statement).all():
            totals[cat_id].append((currency, amount or 0.0))
        return totals

    def _expense(self, amounts: list[tuple[str, float]]) -> float:
        # Outflows are stored negative; report spending as a positive figure.
        spent = -self.converter.total(amounts)
        return spent if spent else 0.0

    def _range(self, start: DateLike, end: DateLike) -> DateRange:
        return DateRange.from_bounds(start, end, self.tz)

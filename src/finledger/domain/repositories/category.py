"""Category repository protocol."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Optional, Protocol, Union

from ...models.category import Category
from ...models.journal import Journal
from ..dates import DateLike
from ..forms import CategoryData

# A category instance or its primary key; ownership is always re-checked.
CategoryRef = Union[Category, int]


@dataclass(frozen=True)
class CategoryExpense:
    """A category paired with its expense total in the reporting currency."""

    category: Category
    amount: float

    def __iter__(self) -> Iterator[object]:
        yield self.category
        yield self.amount


class CategoryRepository(Protocol):
    """Repository for reading, aggregating and mutating categories."""

    def count_journals(self, category: CategoryRef, *, user_id: int) -> int:
        """Count journals linked to the category."""
        ...

    def destroy(self, category: CategoryRef, *, user_id: int) -> bool:
        """Detach linked journals and delete the category."""
        ...

    def get_categories(self, *, user_id: int) -> list[Category]:
        """List owned categories ordered by name, case-insensitively."""
        ...

    def get_categories_and_expenses(
        self, start: DateLike, end: DateLike, *, user_id: int
    ) -> list[CategoryExpense]:
        """Pair every owned category with its expenses in the range."""
        ...

    def get_journals(self, category: CategoryRef, page: int, *, user_id: int) -> list[Journal]:
        """Return one page of linked journals, newest first."""
        ...

    def get_latest_activity(self, category: CategoryRef, *, user_id: int) -> Optional[date]:
        """Return the most recent linked journal date."""
        ...

    def get_without_category(self, start: DateLike, end: DateLike, *, user_id: int) -> list[Journal]:
        """List uncategorized journals in the range."""
        ...

    def store(self, data: CategoryData, *, user_id: int) -> Category:
        """Create a new category."""
        ...

    def update(self, category: CategoryRef, data: CategoryData, *, user_id: int) -> Category:
        """Rename an existing category."""
        ...

    def find(self, category_id: int, *, user_id: int) -> Category:
        """Retrieve an owned category by ID."""
        ...

    def find_by_name(self, name: str, *, user_id: int) -> Optional[Category]:
        """Retrieve an owned category by exact name."""
        ...

    def get_first_activity(self, category: CategoryRef, *, user_id: int) -> Optional[date]:
        """Return the oldest linked journal date."""
        ...

    def spent_in_period(
        self, category: CategoryRef, start: DateLike, end: DateLike, *, user_id: int
    ) -> float:
        """Expense total for one category over the range."""
        ...

    def earned_in_period(
        self, category: CategoryRef, start: DateLike, end: DateLike, *, user_id: int
    ) -> float:
        """Deposit total for one category over the range."""
        ...

"""Capability interface for the roster and expense store."""

from typing import Protocol, runtime_checkable

from .models import Expense


@runtime_checkable
class ExpenseStore(Protocol):
    """
    Persistence collaborator for one user's household data.

    Implementations own syncing, caching and conflict handling. They return
    plain in-memory collections and raise StoreError when the backend fails.
    """

    def fetch_roster(self) -> list[str]:
        """Return roommate names in display order."""
        ...

    def update_roster(self, names: list[str]) -> None:
        """Replace the roster."""
        ...

    def fetch_expenses(self) -> list[Expense]:
        """Return all expenses for the household."""
        ...

    def append_expense(self, expense: Expense) -> Expense:
        """Persist a new expense and return it with its assigned id."""
        ...

    def remove_expense(self, expense_id: str) -> bool:
        """Delete an expense; return False if the id was unknown."""
        ...

    def fetch_categories(self) -> list[str]:
        """Return category labels in display order."""
        ...

    def update_categories(self, names: list[str]) -> None:
        """Replace the category list."""
        ...

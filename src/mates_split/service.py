"""Service layer that composes the expense store and the balance core.

Mutations go through the store; callers then ask for a fresh summary with
``summarize()``. Nothing is cached between calls, so the balances and
settlements always reflect the store's current roster and expenses.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime

from .balances import compute_balances
from .exceptions import (
    DuplicateCategoryError,
    DuplicateRoommateError,
    ExpenseNotFoundError,
    InvalidCategoryError,
    InvalidExpenseError,
    InvalidRoommateError,
    RoommateNotFoundError,
)
from .models import Expense, HouseholdSummary
from .settlements import compute_settlements
from .store import ExpenseStore

logger = logging.getLogger(__name__)


class HouseholdService:
    """Roster, expense and category bookkeeping for one household."""

    def __init__(self, store: ExpenseStore):
        """Initialize the household service."""
        self.store = store

    # ========================================================================
    # Roster
    # ========================================================================

    def list_roommates(self) -> list[str]:
        """Current roster in display order."""
        return self.store.fetch_roster()

    def add_roommate(self, name: str) -> str:
        """
        Add a roommate to the end of the roster.

        Args:
            name: Display name; surrounding whitespace is ignored

        Returns:
            The stored (trimmed) name

        Raises:
            InvalidRoommateError: If the name is blank
            DuplicateRoommateError: If the name is already on the roster
        """
        name = name.strip()
        if not name:
            raise InvalidRoommateError("Please enter a roommate name")

        roster = self.store.fetch_roster()
        if name in roster:
            raise DuplicateRoommateError(name)

        self.store.update_roster([*roster, name])
        logger.info(f"Added roommate '{name}'")
        return name

    def remove_roommate(self, name: str) -> None:
        """
        Remove a roommate from the roster.

        Expenses that mention the roommate are kept as they are; their
        contributions simply stop counting toward anyone's balance.
        """
        roster = self.store.fetch_roster()
        if name not in roster:
            raise RoommateNotFoundError(name)

        self.store.update_roster([mate for mate in roster if mate != name])
        logger.info(f"Removed roommate '{name}'")

    # ========================================================================
    # Expenses
    # ========================================================================

    def list_expenses(self) -> list[Expense]:
        """All recorded expenses."""
        return self.store.fetch_expenses()

    def add_expense(
        self,
        description: str,
        amount: float,
        payer: str,
        split_with: Iterable[str] = (),
        category: str = "Other",
        expense_date: date | None = None,
    ) -> Expense:
        """
        Record a new expense.

        Args:
            description: What the expense was for
            amount: Positive amount paid
            payer: Roommate who paid; must be on the roster
            split_with: Roommates sharing the cost; empty means everyone
                on the roster at the time balances are computed
            category: Category label
            expense_date: Date of the expense (defaults to today)

        Returns:
            The stored expense, including its assigned id

        Raises:
            InvalidExpenseError: If a required field is missing or a name
                is not on the roster
        """
        description = description.strip()
        if not description:
            raise InvalidExpenseError("Please enter a description")
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidExpenseError("Amount must be greater than zero")

        roster = self.store.fetch_roster()
        if payer not in roster:
            raise InvalidExpenseError(f"Payer '{payer}' is not on the roster")

        split_with = list(split_with)
        unknown = [name for name in split_with if name not in roster]
        if unknown:
            raise InvalidExpenseError(
                f"Cannot split with unknown roommates: {', '.join(unknown)}"
            )

        now = datetime.now()
        expense = Expense(
            description=description,
            amount=amount,
            payer=payer,
            split_with=split_with,
            category=category,
            date=expense_date or now.date(),
            time=now.strftime("%H:%M:%S"),
        )
        stored = self.store.append_expense(expense)

        logger.info(
            f"Added expense {stored.id}: '{stored.description}' "
            f"{stored.amount:.2f} paid by {stored.payer}"
        )
        return stored

    def remove_expense(self, expense_id: str) -> None:
        """Delete an expense by id."""
        if not self.store.remove_expense(expense_id):
            raise ExpenseNotFoundError(expense_id)
        logger.info(f"Removed expense {expense_id}")

    # ========================================================================
    # Categories
    # ========================================================================

    def list_categories(self) -> list[str]:
        """Category labels in display order."""
        return self.store.fetch_categories()

    def add_category(self, name: str) -> str:
        """Add a category label, rejecting blanks and duplicates."""
        name = name.strip()
        if not name:
            raise InvalidCategoryError("Please enter a category name")

        categories = self.store.fetch_categories()
        if name in categories:
            raise DuplicateCategoryError(name)

        self.store.update_categories([*categories, name])
        logger.info(f"Added category '{name}'")
        return name

    # ========================================================================
    # Balances and settlements
    # ========================================================================

    def summarize(self) -> HouseholdSummary:
        """
        Recompute balances and settlements from the store's current data.

        Call this after any roster or expense change.
        """
        roster = self.store.fetch_roster()
        expenses = self.store.fetch_expenses()

        balances = compute_balances(roster, expenses)
        settlements = compute_settlements(balances)

        logger.info(
            f"Summarized {len(expenses)} expenses across {len(roster)} roommates "
            f"({len(settlements) - 1} suggested payments)"
        )
        return HouseholdSummary(
            roster=roster, balances=balances, settlements=settlements
        )

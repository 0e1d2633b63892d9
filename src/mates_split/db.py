"""SQLite database operations for Mates Split."""

import json
import logging
import sqlite3
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .config import DEFAULT_CATEGORIES
from .exceptions import StoreError
from .models import Expense

logger = logging.getLogger(__name__)


class Database:
    """SQLite-backed expense store for a single user's household."""

    def __init__(
        self,
        db_path: Path,
        user_id: str = "local",
        default_categories: list[str] | None = None,
    ):
        """Initialize database connection."""
        self.db_path = db_path
        self.user_id = user_id
        self.default_categories = list(default_categories or DEFAULT_CATEGORIES)
        try:
            self.conn = sqlite3.connect(str(db_path))
        except sqlite3.Error as e:
            raise StoreError(f"Could not open database at {db_path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        try:
            self._init_schema()
            self._ensure_household()
        except StoreError:
            self.conn.close()
            raise

    def _init_schema(self):
        """Initialize database schema."""
        self._execute(
            """
            CREATE TABLE IF NOT EXISTS households (
                user_id TEXT PRIMARY KEY,
                roommates TEXT NOT NULL,
                categories TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """
        )

        self._execute(
            """
            CREATE TABLE IF NOT EXISTS expenses (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                description TEXT NOT NULL,
                amount REAL,
                payer TEXT NOT NULL,
                split_with TEXT NOT NULL,
                expense_date DATE NOT NULL,
                expense_time TEXT,
                category TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """
        )

        self.conn.commit()

    def _ensure_household(self):
        """Create the household row for a new user with default data."""
        cursor = self._execute(
            """
            INSERT OR IGNORE INTO households (user_id, roommates, categories)
            VALUES (?, ?, ?)
            """,
            (self.user_id, json.dumps([]), json.dumps(self.default_categories)),
        )
        self.conn.commit()
        if cursor.rowcount:
            logger.info(f"Created household for user {self.user_id}")

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        """Run a statement, translating sqlite failures into StoreError."""
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}") from e

    def close(self):
        """Close database connection."""
        self.conn.close()

    # ========================================================================
    # Roster and category operations
    # ========================================================================

    def _get_household_list(self, column: str) -> list[str]:
        cursor = self._execute(
            f"SELECT {column} FROM households WHERE user_id = ?", (self.user_id,)
        )
        row = cursor.fetchone()
        if not row:
            return []
        values = json.loads(row[column])
        return [str(value) for value in values] if isinstance(values, list) else []

    def _set_household_list(self, column: str, values: list[str]):
        self._execute(
            f"""
            UPDATE households
            SET {column} = ?, updated_at = ?
            WHERE user_id = ?
            """,
            (json.dumps(values), datetime.now().isoformat(), self.user_id),
        )
        self.conn.commit()

    def fetch_roster(self) -> list[str]:
        """Get roommate names in display order."""
        return self._get_household_list("roommates")

    def update_roster(self, names: list[str]) -> None:
        """Replace the roster."""
        self._set_household_list("roommates", names)

    def fetch_categories(self) -> list[str]:
        """Get category labels in display order."""
        return self._get_household_list("categories")

    def update_categories(self, names: list[str]) -> None:
        """Replace the category list."""
        self._set_household_list("categories", names)

    # ========================================================================
    # Expense operations
    # ========================================================================

    def append_expense(self, expense: Expense) -> Expense:
        """Save a new expense, assigning it an id."""
        stored = expense.model_copy(
            update={"id": uuid.uuid4().hex, "user_id": self.user_id}
        )
        self._execute(
            """
            INSERT INTO expenses (
                id, user_id, description, amount, payer, split_with,
                expense_date, expense_time, category, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                stored.id,
                self.user_id,
                stored.description,
                stored.amount,
                stored.payer,
                json.dumps(stored.split_with),
                stored.date.isoformat(),
                stored.time,
                stored.category,
                datetime.now().isoformat(),
            ),
        )
        self.conn.commit()
        return stored

    def remove_expense(self, expense_id: str) -> bool:
        """Delete an expense by id."""
        cursor = self._execute(
            "DELETE FROM expenses WHERE id = ? AND user_id = ?",
            (expense_id, self.user_id),
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def fetch_expenses(self) -> list[Expense]:
        """Get all expenses for this user, oldest first."""
        cursor = self._execute(
            """
            SELECT id, user_id, description, amount, payer, split_with,
                   expense_date, expense_time, category
            FROM expenses
            WHERE user_id = ?
            ORDER BY created_at, rowid
            """,
            (self.user_id,),
        )
        return [
            Expense(
                id=row["id"],
                user_id=row["user_id"],
                description=row["description"],
                amount=row["amount"],
                payer=row["payer"],
                split_with=_load_json_list(row["split_with"]),
                date=date.fromisoformat(row["expense_date"]),
                time=row["expense_time"],
                category=row["category"],
            )
            for row in cursor.fetchall()
        ]


def _load_json_list(raw: str | None) -> Any:
    """Decode a JSON column; malformed data is handed to model coercion as-is."""
    if not raw:
        return []
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return []

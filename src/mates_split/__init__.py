"""Mates Split - Shared expense tracking and settlement for roommates."""

__version__ = "0.1.0"

from .balances import compute_balances
from .config import Settings, load_settings
from .db import Database
from .models import (
    Balance,
    Expense,
    HouseholdSummary,
    SettlementNotice,
    SettlementSuggestion,
)
from .service import HouseholdService
from .settlements import compute_settlements, round_to_cents
from .store import ExpenseStore

__all__ = [
    "Settings",
    "load_settings",
    "Database",
    "ExpenseStore",
    "Balance",
    "Expense",
    "HouseholdSummary",
    "SettlementNotice",
    "SettlementSuggestion",
    "compute_balances",
    "compute_settlements",
    "round_to_cents",
    "HouseholdService",
]

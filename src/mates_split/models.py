"""Pydantic domain models for Mates Split."""

import datetime as dt
import math
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def coerce_amount(value: Any) -> float:
    """
    Coerce a stored expense amount to a float.

    Records written by older clients may carry strings, nulls or garbage in
    the amount field. Anything that does not parse as a finite number becomes
    0.0 so balance computation never sees a non-numeric value.

    Args:
        value: Raw amount from the store

    Returns:
        The amount as a float, or 0.0 if it is not numeric
    """
    if value is None:
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


# ============================================================================
# Household Models
# ============================================================================


class Expense(BaseModel):
    """A shared cost paid by one roommate and split among others.

    An empty ``split_with`` means "split across the whole roster", resolved
    when balances are computed rather than when the expense is recorded.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    description: str
    amount: float = 0.0
    payer: str = Field(validation_alias=AliasChoices("payer", "paidBy"))
    split_with: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("split_with", "splitWith"),
    )
    date: dt.date = Field(default_factory=dt.date.today)
    time: str | None = None
    category: str = "Other"
    user_id: str | None = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId")
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("split_with", mode="before")
    @classmethod
    def _normalize_split_with(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        # A split set: keep first occurrence of each name
        return list(dict.fromkeys(str(name) for name in value))

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        return value or "Other"


class Balance(BaseModel):
    """A roommate's accumulated position across all expenses."""

    paid: float = 0.0
    owed: float = 0.0
    balance: float = 0.0


# ============================================================================
# Settlement Models
# ============================================================================


class SettlementNotice(BaseModel):
    """Informational marker that leads every settlement list."""

    key: Literal["header", "no-settlements"]
    text: str


class SettlementSuggestion(BaseModel):
    """A suggested transfer: ``from_person`` pays ``to_person`` ``amount``."""

    key: str
    from_person: str
    to_person: str
    amount: float


SettlementItem = SettlementNotice | SettlementSuggestion


class HouseholdSummary(BaseModel):
    """Balances and settlements recomputed from one roster/expense snapshot."""

    roster: list[str]
    balances: dict[str, Balance]
    settlements: list[SettlementItem]

    @property
    def notice(self) -> SettlementNotice:
        """The leading settlement marker."""
        first = self.settlements[0]
        assert isinstance(first, SettlementNotice)
        return first

    @property
    def suggestions(self) -> list[SettlementSuggestion]:
        """Settlement transfers without the leading marker."""
        return [
            item for item in self.settlements if isinstance(item, SettlementSuggestion)
        ]

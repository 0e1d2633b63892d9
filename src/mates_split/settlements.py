"""Greedy settlement planning from per-roommate balances."""

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from .models import Balance, SettlementItem, SettlementNotice, SettlementSuggestion

logger = logging.getLogger(__name__)

# Remaining amounts below one cent count as settled
SETTLEMENT_THRESHOLD = 0.01

RECOMMENDED_TEXT = "Recommended Settlements"
NO_SETTLEMENTS_TEXT = "No settlements needed at this time"


def round_to_cents(amount: float) -> float:
    """
    Round a float to two decimal places, half up.

    Goes through the shortest decimal repr of the float so that values like
    0.125 round to 0.13 instead of falling victim to binary representation.
    This differs from rounding ``amount * 100`` in binary: 1.005 gives 1.01
    here, not 1.00.

    Args:
        amount: Amount in currency units

    Returns:
        Amount rounded to the cent
    """
    cents = Decimal(repr(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(cents)


def compute_settlements(balances: Mapping[str, Balance]) -> list[SettlementItem]:
    """
    Suggest transfers that bring every balance back to zero.

    Creditors (positive balance) and debtors (negative balance) are each
    sorted by amount, largest first. Python's sort is stable, so equal
    amounts keep the mapping's iteration order. Two cursors then walk both
    lists, matching the current debtor to the current creditor for the
    smaller of their remaining amounts.

    The emitted amount is rounded to the cent but the remaining amounts are
    reduced by the unrounded transfer. A cursor advances once its side has
    less than SETTLEMENT_THRESHOLD left; that dust is dropped silently.

    Args:
        balances: Balance per roommate, as returned by compute_balances

    Returns:
        A leading SettlementNotice followed by zero or more suggestions
    """
    creditors: list[dict] = []
    debtors: list[dict] = []
    for name, record in balances.items():
        if record.balance > 0:
            creditors.append({"name": name, "amount": record.balance})
        elif record.balance < 0:
            debtors.append({"name": name, "amount": -record.balance})

    creditors.sort(key=lambda x: x["amount"], reverse=True)
    debtors.sort(key=lambda x: x["amount"], reverse=True)

    items: list[SettlementItem] = []
    if creditors and debtors:
        items.append(SettlementNotice(key="header", text=RECOMMENDED_TEXT))
    else:
        items.append(SettlementNotice(key="no-settlements", text=NO_SETTLEMENTS_TEXT))

    creditor_idx = 0
    debtor_idx = 0
    while creditor_idx < len(creditors) and debtor_idx < len(debtors):
        creditor = creditors[creditor_idx]
        debtor = debtors[debtor_idx]

        transfer = min(creditor["amount"], debtor["amount"])
        rounded = round_to_cents(transfer)
        if rounded > 0:
            items.append(
                SettlementSuggestion(
                    key=f"payment-{debtor_idx}-{creditor_idx}",
                    from_person=debtor["name"],
                    to_person=creditor["name"],
                    amount=rounded,
                )
            )

        creditor["amount"] -= transfer
        debtor["amount"] -= transfer

        if creditor["amount"] < SETTLEMENT_THRESHOLD:
            if creditor["amount"] > 0:
                logger.debug(
                    f"Dropping {creditor['amount']:.6f} dust for {creditor['name']}"
                )
            creditor_idx += 1
        if debtor["amount"] < SETTLEMENT_THRESHOLD:
            if debtor["amount"] > 0:
                logger.debug(f"Dropping {debtor['amount']:.6f} dust for {debtor['name']}")
            debtor_idx += 1

    logger.debug(
        f"Planned {len(items) - 1} settlements for "
        f"{len(creditors)} creditors and {len(debtors)} debtors"
    )
    return items

"""Per-roommate balance computation from a roster and an expense list."""

import logging
from collections.abc import Iterable, Sequence

from .models import Balance, Expense

logger = logging.getLogger(__name__)


def compute_balances(
    roster: Sequence[str], expenses: Iterable[Expense]
) -> dict[str, Balance]:
    """
    Compute paid, owed and net balance for every roommate.

    Steps:
    1. Start every roster member at zero
    2. Credit each expense's amount to its payer
    3. Divide each expense equally over its split set (or the whole roster
       when the split set is empty) and add the share to each member's owed
    4. balance = paid - owed

    Names that are not on the roster (a removed payer, or a removed member of
    a split set) are skipped, so their part of an expense is not
    redistributed. No rounding happens here.

    Args:
        roster: Current roommate names, in display order
        expenses: Expenses with already-coerced numeric amounts

    Returns:
        Mapping with exactly one Balance per roster member, in roster order
    """
    balances = {name: Balance() for name in roster}

    for expense in expenses:
        split_set = expense.split_with or list(roster)

        if expense.payer in balances:
            balances[expense.payer].paid += expense.amount
        else:
            logger.debug(
                f"Payer '{expense.payer}' of expense {expense.id} is not on the roster"
            )

        if not split_set:
            # Empty roster and empty split set: nobody to charge
            continue

        share = expense.amount / len(split_set)
        for name in split_set:
            if name in balances:
                balances[name].owed += share

    for balance in balances.values():
        balance.balance = balance.paid - balance.owed

    logger.debug(f"Computed balances for {len(balances)} roommates")
    return balances

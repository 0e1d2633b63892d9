"""Tests for per-roommate balance computation."""

import pytest

from mates_split.balances import compute_balances
from mates_split.models import Expense


def make_expense(
    amount: float, payer: str, split_with: list[str] | None = None, id: str = "e1"
) -> Expense:
    """Create an Expense for testing."""
    return Expense(
        id=id,
        description=f"Test expense {id}",
        amount=amount,
        payer=payer,
        split_with=split_with or [],
    )


class TestBasicBalances:
    """Balances for straightforward rosters and expenses."""

    def test_no_expenses_gives_zero_balances(self):
        """Every roommate appears with zeros when nothing was spent."""
        balances = compute_balances(["A", "B"], [])

        assert list(balances) == ["A", "B"]
        for record in balances.values():
            assert (record.paid, record.owed, record.balance) == (0, 0, 0)

    def test_two_party_split(self):
        """A pays 100 split with A and B."""
        balances = compute_balances(
            ["A", "B"], [make_expense(100, "A", ["A", "B"])]
        )

        assert balances["A"].paid == 100
        assert balances["A"].owed == 50
        assert balances["A"].balance == 50
        assert balances["B"].paid == 0
        assert balances["B"].owed == 50
        assert balances["B"].balance == -50

    def test_payer_not_in_split_set(self):
        """The payer gets full credit when only others share the cost."""
        balances = compute_balances(["A", "B", "C"], [make_expense(60, "A", ["B", "C"])])

        assert balances["A"].balance == 60
        assert balances["B"].balance == -30
        assert balances["C"].balance == -30

    def test_result_follows_roster_order(self):
        """Result keys follow roster order even if expenses mention others first."""
        balances = compute_balances(["C", "A", "B"], [make_expense(30, "B", ["A"])])

        assert list(balances) == ["C", "A", "B"]

    def test_expense_order_does_not_matter(self):
        """Reordering expenses gives the same balances."""
        expenses = [
            make_expense(100, "A", ["A", "B"], id="e1"),
            make_expense(40, "B", [], id="e2"),
            make_expense(25, "C", ["A", "C"], id="e3"),
        ]
        roster = ["A", "B", "C"]

        forward = compute_balances(roster, expenses)
        backward = compute_balances(roster, list(reversed(expenses)))

        for name in roster:
            assert forward[name].balance == pytest.approx(backward[name].balance)


class TestEmptySplitFallback:
    """An empty split set means the whole roster."""

    def test_splits_across_full_roster(self):
        """Amount 30 paid by A with no split set charges 10 to each of A, B, C."""
        balances = compute_balances(["A", "B", "C"], [make_expense(30, "A")])

        assert balances["A"].owed == pytest.approx(10)
        assert balances["B"].owed == pytest.approx(10)
        assert balances["C"].owed == pytest.approx(10)
        assert balances["A"].balance == pytest.approx(20)

    def test_uses_roster_at_computation_time(self):
        """Adding a roommate later spreads old whole-roster expenses over them too."""
        expenses = [make_expense(30, "A")]

        before = compute_balances(["A", "B"], expenses)
        after = compute_balances(["A", "B", "C"], expenses)

        assert before["B"].owed == pytest.approx(15)
        assert after["B"].owed == pytest.approx(10)
        assert after["C"].owed == pytest.approx(10)

    def test_empty_roster_and_empty_split_set(self):
        """Nothing to divide by: the expense contributes nothing."""
        balances = compute_balances([], [make_expense(30, "A")])

        assert balances == {}


class TestDanglingReferences:
    """Names that are no longer on the roster are ignored."""

    def test_removed_payer_loses_credit(self):
        """The split is still charged but nobody is credited."""
        balances = compute_balances(["B", "C"], [make_expense(90, "A", ["A", "B", "C"])])

        assert "A" not in balances
        assert balances["B"].paid == 0
        assert balances["B"].owed == pytest.approx(30)
        assert balances["C"].owed == pytest.approx(30)

    def test_removed_split_member_share_is_dropped(self):
        """The share of a removed member is not redistributed."""
        balances = compute_balances(["A", "B"], [make_expense(90, "A", ["A", "B", "Z"])])

        assert balances["A"].owed == pytest.approx(30)
        assert balances["B"].owed == pytest.approx(30)
        assert balances["A"].balance == pytest.approx(60)


class TestInvariants:
    """Properties that hold for any consistent roster and expense list."""

    def test_zero_sum_when_all_names_on_roster(self):
        """Balances sum to zero when every payer and split member is known."""
        roster = ["A", "B", "C", "D"]
        expenses = [
            make_expense(100, "A", ["A", "B", "C"], id="e1"),
            make_expense(33.33, "B", [], id="e2"),
            make_expense(12.5, "D", ["A", "D"], id="e3"),
            make_expense(7, "C", ["B"], id="e4"),
        ]

        balances = compute_balances(roster, expenses)

        assert sum(record.balance for record in balances.values()) == pytest.approx(
            0, abs=1e-9
        )

    def test_idempotent(self):
        """Two calls with the same input give identical output."""
        roster = ["A", "B", "C"]
        expenses = [make_expense(100, "A"), make_expense(10, "B", ["C"], id="e2")]

        assert compute_balances(roster, expenses) == compute_balances(roster, expenses)

    def test_does_not_mutate_inputs(self):
        """Roster and expenses are left untouched."""
        roster = ["A", "B"]
        expense = make_expense(50, "A")

        compute_balances(roster, [expense])

        assert roster == ["A", "B"]
        assert expense.split_with == []
        assert expense.amount == 50

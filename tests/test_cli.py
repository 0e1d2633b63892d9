"""Tests for the command line interface."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from mates_split.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the CLI at a throwaway database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("USER_ID", "cli-user")
    monkeypatch.setenv("CURRENCY_SYMBOL", "$")


def invoke(*args: str):
    return runner.invoke(app, list(args))


class TestRoommateCommands:
    def test_add_and_list(self):
        assert invoke("roommate", "add", "Alice").exit_code == 0
        assert invoke("roommate", "add", "Bob").exit_code == 0

        result = invoke("roommate", "list")

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Bob" in result.output

    def test_duplicate_exits_with_warning(self):
        invoke("roommate", "add", "Alice")

        result = invoke("roommate", "add", "Alice")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_remove_with_yes(self):
        invoke("roommate", "add", "Alice")

        result = invoke("roommate", "remove", "Alice", "--yes")

        assert result.exit_code == 0
        assert "No roommates yet" in invoke("roommate", "list").output


class TestExpenseAndSettle:
    def test_settle_two_party(self):
        invoke("roommate", "add", "A")
        invoke("roommate", "add", "B")

        added = invoke(
            "expense", "add", "-d", "Groceries", "-a", "100", "-p", "A", "-s", "A", "-s", "B"
        )
        assert added.exit_code == 0, added.output

        result = invoke("settle")

        assert result.exit_code == 0
        assert "Recommended Settlements" in result.output
        assert "B pays A $50.00" in result.output

    def test_settle_without_expenses(self):
        invoke("roommate", "add", "A")

        result = invoke("settle")

        assert result.exit_code == 0
        assert "No settlements needed at this time" in result.output

    def test_unknown_payer_rejected(self):
        invoke("roommate", "add", "A")

        result = invoke("expense", "add", "-d", "Dinner", "-a", "10", "-p", "Z")

        assert result.exit_code == 1
        assert "not on the roster" in result.output

    def test_bad_date_rejected(self):
        result = invoke(
            "expense", "add", "-d", "Dinner", "-a", "10", "-p", "A", "--date", "yesterday"
        )

        assert result.exit_code != 0

    def test_remove_unknown_expense(self):
        result = invoke("expense", "remove", "missing", "--yes")

        assert result.exit_code == 1
        assert "Could not find expense" in result.output


class TestCategoryCommands:
    def test_add_category(self):
        result = invoke("category", "add", "Pets")

        assert result.exit_code == 0
        assert "Pets" in invoke("category", "list").output


class TestInteractivePayer:
    def test_prompts_for_payer_when_omitted(self):
        invoke("roommate", "add", "A")
        invoke("roommate", "add", "B")

        with patch("mates_split.cli.select_roommate_interactive", return_value="B") as select:
            result = invoke("expense", "add", "-d", "Pizza", "-a", "20")

        assert result.exit_code == 0, result.output
        select.assert_called_once_with(["A", "B"])
        assert "paid by B" in result.output

    def test_no_payer_selected(self):
        invoke("roommate", "add", "A")

        with patch("mates_split.cli.select_roommate_interactive", return_value=None):
            result = invoke("expense", "add", "-d", "Pizza", "-a", "20")

        assert result.exit_code == 0
        assert "No payer selected" in result.output
        assert "No expenses recorded" in invoke("expense", "list").output


class TestNonFiniteAmounts:
    @pytest.mark.parametrize("amount", ["inf", "nan"])
    def test_rejected(self, amount):
        invoke("roommate", "add", "A")

        result = invoke("expense", "add", "-d", "X", "-a", amount, "-p", "A")

        assert result.exit_code == 1
        assert "greater than zero" in result.output
        assert "No expenses recorded" in invoke("expense", "list").output


class TestConfirmationWithoutInput:
    def test_remove_cancelled_when_stdin_closed(self):
        invoke("roommate", "add", "A")

        result = invoke("roommate", "remove", "A")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert "• A" in invoke("roommate", "list").output

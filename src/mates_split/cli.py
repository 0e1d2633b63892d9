"""CLI for Mates Split using Typer."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .db import Database
from .exceptions import MatesSplitError
from .models import HouseholdSummary, SettlementSuggestion
from .service import HouseholdService
from .ui import confirm, select_roommate_interactive

app = typer.Typer(
    name="mates-split",
    help="Track shared expenses between roommates and settle up",
)
roommate_app = typer.Typer(help="Manage the roommate roster")
expense_app = typer.Typer(help="Record and remove shared expenses")
category_app = typer.Typer(help="Manage expense categories")

app.add_typer(roommate_app, name="roommate")
app.add_typer(expense_app, name="expense")
app.add_typer(category_app, name="category")

console = Console()


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@contextmanager
def open_service(verbose: bool = False) -> Iterator[tuple[HouseholdService, Settings]]:
    """
    Load settings, open the store and yield a service bound to it.

    Domain errors are shown as warnings and exit with status 1; anything else
    is reported as an error and re-raised when running verbose.
    """
    setup_logging(verbose)
    db = None

    try:
        settings = load_settings()
        db = Database(
            settings.database_path,
            user_id=settings.user_id,
            default_categories=settings.default_categories,
        )
        yield HouseholdService(db), settings

    except MatesSplitError as e:
        console.print(f"\n[bold yellow]⚠️  {e}[/bold yellow]\n")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if verbose:
            raise
        sys.exit(1)
    finally:
        if db is not None:
            db.close()


def format_money(amount: float, symbol: str, use_color: bool = True) -> str:
    """Format a balance with sign coloring: green for credit, red for debt."""
    formatted = f"{symbol}{amount:,.2f}"
    if not use_color:
        return formatted
    color = "green" if amount >= 0 else "red"
    return f"[{color}]{formatted}[/{color}]"


# ============================================================================
# Roommates
# ============================================================================


@roommate_app.command("add")
def roommate_add(
    name: str = typer.Argument(..., help="Roommate display name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Add a roommate to the roster."""
    with open_service(verbose) as (service, _settings):
        added = service.add_roommate(name)
        console.print(f"[green]✓ Added roommate {added}[/green]")


@roommate_app.command("remove")
def roommate_remove(
    name: str = typer.Argument(..., help="Roommate display name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Remove a roommate from the roster.

    Past expenses that mention the roommate are kept but no longer count
    toward their balance.
    """
    with open_service(verbose) as (service, _settings):
        if not yes and not confirm(
            f"Remove {name}? This will affect expense calculations."
        ):
            console.print("[yellow]Cancelled.[/yellow]")
            return

        service.remove_roommate(name)
        console.print(f"[green]✓ Removed roommate {name}[/green]")


@roommate_app.command("list")
def roommate_list(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show the roster."""
    with open_service(verbose) as (service, _settings):
        roster = service.list_roommates()
        if not roster:
            console.print("[yellow]No roommates yet.[/yellow]")
            return
        for name in roster:
            console.print(f"  • {name}")


# ============================================================================
# Expenses
# ============================================================================


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got '{value}'") from e


@expense_app.command("add")
def expense_add(
    description: str = typer.Option(
        ..., "--description", "-d", help="What the expense was for"
    ),
    amount: float = typer.Option(..., "--amount", "-a", help="Amount paid"),
    payer: Optional[str] = typer.Option(
        None, "--payer", "-p", help="Who paid (prompted for if omitted)"
    ),
    split_with: Optional[list[str]] = typer.Option(
        None,
        "--split-with",
        "-s",
        help="Roommate sharing the cost; repeat for several. Omit to split with everyone",
    ),
    category: str = typer.Option("Other", "--category", "-c", help="Category label"),
    expense_date: Optional[str] = typer.Option(
        None, "--date", help="Expense date as YYYY-MM-DD (defaults to today)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Record a shared expense."""
    parsed_date = _parse_date(expense_date)

    with open_service(verbose) as (service, settings):
        if payer is None:
            payer = select_roommate_interactive(service.list_roommates())
            if payer is None:
                console.print("[yellow]No payer selected.[/yellow]")
                return

        expense = service.add_expense(
            description=description,
            amount=amount,
            payer=payer,
            split_with=split_with or [],
            category=category,
            expense_date=parsed_date,
        )

        shared = ", ".join(expense.split_with) if expense.split_with else "everyone"
        console.print(
            f"[green]✓ Added {expense.description} "
            f"({format_money(expense.amount, settings.currency_symbol, use_color=False)}) "
            f"paid by {expense.payer}, split with {shared}[/green]"
        )
        console.print(f"[dim]Expense ID: {expense.id}[/dim]")


@expense_app.command("remove")
def expense_remove(
    expense_id: str = typer.Argument(..., help="ID of the expense to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Delete an expense."""
    with open_service(verbose) as (service, _settings):
        if not yes and not confirm("Are you sure you want to delete this expense?"):
            console.print("[yellow]Cancelled.[/yellow]")
            return

        service.remove_expense(expense_id)
        console.print(f"[green]✓ Removed expense {expense_id}[/green]")


@expense_app.command("list")
def expense_list(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show all recorded expenses."""
    with open_service(verbose) as (service, settings):
        expenses = service.list_expenses()
        if not expenses:
            console.print("[yellow]No expenses recorded.[/yellow]")
            return

        table = Table(title="Expenses", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Date")
        table.add_column("Description", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_column("Paid By")
        table.add_column("Split With")
        table.add_column("Category", style="yellow")

        for expense in expenses:
            table.add_row(
                expense.id or "",
                expense.date.isoformat(),
                expense.description,
                format_money(expense.amount, settings.currency_symbol, use_color=False),
                expense.payer,
                ", ".join(expense.split_with) or "[dim]everyone[/dim]",
                expense.category,
            )

        console.print(table)


# ============================================================================
# Categories
# ============================================================================


@category_app.command("add")
def category_add(
    name: str = typer.Argument(..., help="Category label"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Add an expense category."""
    with open_service(verbose) as (service, _settings):
        added = service.add_category(name)
        console.print(f"[green]✓ Added category {added}[/green]")


@category_app.command("list")
def category_list(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show expense categories."""
    with open_service(verbose) as (service, _settings):
        for name in service.list_categories():
            console.print(f"  • {name}")


# ============================================================================
# Balances and settlements
# ============================================================================


def display_summary(summary: HouseholdSummary, symbol: str):
    """Display paid, owed and balance per roommate."""
    table = Table(title="Summary", show_header=True, header_style="bold magenta")
    table.add_column("Roommate", style="cyan")
    table.add_column("Paid", justify="right")
    table.add_column("Owes", justify="right")
    table.add_column("Balance", justify="right")

    for name, record in summary.balances.items():
        table.add_row(
            name,
            format_money(record.paid, symbol, use_color=False),
            format_money(record.owed, symbol, use_color=False),
            format_money(record.balance, symbol),
        )

    console.print(table)


def display_settlements(summary: HouseholdSummary, symbol: str):
    """Display the settlement notice followed by each suggested payment."""
    console.print(f"\n[bold]{summary.notice.text}[/bold]")
    for item in summary.settlements:
        if isinstance(item, SettlementSuggestion):
            console.print(
                f"  [red]{item.from_person}[/red] pays [green]{item.to_person}[/green] "
                f"{format_money(item.amount, symbol, use_color=False)}"
            )


@app.command()
def summary(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show each roommate's paid, owed and net balance."""
    with open_service(verbose) as (service, settings):
        household = service.summarize()
        if not household.roster:
            console.print("[yellow]Add roommates to see the summary.[/yellow]")
            return
        display_summary(household, settings.currency_symbol)


@app.command()
def settle(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Show suggested payments that settle all balances."""
    with open_service(verbose) as (service, settings):
        household = service.summarize()
        display_settlements(household, settings.currency_symbol)


if __name__ == "__main__":
    app()

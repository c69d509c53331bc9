"""Command-line front end for the expense API."""
import argparse
import logging
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from client.api import ExpenseClient
from client.view import ALL_CATEGORIES, ExpenseView, format_amount, format_date, record_amount
from models.expense import CATEGORIES
from services.errors import ClientNetworkError
from utils.logging_config import configure_logging
from utils.settings import Settings

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> str:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date().isoformat()
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Expected YYYY-MM-DD date format") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-tracker", description="Manage and track all your expenses")
    parser.add_argument("--api-url", default=None, help="Base URL of the expenses API")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Show expenses with totals")
    list_cmd.add_argument("--search", default="", help="Case-insensitive description filter")
    list_cmd.add_argument("--category", default=ALL_CATEGORIES, help=f"One of: {', '.join(CATEGORIES)}")

    add_cmd = sub.add_parser("add", help="Record a new expense")
    add_cmd.add_argument("description")
    add_cmd.add_argument("amount", type=float)
    add_cmd.add_argument("category")
    add_cmd.add_argument("--date", type=_parse_date, default=None)

    delete_cmd = sub.add_parser("delete", help="Remove an expense by id")
    delete_cmd.add_argument("expense_id")

    sub.add_parser("health", help="Check that the API answers")
    return parser


def render(view: ExpenseView, console: Console) -> None:
    summary = view.summary
    table = Table(title=f"Expense History ({summary.filtered_count} transactions)")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Id", style="dim")
    for record in summary.filtered:
        table.add_row(
            format_date(record.get("date")),
            str(record.get("description", "")),
            str(record.get("category", "")),
            format_amount(record_amount(record)),
            str(record.get("_id", "")),
        )
    console.print(table)
    console.print(f"Total Expenses: {summary.total_count}")
    console.print(f"Total Spent: {format_amount(summary.grand_total)}")
    console.print(f"Filtered Total: {format_amount(summary.filtered_total)}")


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None, client: Optional[ExpenseClient] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    console = console or Console()
    client = client or ExpenseClient(args.api_url or settings.api_url)
    view = ExpenseView(client)

    if args.command == "health":
        try:
            console.print(client.health().get("message", ""))
        except ClientNetworkError as e:
            logger.error(f"Health check failed: {e}")
            return 1
        return 0

    if not view.load():
        return 1

    if args.command == "list":
        view.set_search(args.search)
        view.set_category(args.category)
        render(view, console)
        return 0

    if args.command == "add":
        payload = {"description": args.description, "amount": args.amount, "category": args.category}
        if args.date:
            payload["date"] = args.date
        view.open_form()
        created = view.add(payload)
        if created is None:
            return 1
        console.print(f"Added {created.get('description')} ({format_amount(record_amount(created))}) as {created.get('_id')}")
        render(view, console)
        return 0

    if args.command == "delete":
        if not view.remove(args.expense_id):
            return 1
        console.print("Expense removed")
        render(view, console)
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

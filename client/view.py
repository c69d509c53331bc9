"""Client-side expense list: filtering, searching and totals over the fetched records.

The derivation functions are pure and work on tuple snapshots, so they can be
recomputed on every render. ``ExpenseView`` owns the mutable state (records,
search term, category filter, form visibility) and reconciles it after
create/delete calls without re-fetching.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from models.expense import CATEGORIES
from services.errors import ClientNetworkError

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All Categories"
CURRENCY_SYMBOL = "₱"

Record = Dict[str, Any]


def matches(record: Record, search_term: str = "", category_filter: str = ALL_CATEGORIES) -> bool:
    matches_search = search_term.lower() in str(record.get("description", "")).lower()
    matches_category = category_filter == ALL_CATEGORIES or record.get("category") == category_filter
    return matches_search and matches_category


def filter_expenses(records: Iterable[Record], search_term: str = "", category_filter: str = ALL_CATEGORIES) -> Tuple[Record, ...]:
    return tuple(r for r in records if matches(r, search_term, category_filter))


def record_amount(record: Record) -> float:
    """The record's amount as a float; missing or non-numeric amounts count as zero."""
    try:
        return float(record.get("amount", 0))
    except (TypeError, ValueError):
        logger.warning(f"Expense {record.get('_id')} has a non-numeric amount: {record.get('amount')!r}")
        return 0.0


def total_amount(records: Iterable[Record]) -> float:
    return sum((record_amount(r) for r in records), 0.0)


@dataclass(frozen=True)
class ViewSummary:
    filtered: Tuple[Record, ...]
    total_count: int
    filtered_count: int
    grand_total: float
    filtered_total: float


def summarize(records: Iterable[Record], search_term: str = "", category_filter: str = ALL_CATEGORIES) -> ViewSummary:
    snapshot = tuple(records)
    filtered = filter_expenses(snapshot, search_term, category_filter)
    return ViewSummary(
        filtered=filtered,
        total_count=len(snapshot),
        filtered_count=len(filtered),
        grand_total=total_amount(snapshot),
        filtered_total=total_amount(filtered),
    )


def format_amount(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """``1234.5`` -> ``₱1,234.50``"""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: Any) -> str:
    """Render an ISO timestamp (or datetime) as the local ``M/D/YYYY``; unparseable values are returned as-is."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone()
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)


class ExpenseView:
    def __init__(self, client):
        self.client = client
        self.records: Tuple[Record, ...] = ()
        self.search_term = ""
        self.category_filter = ALL_CATEGORIES
        self.form_open = False

    def load(self) -> bool:
        """Fetch the full record set once. On failure the list stays empty."""
        try:
            self.records = tuple(self.client.list_expenses())
        except ClientNetworkError as e:
            logger.error(f"Error fetching expenses: {e}")
            return False
        return True

    def set_search(self, term: str) -> None:
        self.search_term = term

    def set_category(self, category: str) -> None:
        if category != ALL_CATEGORIES and category not in CATEGORIES:
            logger.debug(f"Filtering on non-standard category {category!r}.")
        self.category_filter = category

    def open_form(self) -> None:
        self.form_open = True

    def close_form(self) -> None:
        self.form_open = False

    def add(self, payload: Record) -> Optional[Record]:
        """Create a record and put it at the front of the list; the list is not re-sorted."""
        try:
            created = self.client.create_expense(payload)
        except ClientNetworkError as e:
            logger.error(f"Error adding expense: {e}")
            return None
        self.records = (created,) + self.records
        self.form_open = False
        return created

    def remove(self, expense_id: str) -> bool:
        try:
            self.client.delete_expense(expense_id)
        except ClientNetworkError as e:
            logger.error(f"Error deleting expense: {e}")
            return False
        self.records = tuple(r for r in self.records if r.get("_id") != expense_id)
        return True

    @property
    def summary(self) -> ViewSummary:
        return summarize(self.records, self.search_term, self.category_filter)

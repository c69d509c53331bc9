from __future__ import annotations

import pytest
from rich.console import Console

from client.cli import main
from services.errors import ClientNetworkError


class RecordingClient:
    def __init__(self, records=(), fail_on=()):
        self.records = [dict(r) for r in records]
        self.fail_on = set(fail_on)
        self.calls = []

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise ClientNetworkError(f"{name} failed")

    def list_expenses(self):
        self._maybe_fail("list")
        return list(self.records)

    def create_expense(self, payload):
        self._maybe_fail("create")
        return dict(payload, _id="fresh", date=payload.get("date", "2026-10-18T00:00:00Z"))

    def delete_expense(self, expense_id):
        self._maybe_fail("delete")
        return {"message": "Expense removed"}

    def health(self):
        self._maybe_fail("health")
        return {"message": "API is working"}


RECORDS = [
    {"_id": "a1", "description": "Lunch", "amount": 12.5, "category": "Food & Dining", "date": "2026-10-17T12:00:00Z"},
    {"_id": "b2", "description": "Train", "amount": 1000.0, "category": "Transport", "date": "2026-10-16T12:00:00Z"},
]


@pytest.fixture()
def console():
    return Console(record=True, width=140)


def test_list_renders_filtered_table_and_totals(console):
    code = main(["list", "--category", "Transport"], console=console, client=RecordingClient(RECORDS))
    output = console.export_text()
    assert code == 0
    assert "Train" in output
    assert "Lunch" not in output
    assert "Total Expenses: 2" in output
    assert "Total Spent: ₱1,012.50" in output
    assert "Filtered Total: ₱1,000.00" in output


def test_add_prints_new_record(console):
    client = RecordingClient(RECORDS)
    code = main(["add", "Coffee", "4.5", "Food & Dining", "--date", "2026-10-18"], console=console, client=client)
    assert code == 0
    assert client.calls == ["list", "create"]
    assert "fresh" in console.export_text()


def test_add_failure_exits_non_zero(console):
    code = main(["add", "Coffee", "4.5", "Food & Dining"], console=console, client=RecordingClient(RECORDS, fail_on={"create"}))
    assert code == 1


def test_delete(console):
    code = main(["delete", "a1"], console=console, client=RecordingClient(RECORDS))
    output = console.export_text()
    assert code == 0
    assert "Expense removed" in output
    assert "Lunch" not in output


def test_unreachable_api(console):
    assert main(["list"], console=console, client=RecordingClient(fail_on={"list"})) == 1
    assert main(["health"], console=console, client=RecordingClient(fail_on={"health"})) == 1


def test_health(console):
    assert main(["health"], console=console, client=RecordingClient()) == 0
    assert "API is working" in console.export_text()


def test_bad_date_is_rejected():
    with pytest.raises(SystemExit):
        main(["add", "Coffee", "4.5", "Food & Dining", "--date", "18/10/2026"], client=RecordingClient())

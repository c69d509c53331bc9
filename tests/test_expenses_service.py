from __future__ import annotations

import pytest

from services.errors import ExpenseNotFoundError, ExpenseValidationError


async def test_create_expense_validates_and_persists(service):
    expense = await service.create_expense({"description": " Bus ", "amount": "2.00", "category": " Transport"})
    assert expense.description == " Bus "
    assert expense.category == " Transport"
    assert expense.amount == 2.0
    assert [e.id for e in await service.list_expenses()] == [expense.id]


async def test_create_expense_ignores_client_supplied_ids(service):
    expense = await service.create_expense(
        {"_id": "0123456789abcdef01234567", "description": "Bus", "amount": 2, "category": "Transport"}
    )
    assert expense.id != "0123456789abcdef01234567"


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"amount": 1, "category": "Shopping"}, "description"),
        ({"description": "Socks", "category": "Shopping"}, "amount"),
        ({"description": "Socks", "amount": 1}, "category"),
        ({"description": "Socks", "amount": "lots", "category": "Shopping"}, "amount"),
        ({"description": "Socks", "amount": 1, "category": ""}, "category"),
        ({"description": "Socks", "amount": 1, "category": "   "}, "category"),
        ({"description": "Socks", "amount": float("nan"), "category": "Shopping"}, "amount"),
        ({"description": "Socks", "amount": float("inf"), "category": "Shopping"}, "amount"),
    ],
)
async def test_create_expense_rejects_bad_payloads(service, payload, field):
    with pytest.raises(ExpenseValidationError, match=field):
        await service.create_expense(payload)
    assert await service.list_expenses() == []


async def test_create_expense_rejects_non_mapping(service):
    with pytest.raises(ExpenseValidationError):
        await service.create_expense(["not", "a", "dict"])


async def test_get_and_delete_expense(service):
    expense = await service.create_expense({"description": "Gym", "amount": 30, "category": "Entertainment"})
    assert (await service.get_expense(expense.id)).description == "Gym"

    await service.delete_expense(expense.id)
    with pytest.raises(ExpenseNotFoundError):
        await service.get_expense(expense.id)
    with pytest.raises(ExpenseNotFoundError):
        await service.delete_expense(expense.id)

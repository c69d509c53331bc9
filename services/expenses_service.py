"""Service layer for handling expense-related logic."""
import logging
from typing import Any, List, Mapping

from pydantic import ValidationError

from models.expense import Expense, ExpenseCreate
from services.errors import ExpenseNotFoundError, ExpenseValidationError
from services.expense_store import ExpenseStore

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "Expense validation failed: " + "; ".join(parts)


class ExpenseService:
    """
    Request-independent operations on expenses.

    Built once at startup around an ``ExpenseStore`` and shared by every request;
    it holds no mutable state of its own.
    """

    def __init__(self, store: ExpenseStore):
        self.store = store

    async def list_expenses(self) -> List[Expense]:
        expenses = await self.store.list_all()
        logger.info(f"Fetched {len(expenses)} expenses.")
        return expenses

    async def create_expense(self, payload: Mapping[str, Any]) -> Expense:
        """Validate a raw request body and persist it. Raises ``ExpenseValidationError``."""
        if not isinstance(payload, Mapping):
            raise ExpenseValidationError("Expense validation failed: body must be a JSON object")
        try:
            expense_in = ExpenseCreate.model_validate(dict(payload))
        except ValidationError as e:
            message = _describe_validation_error(e)
            logger.warning(message)
            raise ExpenseValidationError(message) from e

        expense = await self.store.create(expense_in)
        logger.info(f"Created expense {expense.id} ({expense.category}, {expense.amount:.2f}).")
        return expense

    async def get_expense(self, expense_id: str) -> Expense:
        expense = await self.store.find_by_id(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(expense_id)
        return expense

    async def delete_expense(self, expense_id: str) -> None:
        await self.store.delete_by_id(expense_id)
        logger.info(f"Removed expense {expense_id}.")

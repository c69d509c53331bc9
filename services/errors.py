"""Exceptions shared by the store, the service layer and the client."""
from typing import Optional


class ExpenseValidationError(ValueError):
    """Raised when an expense is missing a required field or has an unusable value."""


class ExpenseNotFoundError(LookupError):
    """Raised when no expense exists with the requested id."""

    def __init__(self, expense_id: str):
        super().__init__(f"Expense {expense_id} not found")
        self.expense_id = expense_id


class StoreError(ConnectionError):
    """Raised on connectivity problems or unexpected persistence failures."""


class ClientNetworkError(ConnectionError):
    """Raised by the HTTP client when a request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

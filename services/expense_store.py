"""MongoDB-backed persistence for expense records."""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from models.expense import Expense, ExpenseCreate, as_utc
from services.errors import ExpenseNotFoundError, ExpenseValidationError, StoreError

logger = logging.getLogger(__name__)

# Newest first; ObjectIds grow with insertion so equal dates keep insertion order.
LIST_SORT = [("date", DESCENDING), ("_id", ASCENDING)]


def _object_id(expense_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(expense_id)
    except (InvalidId, TypeError):
        return None


class ExpenseStore:
    """Create, list, look up and delete expense documents in one Motor collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create(self, expense_in: ExpenseCreate) -> Expense:
        for field in ("description", "category"):
            if not getattr(expense_in, field, None):
                raise ExpenseValidationError(f"Path `{field}` is required.")
        if expense_in.amount is None:
            raise ExpenseValidationError("Path `amount` is required.")

        now = as_utc(datetime.now(timezone.utc))
        doc = {
            "description": expense_in.description,
            "amount": expense_in.amount,
            "category": expense_in.category,
            "date": expense_in.date or now,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Database error inserting expense: {e}")
            raise StoreError(f"Database error inserting expense: {e}") from e
        doc["_id"] = result.inserted_id
        logger.info(f"Inserted expense {result.inserted_id} into '{self.collection.name}'.")
        return Expense.from_document(doc)

    async def list_all(self) -> List[Expense]:
        expenses = []
        try:
            async for doc in self.collection.find().sort(LIST_SORT):
                expenses.append(Expense.from_document(doc))
        except PyMongoError as e:
            logger.error(f"Database error fetching expenses: {e}")
            raise StoreError(f"Database error fetching expenses: {e}") from e
        logger.debug(f"Fetched {len(expenses)} expenses from '{self.collection.name}'.")
        return expenses

    async def find_by_id(self, expense_id: str) -> Optional[Expense]:
        oid = _object_id(expense_id)
        if oid is None:
            return None
        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Database error fetching expense {expense_id}: {e}")
            raise StoreError(f"Database error fetching expense {expense_id}: {e}") from e
        return Expense.from_document(doc) if doc else None

    async def delete_by_id(self, expense_id: str) -> None:
        oid = _object_id(expense_id)
        if oid is None:
            raise ExpenseNotFoundError(expense_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Database error deleting expense {expense_id}: {e}")
            raise StoreError(f"Database error deleting expense {expense_id}: {e}") from e
        if result.deleted_count == 0:
            raise ExpenseNotFoundError(expense_id)
        logger.info(f"Deleted expense {expense_id} from '{self.collection.name}'.")

    async def count(self) -> int:
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            raise StoreError(f"Database error counting expenses: {e}") from e

"""Pydantic models for Expense data"""
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CATEGORIES = (
    "Food & Dining",
    "Shopping",
    "Transport",
    "Entertainment",
    "Utilities",
)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime truncated to milliseconds (BSON precision)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class ExpenseCreate(BaseModel):
    """
    Validated body of a create request. Unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    description: str
    amount: float = Field(allow_inf_nan=False)
    category: str
    date: Optional[datetime] = None

    @field_validator("description", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("date")
    @classmethod
    def _normalise_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class Expense(BaseModel):
    """
    A single stored expense record, as returned by the API.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(alias="_id")
    description: str
    amount: float
    category: str
    date: datetime
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        # ObjectId from Mongo, plain str from JSON
        return str(value)

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_document(cls, doc: dict) -> "Expense":
        return cls.model_validate(doc)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

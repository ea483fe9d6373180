import math
from datetime import date as date_type, datetime
from pydantic import BaseModel, ConfigDict, field_validator

from ..models.expense import Participant
from .money import Money


def normalize_label(value: str) -> str:
    """Category/concept labels are stored trimmed and lowercase."""
    return (value or "").strip().lower()


class ExpenseCreate(BaseModel):
    """Fields for recording an expense. Date defaults to the period's first day."""
    date: date_type | None = None
    category: str
    concept: str
    amount: float

    @field_validator("category", "concept")
    @classmethod
    def _label_not_empty(cls, value: str, info) -> str:
        label = normalize_label(value)
        if not label:
            raise ValueError(f"{info.field_name} cannot be empty")
        return label

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("amount must be greater than 0")
        return value


class ExpenseRecord(BaseModel):
    """An expense as stored, delivered to subscribers and API clients."""
    model_config = ConfigDict(frozen=True)

    id: str
    period_key: str
    date: str
    category: str
    concept: str
    amount: Money
    participant: Participant
    created_at: datetime | None = None

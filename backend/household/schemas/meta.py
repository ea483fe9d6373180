from datetime import datetime
from pydantic import BaseModel, ConfigDict

from .money import Money


class PeriodMetaBase(BaseModel):
    """Income and savings fields of a period. Missing values are 0."""
    income_primary: Money = 0.0
    income_secondary: Money = 0.0
    savings_target: Money = 0.0
    savings_extra: Money = 0.0
    savings_goal: Money = 0.0
    savings_accumulated: Money = 0.0


class PeriodMetaUpdate(BaseModel):
    """Partial merge-write of period metadata (all optional)."""
    income_primary: float | None = None
    income_secondary: float | None = None
    savings_target: float | None = None
    savings_extra: float | None = None
    savings_goal: float | None = None
    savings_accumulated: float | None = None


class PeriodMetaSnapshot(PeriodMetaBase):
    """Immutable copy of a period's metadata as delivered to subscribers."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    budget_id: str
    period_key: str
    updated_at: datetime | None = None


class SavingsGoalSuggestion(BaseModel):
    """Request to set the savings goal to a share of total income."""
    percent: float

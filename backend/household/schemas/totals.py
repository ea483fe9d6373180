from __future__ import annotations
from typing import Any
from pydantic import BaseModel, ConfigDict

from .meta import PeriodMetaSnapshot
from .money import Money


class CategoryGroup(BaseModel):
    """Expenses of one category, sub-grouped by concept."""
    total: Money
    by_concept: dict[str, list[Any]]


class TotalsView(BaseModel):
    """Derived figures for one period.

    savings_progress_percent is None when no savings goal is set, so that
    "no goal" is never confused with 0% of a real goal.
    """
    model_config = ConfigDict(frozen=True)

    total_income: Money
    total_savings: Money
    available_to_spend: Money
    total_expenses: Money
    final_balance: Money
    savings_goal: Money
    savings_progress_percent: float | None
    savings_accumulated: Money
    savings_exceed_income: bool
    by_category: dict[str, CategoryGroup]


class DistributionItem(BaseModel):
    category: str
    total: Money
    color: str


class CategoryDetail(BaseModel):
    category: str
    items: list[Any]
    count: int
    total: Money


class DashboardView(BaseModel):
    period_key: str
    totals: TotalsView
    filtered: list[Any]
    filtered_count: int
    distribution: list[DistributionItem]
    categories: list[str]
    selected_category: CategoryDetail | None = None


class ConsolidationResult(BaseModel):
    consolidated: bool
    amount: Money
    meta: PeriodMetaSnapshot | None = None

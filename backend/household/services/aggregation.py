"""
Budget aggregation engine.

Derives the totals shown for a period from its metadata record and its
expenses. Everything here is a pure function of its arguments: nothing is
cached, nothing is written back, and the inputs are never mutated.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from ..schemas.totals import CategoryGroup, TotalsView


def coerce_amount(value: Any) -> float:
    """
    Turn a stored value into a float for arithmetic.

    Missing, non-numeric, boolean and non-finite values count as 0 so that
    a partially filled record never turns a displayed total into NaN.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def get_field(record: Any, name: str) -> Any:
    """Read a field from a mapping, a pydantic model or an ORM row."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _label(record: Any, name: str) -> str:
    value = get_field(record, name)
    return "" if value is None else str(value)


def compute_totals(meta: Any, transactions: Iterable[Any]) -> TotalsView:
    """
    Compute the TotalsView for one period.

    `meta` may be None (no record yet). Transaction order only affects the
    iteration order of by_category, never the figures.
    """
    income_primary = coerce_amount(get_field(meta, "income_primary"))
    income_secondary = coerce_amount(get_field(meta, "income_secondary"))
    savings_target = coerce_amount(get_field(meta, "savings_target"))
    savings_extra = coerce_amount(get_field(meta, "savings_extra"))
    goal = coerce_amount(get_field(meta, "savings_goal"))

    total_income = income_primary + income_secondary
    total_savings = savings_target + savings_extra
    available = total_income - total_savings

    # Group by category, then concept
    groups: dict[str, dict] = {}
    total_expenses = 0.0
    for tx in transactions:
        amount = coerce_amount(get_field(tx, "amount"))
        total_expenses += amount

        group = groups.setdefault(_label(tx, "category"), {"total": 0.0, "by_concept": {}})
        group["total"] += amount
        group["by_concept"].setdefault(_label(tx, "concept"), []).append(tx)

    if goal > 0:
        progress = min(100.0, total_savings / goal * 100)
    else:
        progress = None

    return TotalsView(
        total_income=total_income,
        total_savings=total_savings,
        available_to_spend=available,
        total_expenses=total_expenses,
        final_balance=available - total_expenses,
        savings_goal=goal,
        savings_progress_percent=progress,
        savings_accumulated=coerce_amount(get_field(meta, "savings_accumulated")),
        savings_exceed_income=total_savings > total_income,
        by_category={
            category: CategoryGroup(total=g["total"], by_concept=g["by_concept"])
            for category, g in groups.items()
        },
    )


def suggest_savings_goal(total_income: float, percent: float) -> float:
    """Savings goal worth `percent`% of total income, rounded to cents."""
    return round(coerce_amount(total_income) * coerce_amount(percent) / 100, 2)

"""
Filters and category distribution for the analytics view.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..schemas.totals import CategoryDetail, DistributionItem
from .aggregation import coerce_amount, get_field

ALL = "all"

# Chart colours per category; anything else gets the fallback
CATEGORY_COLORS = {
    "ocio": "#60a5fa",
    "comida": "#34d399",
    "entretenimiento": "#f472b6",
    "alojamiento": "#fbbf24",
    "transporte": "#22d3ee",
    "prestamos": "#fb7185",
    "cuidado personal": "#e879f9",
}
FALLBACK_COLOR = "#a78bfa"


@dataclass(frozen=True)
class FilterSpec:
    """Analytics filter selections. "all" disables a filter."""
    category: str = ALL
    participant: str = ALL
    search: str = ""


def color_for_category(category: str) -> str:
    return CATEGORY_COLORS.get((category or "").strip().lower(), FALLBACK_COLOR)


def _text(record: Any, name: str) -> str:
    value = get_field(record, name)
    if value is None:
        return ""
    # Participant enums compare by their value
    return str(getattr(value, "value", value))


def matches(record: Any, spec: FilterSpec) -> bool:
    """Check a single expense against the filter selections."""
    if spec.category != ALL and _text(record, "category") != spec.category:
        return False
    if spec.participant != ALL and _text(record, "participant") != spec.participant:
        return False

    if spec.search.strip():
        needle = spec.search.lower()
        return (
            needle in _text(record, "concept").lower()
            or needle in _text(record, "category").lower()
        )
    return True


def filter_transactions(transactions: Iterable[Any], spec: FilterSpec) -> list[Any]:
    """Return the matching expenses, keeping their original relative order."""
    return [t for t in transactions if matches(t, spec)]


def distribution(transactions: Iterable[Any]) -> list[DistributionItem]:
    """
    Total spent per category, largest first.

    The same list feeds both the proportion and the comparison charts.
    Categories with equal totals keep the order they were first seen in.
    """
    totals: dict[str, float] = {}
    for t in transactions:
        category = _text(t, "category")
        totals[category] = totals.get(category, 0.0) + coerce_amount(get_field(t, "amount"))

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        DistributionItem(category=category, total=total, color=color_for_category(category))
        for category, total in ordered
    ]


def category_options(transactions: Iterable[Any]) -> list[str]:
    """Distinct categories, sorted, for the category filter."""
    return sorted({_text(t, "category") for t in transactions})


def category_detail(filtered: Sequence[Any], category: str) -> CategoryDetail:
    """Drill-down into one category of an already filtered list."""
    items = [t for t in filtered if _text(t, "category") == category]
    return CategoryDetail(
        category=category,
        items=items,
        count=len(items),
        total=sum(coerce_amount(get_field(t, "amount")) for t in items),
    )

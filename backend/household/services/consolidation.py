import logging
from typing import Any

from ..schemas.totals import ConsolidationResult
from .aggregation import coerce_amount, get_field

logger = logging.getLogger(__name__)


def period_savings(meta: Any) -> float:
    return (
        coerce_amount(get_field(meta, "savings_target"))
        + coerce_amount(get_field(meta, "savings_extra"))
    )


def plan_consolidation(meta: Any) -> dict[str, float] | None:
    """
    Fields to merge-write so this period's savings move into the running total.

    Returns None when there is nothing to move (savings of 0 or less).
    """
    moved = period_savings(meta)
    if moved <= 0:
        return None
    return {
        "savings_target": 0.0,
        "savings_extra": 0.0,
        "savings_accumulated": coerce_amount(get_field(meta, "savings_accumulated")) + moved,
    }


def consolidate(store, period_key: str) -> ConsolidationResult:
    """Fold the period's savings into savings_accumulated with one merge-write."""
    before, after = store.apply(period_key, plan_consolidation)
    if after is None:
        logger.warning("Nothing to consolidate for %s", period_key)
        return ConsolidationResult(consolidated=False, amount=0.0, meta=before)

    moved = period_savings(before)
    logger.info("Consolidated %.2f of savings for %s", moved, period_key)
    return ConsolidationResult(consolidated=True, amount=moved, meta=after)

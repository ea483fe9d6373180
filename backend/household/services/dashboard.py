"""
View model for a budget period.

`build_dashboard_view` is the pure recompute step. `BudgetDashboard` wires it
to the two stores: it keeps the latest snapshot delivered by each
subscription and rebuilds the view whenever either one changes. The two
streams are independent, so the view may briefly combine fresh metadata with
stale expenses (or the reverse) until the other stream catches up.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from ..schemas.meta import PeriodMetaSnapshot
from ..schemas.totals import DashboardView
from .aggregation import compute_totals
from .filtering import FilterSpec, category_detail, category_options, distribution, filter_transactions

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 20


@dataclass(frozen=True)
class DashboardState:
    """UI selections, owned by the caller and passed in explicitly."""
    period_key: str
    filters: FilterSpec = field(default_factory=FilterSpec)
    selected_category: str | None = None
    limit: int = DEFAULT_LIST_LIMIT


def build_dashboard_view(meta: Any, transactions: Sequence[Any], state: DashboardState) -> DashboardView:
    filtered = filter_transactions(transactions, state.filters)
    limit = max(0, state.limit)
    return DashboardView(
        period_key=state.period_key,
        totals=compute_totals(meta, transactions),
        filtered=filtered[:limit],
        filtered_count=len(filtered),
        distribution=distribution(filtered),
        categories=category_options(transactions),
        selected_category=(
            category_detail(filtered, state.selected_category)
            if state.selected_category else None
        ),
    )


class BudgetDashboard:
    """Keeps a DashboardView current for one period while subscribed."""

    def __init__(
        self,
        meta_store,
        transaction_store,
        state: DashboardState,
        on_render: Callable[[DashboardView], None] | None = None,
    ):
        self.meta_store = meta_store
        self.transaction_store = transaction_store
        self.state = state
        self.on_render = on_render
        self.view: DashboardView | None = None
        self._meta: PeriodMetaSnapshot | None = None
        self._transactions: tuple = ()
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def is_running(self) -> bool:
        return bool(self._unsubscribers)

    def start(self) -> None:
        if self.is_running:
            return
        period_key = self.state.period_key
        self._unsubscribers.append(self.meta_store.subscribe(period_key, self._on_meta))
        self._unsubscribers.append(self.transaction_store.subscribe(period_key, self._on_transactions))
        logger.debug("Dashboard watching %s", period_key)

    def stop(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def switch_period(self, period_key: str) -> None:
        """Watch another period; selections other than the period are kept."""
        self.stop()
        self.state = replace(self.state, period_key=period_key, selected_category=None)
        self._meta = None
        self._transactions = ()
        self.start()

    def update_state(self, **changes) -> DashboardView:
        """Change filters/selection without touching the subscriptions."""
        if "period_key" in changes:
            raise ValueError("Use switch_period() to change the period")
        self.state = replace(self.state, **changes)
        return self._refresh()

    def _on_meta(self, snapshot: PeriodMetaSnapshot | None) -> None:
        if snapshot is None:
            # New period: the record is created here, the write notifies us again
            ensured = self.meta_store.ensure(self.state.period_key)
            if self._meta is None:
                self._meta = ensured
                self._refresh()
            return
        self._meta = snapshot
        self._refresh()

    def _on_transactions(self, records: Sequence[Any]) -> None:
        self._transactions = tuple(records)
        self._refresh()

    def _refresh(self) -> DashboardView:
        self.view = build_dashboard_view(self._meta, self._transactions, self.state)
        if self.on_render is not None:
            self.on_render(self.view)
        return self.view

from .aggregation import compute_totals, coerce_amount, suggest_savings_goal
from .filtering import (
    FilterSpec,
    filter_transactions,
    distribution,
    category_options,
    category_detail,
    color_for_category,
)
from .consolidation import plan_consolidation, consolidate
from .subscriptions import ChangeHub, change_hub
from .stores import MetadataStore, TransactionStore, MissingParticipantError
from .dashboard import DashboardState, BudgetDashboard, build_dashboard_view

__all__ = [
    "compute_totals",
    "coerce_amount",
    "suggest_savings_goal",
    "FilterSpec",
    "filter_transactions",
    "distribution",
    "category_options",
    "category_detail",
    "color_for_category",
    "plan_consolidation",
    "consolidate",
    "ChangeHub",
    "change_hub",
    "MetadataStore",
    "TransactionStore",
    "MissingParticipantError",
    "DashboardState",
    "BudgetDashboard",
    "build_dashboard_view",
]

from .meta import PeriodMetaBase, PeriodMetaUpdate, PeriodMetaSnapshot, SavingsGoalSuggestion
from .expense import ExpenseCreate, ExpenseRecord
from .totals import (
    CategoryGroup,
    TotalsView,
    DistributionItem,
    CategoryDetail,
    DashboardView,
    ConsolidationResult,
)
from .identity import IdentityUpdate, IdentityResponse

__all__ = [
    "PeriodMetaBase",
    "PeriodMetaUpdate",
    "PeriodMetaSnapshot",
    "SavingsGoalSuggestion",
    "ExpenseCreate",
    "ExpenseRecord",
    "CategoryGroup",
    "TotalsView",
    "DistributionItem",
    "CategoryDetail",
    "DashboardView",
    "ConsolidationResult",
    "IdentityUpdate",
    "IdentityResponse",
]

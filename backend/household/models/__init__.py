from .base import Base
from .period_meta import PeriodMeta, META_FIELDS
from .expense import Expense, Participant

__all__ = [
    "Base",
    "PeriodMeta",
    "META_FIELDS",
    "Expense",
    "Participant",
]

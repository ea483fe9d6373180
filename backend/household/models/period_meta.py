from sqlalchemy import String, Integer, Float, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


# Columns a client may merge-write; everything else is bookkeeping
META_FIELDS = (
    "income_primary",
    "income_secondary",
    "savings_target",
    "savings_extra",
    "savings_goal",
    "savings_accumulated",
)


class PeriodMeta(Base, TimestampMixin):
    """
    Income and savings figures for one budget period (a calendar month).

    Exactly one row per (budget_id, period_key). Amounts are plain floats;
    they are rounded only when presented.
    """

    __tablename__ = "period_meta"
    __table_args__ = (
        UniqueConstraint("budget_id", "period_key", name="uq_period_meta"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    budget_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    period_key: Mapped[str] = mapped_column(String(7), nullable=False, index=True)

    # Incomes, one per participant
    income_primary: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    income_secondary: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Savings for this period
    savings_target: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    savings_extra: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    savings_goal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Running total across periods (informational)
    savings_accumulated: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return f"<PeriodMeta(budget='{self.budget_id}', period='{self.period_key}')>"

import enum
from sqlalchemy import String, Integer, Float, Enum
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Participant(str, enum.Enum):
    """The two household members. PRIMARY owns income_primary."""
    PRIMARY = "alba"
    SECONDARY = "alberto"


class Expense(Base, TimestampMixin):
    """
    A single recorded expense within a budget period.

    Expenses are append-only: they are created and deleted, never edited.
    The date is for ordering and display; the period is given by period_key.
    """

    __tablename__ = "expenses"

    # Row key is internal; clients only ever see expense_id
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    expense_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

    budget_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    period_key: Mapped[str] = mapped_column(String(7), nullable=False, index=True)

    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)  # lowercase, trimmed
    concept: Mapped[str] = mapped_column(String(255), nullable=False)  # lowercase, trimmed
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    participant: Mapped[Participant] = mapped_column(Enum(Participant), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Expense(id='{self.expense_id}', date={self.date}, "
            f"amount={self.amount:.2f}, category='{self.category}')>"
        )

"""
Stores for period metadata and expenses.

Each write runs in its own session scope and is committed before any
subscriber is notified, so subscribers only ever see committed state.
Subscribers receive the full current snapshot of the period, never a diff.
"""

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import BUDGET_ID
from ..database import session_scope
from ..models import Expense, Participant, PeriodMeta, META_FIELDS
from ..schemas.expense import ExpenseCreate, ExpenseRecord
from ..schemas.meta import PeriodMetaSnapshot
from .aggregation import coerce_amount
from .periods import first_day, validate_period_key
from .subscriptions import ChangeHub, change_hub

logger = logging.getLogger(__name__)


class MissingParticipantError(Exception):
    """An expense was written without choosing a participant first."""


MetaPlan = Callable[[PeriodMetaSnapshot | None], Mapping[str, Any] | None]


class MetadataStore:
    """One mutable income/savings record per period."""

    def __init__(self, hub: ChangeHub = change_hub, budget_id: str = BUDGET_ID):
        self.hub = hub
        self.budget_id = budget_id

    def _topic(self, period_key: str) -> tuple:
        return ("meta", self.budget_id, period_key)

    def _row(self, db: Session, period_key: str) -> PeriodMeta | None:
        return db.query(PeriodMeta).filter(
            PeriodMeta.budget_id == self.budget_id,
            PeriodMeta.period_key == period_key,
        ).first()

    def read(self, period_key: str) -> PeriodMetaSnapshot | None:
        validate_period_key(period_key)
        with session_scope() as db:
            row = self._row(db, period_key)
            return PeriodMetaSnapshot.model_validate(row) if row else None

    def _apply(self, db: Session, period_key: str, partial: Mapping[str, Any], merge: bool) -> PeriodMetaSnapshot:
        unknown = set(partial) - set(META_FIELDS)
        if unknown:
            raise ValueError(f"Unknown metadata fields: {', '.join(sorted(unknown))}")

        row = self._row(db, period_key)
        if row is None:
            row = PeriodMeta(budget_id=self.budget_id, period_key=period_key)
            for field in META_FIELDS:
                setattr(row, field, 0.0)
            db.add(row)
        elif not merge:
            # Full replacement
            for field in META_FIELDS:
                setattr(row, field, 0.0)

        for field, value in partial.items():
            setattr(row, field, coerce_amount(value))

        db.flush()
        db.refresh(row)
        return PeriodMetaSnapshot.model_validate(row)

    def write(self, period_key: str, partial: Mapping[str, Any], merge: bool = True) -> PeriodMetaSnapshot:
        """
        Write metadata fields for a period in a single transaction.

        With merge=True only the given fields change; with merge=False the
        record is replaced and absent fields become 0.
        """
        validate_period_key(period_key)
        with session_scope(immediate=True) as db:
            snapshot = self._apply(db, period_key, partial, merge)

        self.hub.publish(self._topic(period_key), snapshot)
        return snapshot

    def apply(
        self, period_key: str, plan: MetaPlan
    ) -> tuple[PeriodMetaSnapshot | None, PeriodMetaSnapshot | None]:
        """
        Read, plan and merge-write in one transaction.

        `plan` receives the current snapshot and returns the fields to merge,
        or None to write nothing. Returns (before, after); after is None when
        nothing was written.
        """
        validate_period_key(period_key)
        with session_scope(immediate=True) as db:
            row = self._row(db, period_key)
            before = PeriodMetaSnapshot.model_validate(row) if row else None
            patch = plan(before)
            if patch is None:
                return before, None
            after = self._apply(db, period_key, patch, merge=True)

        self.hub.publish(self._topic(period_key), after)
        return before, after

    def ensure(self, period_key: str) -> PeriodMetaSnapshot:
        """Return the period's record, writing a zero-valued one if absent."""
        existing = self.read(period_key)
        if existing is not None:
            return existing
        try:
            return self.write(period_key, {})
        except IntegrityError:
            # Another client created it first
            return self.read(period_key)

    def subscribe(
        self, period_key: str, on_change: Callable[[PeriodMetaSnapshot | None], None]
    ) -> Callable[[], None]:
        """Deliver the current record now and after every write; None if absent."""
        validate_period_key(period_key)
        unsubscribe = self.hub.subscribe(self._topic(period_key), on_change)
        on_change(self.read(period_key))
        return unsubscribe


def _to_record(row: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=row.expense_id,
        period_key=row.period_key,
        date=row.date,
        category=row.category,
        concept=row.concept,
        amount=row.amount,
        participant=row.participant,
        created_at=row.created_at,
    )


class TransactionStore:
    """Append-only expense log, partitioned by period."""

    def __init__(self, hub: ChangeHub = change_hub, budget_id: str = BUDGET_ID):
        self.hub = hub
        self.budget_id = budget_id

    def _topic(self, period_key: str) -> tuple:
        return ("expenses", self.budget_id, period_key)

    def list_expenses(self, period_key: str) -> list[ExpenseRecord]:
        """Expenses of a period, oldest date first, then in creation order."""
        validate_period_key(period_key)
        with session_scope() as db:
            rows = db.query(Expense).filter(
                Expense.budget_id == self.budget_id,
                Expense.period_key == period_key,
            ).order_by(
                Expense.date,
                Expense.created_at,
                Expense.pk,
            ).all()
            return [_to_record(row) for row in rows]

    def get(self, period_key: str, expense_id: str) -> ExpenseRecord | None:
        validate_period_key(period_key)
        with session_scope() as db:
            row = self._row(db, period_key, expense_id)
            return _to_record(row) if row else None

    def _row(self, db: Session, period_key: str, expense_id: str) -> Expense | None:
        return db.query(Expense).filter(
            Expense.budget_id == self.budget_id,
            Expense.period_key == period_key,
            Expense.expense_id == expense_id,
        ).first()

    def append(
        self,
        period_key: str,
        record: ExpenseCreate | Mapping[str, Any],
        participant: Participant | None,
    ) -> str:
        """
        Validate and store a new expense; returns its id.

        Raises pydantic.ValidationError for empty labels or a non-positive
        amount and MissingParticipantError when no participant is given.
        Nothing is written in either case.
        """
        validate_period_key(period_key)
        if not isinstance(record, ExpenseCreate):
            record = ExpenseCreate.model_validate(record)
        if participant is None:
            raise MissingParticipantError("Choose a participant before adding expenses")

        expense_id = uuid.uuid4().hex
        with session_scope(immediate=True) as db:
            db.add(Expense(
                expense_id=expense_id,
                budget_id=self.budget_id,
                period_key=period_key,
                date=(record.date or first_day(period_key)).isoformat(),
                category=record.category,
                concept=record.concept,
                amount=record.amount,
                participant=Participant(participant),
            ))

        logger.info(
            "Added expense %s to %s: %.2f %s/%s",
            expense_id, period_key, record.amount, record.category, record.concept,
        )
        self._notify(period_key)
        return expense_id

    def delete(self, period_key: str, expense_id: str) -> None:
        validate_period_key(period_key)
        with session_scope(immediate=True) as db:
            row = self._row(db, period_key, expense_id)
            if row is None:
                raise LookupError(f"Expense {expense_id} not found in {period_key}")
            db.delete(row)

        logger.info("Deleted expense %s from %s", expense_id, period_key)
        self._notify(period_key)

    def _notify(self, period_key: str) -> None:
        topic = self._topic(period_key)
        if self.hub.has_subscribers(topic):
            self.hub.publish(topic, tuple(self.list_expenses(period_key)))

    def subscribe(
        self, period_key: str, on_change: Callable[[tuple[ExpenseRecord, ...]], None]
    ) -> Callable[[], None]:
        """Deliver the ordered expenses now and after every append/delete."""
        validate_period_key(period_key)
        unsubscribe = self.hub.subscribe(self._topic(period_key), on_change)
        on_change(tuple(self.list_expenses(period_key)))
        return unsubscribe

from fastapi import APIRouter, Depends, HTTPException, Header

from ..config import current_participant
from ..models import Participant
from ..schemas import ExpenseCreate, ExpenseRecord
from ..services import TransactionStore, MissingParticipantError
from .periods import check_period, get_transaction_store

router = APIRouter()


@router.get("/{period_key}/expenses", response_model=list[ExpenseRecord])
def list_expenses(period_key: str, store: TransactionStore = Depends(get_transaction_store)):
    """Get a period's expenses, ordered by date."""
    return store.list_expenses(check_period(period_key))


@router.post("/{period_key}/expenses", response_model=ExpenseRecord, status_code=201)
def add_expense(
    period_key: str,
    data: ExpenseCreate,
    x_participant: Participant | None = Header(None),
    store: TransactionStore = Depends(get_transaction_store),
):
    """
    Record an expense for the participant sending the request.

    Each client names itself in the X-Participant header; the identity saved
    on the server is only a fallback for single-user setups.
    """
    check_period(period_key)
    participant = x_participant or current_participant()
    try:
        expense_id = store.append(period_key, data, participant)
    except MissingParticipantError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return store.get(period_key, expense_id)


@router.delete("/{period_key}/expenses/{expense_id}", status_code=204)
def delete_expense(
    period_key: str,
    expense_id: str,
    store: TransactionStore = Depends(get_transaction_store),
):
    """Delete an expense."""
    check_period(period_key)
    try:
        store.delete(period_key, expense_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Expense not found")
    return None

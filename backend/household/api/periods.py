from fastapi import APIRouter, Depends, HTTPException, Query

from ..database import is_ledger_open
from ..schemas import (
    PeriodMetaBase,
    PeriodMetaUpdate,
    PeriodMetaSnapshot,
    SavingsGoalSuggestion,
    TotalsView,
    DashboardView,
    ConsolidationResult,
)
from ..services import (
    MetadataStore,
    TransactionStore,
    FilterSpec,
    DashboardState,
    build_dashboard_view,
    compute_totals,
    consolidate,
    suggest_savings_goal,
)
from ..services.dashboard import DEFAULT_LIST_LIMIT
from ..services.periods import current_period_key, is_period_key

router = APIRouter()


def get_metadata_store() -> MetadataStore:
    """FastAPI dependency for the metadata store of the open ledger."""
    if not is_ledger_open():
        raise HTTPException(status_code=400, detail="No ledger is open")
    return MetadataStore()


def get_transaction_store() -> TransactionStore:
    """FastAPI dependency for the expense store of the open ledger."""
    if not is_ledger_open():
        raise HTTPException(status_code=400, detail="No ledger is open")
    return TransactionStore()


def check_period(period_key: str) -> str:
    if not is_period_key(period_key):
        raise HTTPException(status_code=400, detail="Period must be in YYYY-MM format")
    return period_key


@router.get("/current")
def get_current_period():
    """Period key for today's month."""
    return {"period_key": current_period_key()}


@router.get("/{period_key}/meta", response_model=PeriodMetaSnapshot)
def get_meta(period_key: str, store: MetadataStore = Depends(get_metadata_store)):
    """Get a period's income/savings record, creating an empty one if needed."""
    return store.ensure(check_period(period_key))


@router.patch("/{period_key}/meta", response_model=PeriodMetaSnapshot)
def update_meta(
    period_key: str,
    data: PeriodMetaUpdate,
    store: MetadataStore = Depends(get_metadata_store),
):
    """Merge the given fields into the period's record."""
    return store.write(check_period(period_key), data.model_dump(exclude_unset=True), merge=True)


@router.put("/{period_key}/meta", response_model=PeriodMetaSnapshot)
def replace_meta(
    period_key: str,
    data: PeriodMetaBase,
    store: MetadataStore = Depends(get_metadata_store),
):
    """Replace the period's record; omitted fields become 0."""
    return store.write(check_period(period_key), data.model_dump(exclude_unset=True), merge=False)


@router.get("/{period_key}/totals", response_model=TotalsView)
def get_totals(
    period_key: str,
    meta_store: MetadataStore = Depends(get_metadata_store),
    transaction_store: TransactionStore = Depends(get_transaction_store),
):
    check_period(period_key)
    return compute_totals(
        meta_store.ensure(period_key),
        transaction_store.list_expenses(period_key),
    )


@router.post("/{period_key}/savings-goal/suggest", response_model=PeriodMetaSnapshot)
def suggest_goal(
    period_key: str,
    data: SavingsGoalSuggestion,
    store: MetadataStore = Depends(get_metadata_store),
):
    """Set the savings goal to a percentage of the period's total income."""
    check_period(period_key)
    if data.percent <= 0 or data.percent > 100:
        raise HTTPException(status_code=400, detail="Percent must be between 0 and 100")

    def plan(meta):
        total_income = compute_totals(meta, ()).total_income
        return {"savings_goal": suggest_savings_goal(total_income, data.percent)}

    _, after = store.apply(period_key, plan)
    return after


@router.post("/{period_key}/consolidate", response_model=ConsolidationResult)
def consolidate_savings(period_key: str, store: MetadataStore = Depends(get_metadata_store)):
    """Move this period's savings into the accumulated total."""
    return consolidate(store, check_period(period_key))


@router.get("/{period_key}/analytics", response_model=DashboardView)
def get_analytics(
    period_key: str,
    category: str = Query("all"),
    participant: str = Query("all"),
    search: str = Query(""),
    selected: str | None = Query(None),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=0),
    meta_store: MetadataStore = Depends(get_metadata_store),
    transaction_store: TransactionStore = Depends(get_transaction_store),
):
    """
    Totals, filtered expenses and the per-category distribution.

    The filtered list is capped at `limit`; filtered_count is the full count.
    `selected` drills into one category of the filtered set.
    """
    check_period(period_key)
    state = DashboardState(
        period_key=period_key,
        filters=FilterSpec(category=category, participant=participant, search=search),
        selected_category=selected,
        limit=limit,
    )
    return build_dashboard_view(
        meta_store.ensure(period_key),
        transaction_store.list_expenses(period_key),
        state,
    )

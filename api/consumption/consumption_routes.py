from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from config.database import get_db
from config.score_config import ResourceType
from middlewares.auth_middleware import auth_middleware
from api.consumption.consumption_controller import (
    add_metered_data,
    add_waste_data,
    get_metered_history,
    get_waste_history,
    delete_data,
    get_last_month,
    get_stats,
)
from api.consumption.consumption_schema import (
    MeteredUsageCreate,
    MeteredUsageRead,
    WasteUsageCreate,
    WasteUsageRead,
    MeteredHistory,
    WasteHistory,
    LastMonthResponse,
    ConsumptionStats,
)

router = APIRouter(prefix="/data", tags=["Consumption"])


# ─── Electricity ───────────────────────────────────────────────────────────
@router.post("/electricity", response_model=MeteredUsageRead, status_code=status.HTTP_201_CREATED)
def post_electricity(
    payload: MeteredUsageCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return add_metered_data(db, current_user, ResourceType.electricity, payload)


@router.get("/electricity", response_model=MeteredHistory)
def electricity_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    newest_first: bool = True,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_metered_history(db, current_user, ResourceType.electricity, page, limit, newest_first)


@router.delete("/electricity/{record_id}")
def remove_electricity(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return delete_data(db, current_user, ResourceType.electricity, record_id)


# ─── Water ─────────────────────────────────────────────────────────────────
@router.post("/water", response_model=MeteredUsageRead, status_code=status.HTTP_201_CREATED)
def post_water(
    payload: MeteredUsageCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return add_metered_data(db, current_user, ResourceType.water, payload)


@router.get("/water", response_model=MeteredHistory)
def water_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    newest_first: bool = True,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_metered_history(db, current_user, ResourceType.water, page, limit, newest_first)


@router.delete("/water/{record_id}")
def remove_water(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return delete_data(db, current_user, ResourceType.water, record_id)


# ─── Waste ─────────────────────────────────────────────────────────────────
@router.post("/waste", response_model=WasteUsageRead, status_code=status.HTTP_201_CREATED)
def post_waste(
    payload: WasteUsageCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return add_waste_data(db, current_user, payload)


@router.get("/waste", response_model=WasteHistory)
def waste_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    newest_first: bool = True,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_waste_history(db, current_user, page, limit, newest_first)


@router.delete("/waste/{record_id}")
def remove_waste(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return delete_data(db, current_user, ResourceType.waste, record_id)


# ─── Summaries ─────────────────────────────────────────────────────────────
@router.get("/last-month", response_model=LastMonthResponse, summary="Bills and waste for the previous calendar month")
def last_month(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_last_month(db, current_user)


@router.get("/stats", response_model=ConsumptionStats, summary="Lifetime totals and most recent entries")
def consumption_stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_stats(db, current_user)

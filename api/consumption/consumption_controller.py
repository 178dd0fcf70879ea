from sqlalchemy.orm import Session

from api.consumption import consumption_service as service
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
from config.score_config import ResourceType


def add_metered_data(
    db: Session,
    current_user: dict,
    resource: ResourceType,
    payload: MeteredUsageCreate,
) -> MeteredUsageRead:
    record = service.create_metered_record(db, current_user["id"], resource, payload)
    return MeteredUsageRead.model_validate(record)


def add_waste_data(
    db: Session,
    current_user: dict,
    payload: WasteUsageCreate,
) -> WasteUsageRead:
    record = service.create_waste_record(db, current_user["id"], payload)
    return WasteUsageRead.model_validate(record)


def _history_page(result: dict) -> dict:
    return {
        "results": len(result["items"]),
        "pagination": {
            "current": result["page"],
            "pages": result["pages"],
            "total": result["total"],
        },
        "items": result["items"],
    }


def get_metered_history(
    db: Session,
    current_user: dict,
    resource: ResourceType,
    page: int,
    limit: int,
    newest_first: bool,
) -> MeteredHistory:
    result = service.get_history(db, current_user["id"], resource, page, limit, newest_first)
    return MeteredHistory.model_validate(_history_page(result), from_attributes=True)


def get_waste_history(
    db: Session,
    current_user: dict,
    page: int,
    limit: int,
    newest_first: bool,
) -> WasteHistory:
    result = service.get_history(db, current_user["id"], ResourceType.waste, page, limit, newest_first)
    return WasteHistory.model_validate(_history_page(result), from_attributes=True)


def delete_data(db: Session, current_user: dict, resource: ResourceType, record_id: int) -> dict:
    service.delete_record(db, current_user["id"], resource, record_id)
    return {"detail": f"{resource.value.title()} data deleted successfully"}


def get_last_month(db: Session, current_user: dict) -> LastMonthResponse:
    data = service.get_last_month_data(db, current_user["id"])
    return LastMonthResponse.model_validate(data, from_attributes=True)


def get_stats(db: Session, current_user: dict) -> ConsumptionStats:
    data = service.get_consumption_stats(db, current_user["id"])
    return ConsumptionStats.model_validate(data, from_attributes=True)

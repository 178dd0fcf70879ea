import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Type, Union

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.consumption.consumption_model import ElectricityUsage, WaterUsage, WasteUsage
from api.consumption.consumption_schema import MeteredUsageCreate, WasteUsageCreate
from config.score_config import ResourceType
from utils.database_utils import DatabaseUtils
from utils.errors import DuplicateBillingPeriod, InvalidQuantity, RecordNotFound, ValidationError

logger = logging.getLogger(__name__)

MeteredModel = Union[ElectricityUsage, WaterUsage]

RECORD_MODELS: Dict[ResourceType, Type] = {
    ResourceType.electricity: ElectricityUsage,
    ResourceType.water:       WaterUsage,
    ResourceType.waste:       WasteUsage,
}


def _model_for(resource: ResourceType) -> Type:
    return RECORD_MODELS[ResourceType(resource)]


def _period_column(model):
    return model.collection_date if model is WasteUsage else model.billing_month


# ─── Reads ─────────────────────────────────────────────────────────────────

def list_records(db: Session, user_id: int, resource: ResourceType) -> List:
    """All of a user's records of one resource type, oldest first."""
    model = _model_for(resource)
    return (
        db.query(model)
          .filter(model.user_id == user_id)
          .order_by(_period_column(model).asc(), model.id.asc())
          .all()
    )


def has_records(db: Session, user_id: int, resource: ResourceType) -> bool:
    return DatabaseUtils.exists(db, _model_for(resource), user_id=user_id)


def current_total(db: Session, user_id: int, resource: ResourceType) -> float:
    """
    Sum a user's consumption of one resource, the same way the eco score
    sums it: units for electricity/water, all three bag counts for waste.
    """
    resource = ResourceType(resource)
    if resource is ResourceType.waste:
        expr = func.coalesce(
            func.sum(WasteUsage.plastic_bags + WasteUsage.paper_bags + WasteUsage.food_waste_bags),
            0,
        )
        total = db.query(expr).filter(WasteUsage.user_id == user_id).scalar()
    else:
        model = _model_for(resource)
        total = (
            db.query(func.coalesce(func.sum(model.units), 0))
              .filter(model.user_id == user_id)
              .scalar()
        )
    return float(total or 0)


def get_history(
    db: Session,
    user_id: int,
    resource: ResourceType,
    page: int = 1,
    limit: int = 10,
    newest_first: bool = True,
) -> dict:
    model = _model_for(resource)
    period = _period_column(model)
    query = (
        db.query(model)
          .filter(model.user_id == user_id)
          .order_by(period.desc() if newest_first else period.asc())
    )
    return DatabaseUtils.paginate_query(query, page=page, per_page=limit)


# ─── Writes ────────────────────────────────────────────────────────────────

def create_metered_record(
    db: Session,
    user_id: int,
    resource: ResourceType,
    data: MeteredUsageCreate,
) -> MeteredModel:
    """
    Insert an electricity or water bill. The (user, billing_month) unique
    constraint decides duplicates, so two racing inserts leave one row.
    """
    resource = ResourceType(resource)
    if resource is ResourceType.waste:
        raise ValidationError("Waste records are created with create_waste_record")
    if data.units < 0:
        raise InvalidQuantity("Units cannot be negative")

    model = _model_for(resource)
    record = model(
        user_id=user_id,
        billing_month=data.billing_month.replace(day=1),
        units=data.units,
        last_reading=data.last_reading,
        latest_reading=data.latest_reading,
        account_no=data.account_no,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        table = model.__tablename__
        if not DatabaseUtils.is_unique_violation(
            exc, f"uq_{resource.value}_user_month", (f"{table}.user_id", f"{table}.billing_month")
        ):
            logger.error("Insert of %s bill for user %s failed: %s", resource.value, user_id, exc.orig)
            raise
        logger.info("Duplicate %s bill for user %s month %s", resource.value, user_id, data.billing_month)
        raise DuplicateBillingPeriod(
            f"A {resource.value} record for {data.billing_month:%B %Y} already exists"
        )
    db.refresh(record)
    return record


def create_waste_record(db: Session, user_id: int, data: WasteUsageCreate) -> WasteUsage:
    if min(data.plastic_bags, data.paper_bags, data.food_waste_bags) < 0:
        raise InvalidQuantity("Bag counts cannot be negative")

    record = WasteUsage(
        user_id=user_id,
        plastic_bags=data.plastic_bags,
        paper_bags=data.paper_bags,
        food_waste_bags=data.food_waste_bags,
        collection_date=data.collection_date,
        collection_week=data.collection_date.isocalendar()[1],
        collection_month=data.collection_date.month,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def delete_record(db: Session, user_id: int, resource: ResourceType, record_id: int) -> None:
    # Owner filter: a user can only delete their own rows
    record = DatabaseUtils.get_or_404(
        db, _model_for(resource), RecordNotFound, id=record_id, user_id=user_id
    )
    db.delete(record)
    db.commit()


# ─── Summaries ─────────────────────────────────────────────────────────────

def _previous_month_bounds(today: date):
    first_this_month = today.replace(day=1)
    last_prev = first_this_month - timedelta(days=1)
    return last_prev.replace(day=1), last_prev


def get_last_month_data(db: Session, user_id: int, today: Optional[date] = None) -> dict:
    start, end = _previous_month_bounds(today or date.today())

    def latest_bill(model):
        return (
            db.query(model)
              .filter(model.user_id == user_id, model.billing_month.between(start, end))
              .order_by(model.billing_month.desc())
              .first()
        )

    waste = (
        db.query(WasteUsage)
          .filter(WasteUsage.user_id == user_id, WasteUsage.collection_date.between(start, end))
          .order_by(WasteUsage.collection_date.asc())
          .all()
    )
    plastic = sum(w.plastic_bags for w in waste)
    paper = sum(w.paper_bags for w in waste)
    food = sum(w.food_waste_bags for w in waste)

    return {
        "electricity": latest_bill(ElectricityUsage),
        "water": latest_bill(WaterUsage),
        "waste": waste,
        "waste_summary": {
            "total_waste_bags": plastic + paper + food,
            "plastic_bags": plastic,
            "paper_bags": paper,
            "food_waste_bags": food,
            "collection_count": len(waste),
        },
    }


def get_consumption_stats(db: Session, user_id: int) -> dict:
    plastic, paper, food = (
        db.query(
            func.coalesce(func.sum(WasteUsage.plastic_bags), 0),
            func.coalesce(func.sum(WasteUsage.paper_bags), 0),
            func.coalesce(func.sum(WasteUsage.food_waste_bags), 0),
        )
        .filter(WasteUsage.user_id == user_id)
        .one()
    )

    def most_recent(model):
        period = _period_column(model)
        return (
            db.query(model)
              .filter(model.user_id == user_id)
              .order_by(period.desc())
              .first()
        )

    return {
        "totals": {
            "electricity": current_total(db, user_id, ResourceType.electricity),
            "water": current_total(db, user_id, ResourceType.water),
            "waste": {
                "plastic": int(plastic),
                "paper": int(paper),
                "food": int(food),
                "total": int(plastic) + int(paper) + int(food),
            },
        },
        "recent": {
            "electricity": most_recent(ElectricityUsage),
            "water": most_recent(WaterUsage),
            "waste": most_recent(WasteUsage),
        },
    }

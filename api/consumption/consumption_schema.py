from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
from datetime import date, datetime


# ─── Electricity / Water ──────────────────────────────────────────────
class MeteredUsageCreate(BaseModel):
    billing_month: date
    units: float = Field(..., ge=0)
    last_reading: Optional[float] = Field(None, ge=0)
    latest_reading: Optional[float] = Field(None, ge=0)
    account_no: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def check_readings(self):
        if (
            self.last_reading is not None
            and self.latest_reading is not None
            and self.latest_reading < self.last_reading
        ):
            raise ValueError("Latest reading must be greater than last reading")
        return self


class MeteredUsageRead(BaseModel):
    id: int
    user_id: int
    billing_month: date
    units: float
    last_reading: Optional[float] = None
    latest_reading: Optional[float] = None
    account_no: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ─── Waste ─────────────────────────────────────────────────────────────
class WasteUsageCreate(BaseModel):
    collection_date: date
    plastic_bags: int = Field(0, ge=0)
    paper_bags: int = Field(0, ge=0)
    food_waste_bags: int = Field(0, ge=0)


class WasteUsageRead(BaseModel):
    id: int
    user_id: int
    collection_date: date
    plastic_bags: int
    paper_bags: int
    food_waste_bags: int
    collection_week: Optional[int] = None
    collection_month: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ─── History pages ─────────────────────────────────────────────────────
class Pagination(BaseModel):
    current: int
    pages: int
    total: int


class MeteredHistory(BaseModel):
    results: int
    pagination: Pagination
    items: List[MeteredUsageRead]


class WasteHistory(BaseModel):
    results: int
    pagination: Pagination
    items: List[WasteUsageRead]


# ─── Summaries ─────────────────────────────────────────────────────────
class WasteSummary(BaseModel):
    total_waste_bags: int
    plastic_bags: int
    paper_bags: int
    food_waste_bags: int
    collection_count: int


class LastMonthResponse(BaseModel):
    electricity: Optional[MeteredUsageRead] = None
    water: Optional[MeteredUsageRead] = None
    waste: List[WasteUsageRead] = []
    waste_summary: WasteSummary


class WasteTotals(BaseModel):
    plastic: int
    paper: int
    food: int
    total: int


class ConsumptionTotals(BaseModel):
    electricity: float
    water: float
    waste: WasteTotals


class RecentEntries(BaseModel):
    electricity: Optional[MeteredUsageRead] = None
    water: Optional[MeteredUsageRead] = None
    waste: Optional[WasteUsageRead] = None


class ConsumptionStats(BaseModel):
    totals: ConsumptionTotals
    recent: RecentEntries

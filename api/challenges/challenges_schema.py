from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from config.score_config import ResourceType
from utils.time_utils import as_naive_utc


class ChallengeBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    goal: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)
    resource_type: Optional[ResourceType] = None
    start_date: datetime
    end_date: datetime


class ChallengeCreate(ChallengeBase):
    # Windows are stored as naive UTC; mixed offsets must compare cleanly
    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        return as_naive_utc(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


# Partial update; the window is re-checked against stored values in the service
class ChallengeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    goal: Optional[float] = Field(None, gt=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    resource_type: Optional[ResourceType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ChallengeRead(ChallengeBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

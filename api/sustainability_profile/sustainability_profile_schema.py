from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime


class SustainabilityProfileUpdate(BaseModel):
    primary_water_sources: List[str]
    primary_energy_sources: List[str]
    separate_waste: bool
    compost_waste: bool = False
    plastic_bag_size: int = Field(5, ge=1, le=100)
    food_waste_bag_size: int = Field(5, ge=1, le=100)
    paper_waste_bag_size: int = Field(5, ge=1, le=100)


class SustainabilityProfileRead(SustainabilityProfileUpdate):
    id: int
    user_id: int
    profile_completed: bool
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileExists(BaseModel):
    exists: bool

from typing import Optional
from pydantic import BaseModel, ConfigDict


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    name: str
    city: Optional[str] = None
    photo: Optional[str] = None
    total_points: int
    challenges_completed: int

    model_config = ConfigDict(from_attributes=True)

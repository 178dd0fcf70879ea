from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from api.user.user_model import UserRole, UserStatus


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    city: Optional[str] = None
    photo: Optional[str] = None
    status: UserStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MyStanding(BaseModel):
    total_points: int
    challenges_completed: int
    rank: Optional[int] = None

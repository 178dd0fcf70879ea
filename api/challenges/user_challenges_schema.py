from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from api.challenges.user_challenges_model import EnrollmentStatus
from api.challenges.challenges_schema import ChallengeRead


class AwardPointsRequest(BaseModel):
    user_id: int
    points: int = Field(..., gt=0)


class EnrollmentRead(BaseModel):
    id: int
    user_id: int
    challenge_id: int
    start_value: float
    end_value: float
    status: EnrollmentStatus
    points_earned: int
    joined_date: datetime
    completion_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EnrollmentWithChallenge(EnrollmentRead):
    challenge: ChallengeRead


class ParticipantRead(EnrollmentRead):
    name: str
    city: Optional[str] = None


class ExpirySweepResult(BaseModel):
    expired: int

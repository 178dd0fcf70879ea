from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Integer, Float, String, Text, DateTime, Enum, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from config.database import Base
from config.score_config import ResourceType, resource_for_unit


class Challenge(Base):
    __tablename__ = "challenges"
    __table_args__ = (
        CheckConstraint('goal > 0', name='ck_challenge_goal_positive'),
        CheckConstraint('end_date > start_date', name='ck_challenge_window'),
    )

    id            = Column(Integer, primary_key=True, index=True)
    title         = Column(String(200), nullable=False)
    description   = Column(Text, nullable=False)
    goal          = Column(Float, nullable=False)
    unit          = Column(String(50), nullable=False)
    # When unset the tracked resource is inferred from `unit`
    resource_type = Column(Enum(ResourceType), nullable=True)
    start_date    = Column(DateTime, nullable=False)
    end_date      = Column(DateTime, nullable=False, index=True)
    created_at    = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    enrollments = relationship(
        "UserChallenge",
        back_populates="challenge",
        cascade="all, delete-orphan"
    )

    @property
    def resource(self) -> Optional[ResourceType]:
        return self.resource_type or resource_for_unit(self.unit)

    def is_active(self, now: datetime) -> bool:
        return self.start_date <= now <= self.end_date

    def __repr__(self):
        return f"<Challenge(id={self.id}, title='{self.title}', goal={self.goal} {self.unit})>"

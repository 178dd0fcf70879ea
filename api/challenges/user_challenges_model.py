from sqlalchemy import Column, Integer, Float, DateTime, Enum, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from config.database import Base
from utils.time_utils import utcnow


class EnrollmentStatus(enum.Enum):
    joined    = 'Joined'
    completed = 'Completed'
    failed    = 'Failed'
    withdrawn = 'Withdrawn'


class UserChallenge(Base):
    __tablename__ = 'user_challenges'
    __table_args__ = (
        # A user joins a given challenge at most once
        UniqueConstraint('user_id', 'challenge_id', name='uq_user_challenge'),
        CheckConstraint('start_value >= 0', name='ck_enrollment_start_value'),
        CheckConstraint('end_value >= 0', name='ck_enrollment_end_value'),
        CheckConstraint('points_earned >= 0', name='ck_enrollment_points'),
    )

    id              = Column(Integer, primary_key=True, index=True)
    user_id         = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    challenge_id    = Column(Integer, ForeignKey('challenges.id', ondelete='CASCADE'), nullable=False)
    start_value     = Column(Float, nullable=False)
    end_value       = Column(Float, nullable=False, default=0)
    status          = Column(Enum(EnrollmentStatus), nullable=False, default=EnrollmentStatus.joined)
    points_earned   = Column(Integer, nullable=False, default=0)
    joined_date     = Column(DateTime, nullable=False, default=utcnow)
    completion_date = Column(DateTime, nullable=True)
    created_at      = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at      = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    user      = relationship("User", back_populates="enrollments")
    challenge = relationship("Challenge", back_populates="enrollments")

    def __repr__(self):
        return (
            f"<UserChallenge(user_id={self.user_id}, challenge_id={self.challenge_id}, "
            f"status={self.status.value if self.status else None}, points={self.points_earned})>"
        )

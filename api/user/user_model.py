# api/user/user_model.py
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
import enum


class UserRole(enum.Enum):
    user             = 'User'
    admin            = 'Admin'
    environmentalist = 'Environmentalist'


class UserStatus(enum.Enum):
    active   = 'active'
    inactive = 'inactive'


class User(Base):
    __tablename__ = 'users'

    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(String(100), nullable=False)
    email         = Column(String(255), nullable=False, unique=True, index=True)
    role          = Column(Enum(UserRole), nullable=False, default=UserRole.user)
    city          = Column(String(100), nullable=True)
    photo         = Column(String(255), nullable=False, default='default.jpg')
    status        = Column(Enum(UserStatus), nullable=False, default=UserStatus.active)
    created_at    = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    enrollments = relationship(
        "UserChallenge",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    sustainability_profile = relationship(
        "SustainabilityProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', role={self.role})>"

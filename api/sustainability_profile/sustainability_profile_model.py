from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from config.database import Base


class SustainabilityProfile(Base):
    __tablename__ = "sustainability_profiles"
    __table_args__ = (
        CheckConstraint('plastic_bag_size BETWEEN 1 AND 100', name='ck_profile_plastic_bag_size'),
        CheckConstraint('food_waste_bag_size BETWEEN 1 AND 100', name='ck_profile_food_bag_size'),
        CheckConstraint('paper_waste_bag_size BETWEEN 1 AND 100', name='ck_profile_paper_bag_size'),
    )

    id      = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    primary_water_sources  = Column(JSON, nullable=False, default=list)
    primary_energy_sources = Column(JSON, nullable=False, default=list)
    separate_waste         = Column(Boolean, nullable=False)
    compost_waste          = Column(Boolean, nullable=False, default=False)

    # bag sizes in kg
    plastic_bag_size     = Column(Integer, nullable=False, default=5)
    food_waste_bag_size  = Column(Integer, nullable=False, default=5)
    paper_waste_bag_size = Column(Integer, nullable=False, default=5)

    profile_completed = Column(Boolean, nullable=False, default=False)
    last_updated      = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    created_at        = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="sustainability_profile")

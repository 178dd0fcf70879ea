from sqlalchemy import Column, Integer, Float, String, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.sql import func
from config.database import Base


class ElectricityUsage(Base):
    __tablename__ = 'electricity_usage'
    __table_args__ = (
        # One bill per user per month
        UniqueConstraint('user_id', 'billing_month', name='uq_electricity_user_month'),
        CheckConstraint('units >= 0', name='ck_electricity_units_non_negative'),
    )

    id             = Column(Integer, primary_key=True, index=True)
    user_id        = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    billing_month  = Column(Date, nullable=False)
    units          = Column(Float, nullable=False)
    last_reading   = Column(Float, nullable=True)
    latest_reading = Column(Float, nullable=True)
    account_no     = Column(String(50), nullable=True)
    created_at     = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class WaterUsage(Base):
    __tablename__ = 'water_usage'
    __table_args__ = (
        UniqueConstraint('user_id', 'billing_month', name='uq_water_user_month'),
        CheckConstraint('units >= 0', name='ck_water_units_non_negative'),
    )

    id             = Column(Integer, primary_key=True, index=True)
    user_id        = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    billing_month  = Column(Date, nullable=False)
    units          = Column(Float, nullable=False)
    last_reading   = Column(Float, nullable=True)
    latest_reading = Column(Float, nullable=True)
    account_no     = Column(String(50), nullable=True)
    created_at     = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class WasteUsage(Base):
    __tablename__ = 'waste_usage'
    __table_args__ = (
        Index('ix_waste_user_collection', 'user_id', 'collection_date'),
        CheckConstraint(
            'plastic_bags >= 0 AND paper_bags >= 0 AND food_waste_bags >= 0',
            name='ck_waste_bags_non_negative'
        ),
    )

    id               = Column(Integer, primary_key=True, index=True)
    user_id          = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    plastic_bags     = Column(Integer, nullable=False, default=0)
    paper_bags       = Column(Integer, nullable=False, default=0)
    food_waste_bags  = Column(Integer, nullable=False, default=0)
    collection_date  = Column(Date, nullable=False)
    collection_week  = Column(Integer, nullable=True)
    collection_month = Column(Integer, nullable=True)
    created_at       = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @property
    def total_bags(self) -> int:
        return (self.plastic_bags or 0) + (self.paper_bags or 0) + (self.food_waste_bags or 0)

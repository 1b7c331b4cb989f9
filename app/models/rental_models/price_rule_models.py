# app/models/rental_models/price_rule_models.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.db import Base


class PriceRule(Base):
    __tablename__ = "price_rules"

    id = Column(Integer, primary_key=True, index=True)
    car_id = Column(Integer, ForeignKey("cars.id", ondelete="CASCADE"), nullable=False, index=True)
    rule_type = Column(String(20), nullable=False)        # 'season', 'weekend' or 'length'
    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=True)              # season only
    end_date = Column(Date, nullable=True)                # season only
    min_days = Column(Integer, nullable=True)             # length only
    adjustment_type = Column(String(20), nullable=False)  # 'percentage' or 'flat'
    adjustment_value = Column(Numeric(10, 2), nullable=False)
    position = Column(Integer, default=0)

    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    car = relationship("Car", back_populates="price_rules")

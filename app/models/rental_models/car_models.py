# app/models/rental_models/car_models.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.db import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(100), nullable=False)
    car_model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=True)
    registration_number = Column(String(50), unique=True, nullable=False)
    daily_rental_price = Column(Numeric(10, 2), nullable=True)
    availability = Column(String(20), default="Available")  # 'Available' or 'Unavailable'
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    location = Column(String(200), nullable=True)
    booking_count = Column(Integer, default=0)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    date_added = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    is_deleted = Column(Boolean, default=False)

    owner = relationship("User", back_populates="cars")
    # Custom rules override the configured defaults; list order is pricing order
    price_rules = relationship(
        "PriceRule",
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="[PriceRule.position, PriceRule.id]",
        lazy="selectin",
    )
    bookings = relationship("Booking", back_populates="car")

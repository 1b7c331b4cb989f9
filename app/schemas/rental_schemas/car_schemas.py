# app/schemas/rental_schemas/car_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from datetime import datetime

from app.schemas.rental_schemas.money import NonNegativeDecimal
from app.schemas.rental_schemas.price_rule_schemas import PriceRuleOut

CarAvailability = Literal["Available", "Unavailable"]


class CarBase(BaseModel):
    brand: str = Field(..., min_length=1, max_length=100)
    car_model: str = Field(..., min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    registration_number: str = Field(..., min_length=1, max_length=50)
    daily_rental_price: NonNegativeDecimal
    availability: CarAvailability = "Available"
    description: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None


class CarCreate(CarBase):
    pass


class CarUpdate(BaseModel):
    brand: Optional[str] = None
    car_model: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    registration_number: Optional[str] = None
    daily_rental_price: Optional[NonNegativeDecimal] = None
    availability: Optional[CarAvailability] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None


class CarOut(CarBase):
    id: int
    user_id: Optional[int] = None
    booking_count: int = 0
    date_added: Optional[datetime] = None
    price_rules: List[PriceRuleOut] = []

    model_config = ConfigDict(from_attributes=True)


class CarResponse(BaseModel):
    message: str
    data: Optional[CarOut] = None


class CarListResponse(BaseModel):
    message: str
    data: List[CarOut] = []

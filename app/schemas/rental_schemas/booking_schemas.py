# app/schemas/rental_schemas/booking_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime

from app.schemas.rental_schemas.money import Money
from app.schemas.rental_schemas.quote_schemas import BookedRange

BookingStatus = Literal["confirmed", "pending", "canceled"]


class BookingCreate(BaseModel):
    car_id: int
    start_date: datetime
    end_date: datetime
    coupon: Optional[str] = Field(None, max_length=50)


class BookingUpdate(BaseModel):
    status: BookingStatus


class BookingOut(BaseModel):
    id: int
    car_id: int
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: str
    coupon_code: Optional[str] = None
    total_price: Money
    quote_snapshot: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    message: str
    data: Optional[BookingOut] = None


class BookingListResponse(BaseModel):
    message: str
    data: List[BookingOut] = []


class BookedDatesResponse(BaseModel):
    car_id: int
    booked: List[BookedRange] = []


class BookingCountResponse(BaseModel):
    car_id: int
    count: int

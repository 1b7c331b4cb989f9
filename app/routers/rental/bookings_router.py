# app/routers/rental/bookings_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.rental_schemas.booking_schemas import (
    BookedDatesResponse,
    BookingCountResponse,
    BookingCreate,
    BookingListResponse,
    BookingOut,
    BookingResponse,
    BookingUpdate,
)
from app.schemas.rental_schemas.quote_schemas import QuoteRequest, QuoteResponse
from app.services.rental_services.booking_service import (
    count_bookings_for_car,
    create_booking,
    get_booked_dates,
    get_booking_quote,
    list_bookings_for_user,
    update_booking,
)
from app.utils.get_user import get_current_user

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# --------------------------
# QUOTE
# --------------------------
@router.post("/quote", response_model=QuoteResponse)
async def booking_quote_route(payload: QuoteRequest, db: AsyncSession = Depends(get_db)):
    """
    Itemized price for a candidate rental, with availability.
    An unusable coupon doesn't fail the quote; it is reported in coupon_error.
    """
    return await get_booking_quote(db, payload)


@router.get("/booked-dates/{car_id}", response_model=BookedDatesResponse)
async def booked_dates_route(car_id: int, db: AsyncSession = Depends(get_db)):
    booked = await get_booked_dates(db, car_id)
    return BookedDatesResponse(car_id=car_id, booked=booked)


@router.get("/count/{car_id}", response_model=BookingCountResponse)
async def booking_count_route(car_id: int, db: AsyncSession = Depends(get_db)):
    count = await count_bookings_for_car(db, car_id)
    return BookingCountResponse(car_id=car_id, count=count)


# --------------------------
# USER BOOKINGS
# --------------------------
@router.get("/", response_model=BookingListResponse)
async def list_bookings_route(
    user_email: Optional[str] = Query(None, description="Admins only: bookings of another user"),
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    bookings = await list_bookings_for_user(db, _user, user_email)
    return BookingListResponse(
        message=f"{len(bookings)} bookings fetched successfully",
        data=[BookingOut.model_validate(b) for b in bookings],
    )


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_route(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    booking = await create_booking(db, payload, _user)
    return BookingResponse(message="Booking created successfully", data=BookingOut.model_validate(booking))


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking_route(
    booking_id: int,
    payload: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    booking = await update_booking(db, booking_id, payload, _user)
    return BookingResponse(message=f"Booking {booking.status}", data=BookingOut.model_validate(booking))

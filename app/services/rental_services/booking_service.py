# app/services/rental_services/booking_service.py
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import REQUIRE_BASE_PRICE, TAX_RATE
from app.models.rental_models.booking_models import Booking
from app.models.rental_models.car_models import Car
from app.models.rental_models.coupon_models import Coupon
from app.schemas.rental_schemas.booking_schemas import BookingCreate, BookingUpdate
from app.schemas.rental_schemas.coupon_schemas import canonical_code
from app.schemas.rental_schemas.price_rule_schemas import parse_price_rule
from app.schemas.rental_schemas.quote_schemas import (
    AppliedCoupon,
    BookedRange,
    QuoteRequest,
    QuoteResponse,
)
from app.services.pricing_services.availability import ACTIVE_BOOKING_STATUSES, check_availability
from app.services.pricing_services.errors import InvalidRangeError, MissingPriceError
from app.services.pricing_services.presets import DEFAULT_PRICE_RULES
from app.services.pricing_services.quote_generator import QuoteGenerator
from app.services.rental_services.car_service import get_car
from app.services.rental_services.coupon_service import record_coupon_use, resolve_coupon
from app.utils.activity_helpers import log_user_activity
from app.utils.check_roles import ensure_owner_or_admin
from app.utils.date_helpers import to_utc, utc_now

logger = logging.getLogger(__name__)

quote_generator = QuoteGenerator(
    default_rules=DEFAULT_PRICE_RULES,
    tax_rate=TAX_RATE,
    require_base_price=REQUIRE_BASE_PRICE,
)


def car_price_rules(car: Car):
    """A car's own rules as typed values, or None so the configured defaults apply."""
    if not car.price_rules:
        return None
    return [parse_price_rule(rule) for rule in car.price_rules]


def _check_not_in_past(start_date: datetime) -> None:
    if to_utc(start_date).date() < utc_now().date():
        raise HTTPException(status_code=400, detail="Start date cannot be in the past")


async def active_bookings_for_car(db: AsyncSession, car_id: int, exclude_id: Optional[int] = None) -> List[Booking]:
    query = select(Booking).where(
        Booking.car_id == car_id,
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
    )
    if exclude_id is not None:
        query = query.where(Booking.id != exclude_id)
    result = await db.execute(query.order_by(Booking.start_date))
    return result.scalars().all()


# --------------------------
# QUOTE
# --------------------------
async def build_quote(
    db: AsyncSession,
    car: Car,
    start_date: datetime,
    end_date: datetime,
    coupon_code: Optional[str],
) -> Tuple[QuoteResponse, Optional[Coupon]]:
    """
    Price a candidate rental and check it against existing bookings.
    Returns the quote response and the coupon that was actually applied, if any.
    """
    coupon, coupon_error = await resolve_coupon(db, coupon_code)

    try:
        quote = quote_generator.generate_quote(car, start_date, end_date, coupon, car_price_rules(car))
    except (InvalidRangeError, MissingPriceError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    bookings = await active_bookings_for_car(db, car.id)
    availability = check_availability(car.id, start_date, end_date, bookings)

    data = quote.model_dump()
    if coupon_error:
        # Coupon was rejected before pricing; report it the same way as an unmet minimum
        data["coupon_error"] = coupon_error
        data["applied_rules"]["coupon"] = AppliedCoupon(
            code=canonical_code(coupon_code), discount=0, error=coupon_error
        ).model_dump()

    response = QuoteResponse(
        **data,
        unavailable=availability.unavailable,
        conflicting_dates=availability.conflicting_dates,
    )
    applied = coupon if coupon is not None and quote.coupon_error is None else None
    return response, applied


async def get_booking_quote(db: AsyncSession, payload: QuoteRequest) -> QuoteResponse:
    _check_not_in_past(payload.start_date)
    car = await get_car(db, payload.car_id)
    quote, _ = await build_quote(db, car, payload.start_date, payload.end_date, payload.coupon)
    return quote


# --------------------------
# READ
# --------------------------
async def get_booked_dates(db: AsyncSession, car_id: int) -> List[BookedRange]:
    await get_car(db, car_id)
    bookings = await active_bookings_for_car(db, car_id)
    return [BookedRange(start_date=to_utc(b.start_date), end_date=to_utc(b.end_date)) for b in bookings]


async def count_bookings_for_car(db: AsyncSession, car_id: int) -> int:
    result = await db.execute(select(func.count(Booking.id)).where(Booking.car_id == car_id))
    return result.scalar() or 0


async def list_bookings_for_user(db: AsyncSession, _user, user_email: Optional[str] = None) -> List[Booking]:
    query = select(Booking)
    if _user.role.lower() == "admin" and user_email:
        query = query.where(Booking.user_email == user_email)
    else:
        query = query.where(Booking.user_id == _user.id)
    result = await db.execute(query.order_by(Booking.start_date.desc()))
    return result.scalars().all()


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await db.get(Booking, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


# --------------------------
# CREATE
# --------------------------
async def create_booking(db: AsyncSession, payload: BookingCreate, _user) -> Booking:
    _check_not_in_past(payload.start_date)
    car = await get_car(db, payload.car_id)
    if car.availability != "Available":
        raise HTTPException(status_code=400, detail="Car is not available for booking")

    quote, applied_coupon = await build_quote(db, car, payload.start_date, payload.end_date, payload.coupon)
    if quote.unavailable:
        logger.info("Booking conflict for car %s between %s and %s", car.id, payload.start_date, payload.end_date)
        raise HTTPException(status_code=409, detail="Car is already booked for the selected dates")

    booking = Booking(
        car_id=car.id,
        user_id=_user.id,
        user_email=_user.username,
        start_date=to_utc(payload.start_date),
        end_date=to_utc(payload.end_date),
        status="pending",
        coupon_code=applied_coupon.code if applied_coupon is not None else None,
        total_price=quote.total,
        quote_snapshot=quote.model_dump(mode="json"),
    )
    db.add(booking)

    if applied_coupon is not None:
        record_coupon_use(applied_coupon)
    car.booking_count = (car.booking_count or 0) + 1
    await db.flush()

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Booked car {car.id} for {quote.nights} night(s), total {quote.total}"
    )

    await db.commit()
    await db.refresh(booking)
    logger.info("Booking %s created for car %s by %s", booking.id, car.id, _user.username)
    return booking


# --------------------------
# UPDATE STATUS
# --------------------------
async def update_booking(db: AsyncSession, booking_id: int, payload: BookingUpdate, _user) -> Booking:
    booking = await get_booking(db, booking_id)
    ensure_owner_or_admin(booking.user_id, _user)

    if booking.status == payload.status:
        return booking
    if booking.status == "canceled":
        raise HTTPException(status_code=400, detail="Canceled bookings cannot be reopened")
    if payload.status == "confirmed" and _user.role.lower() not in ("admin", "staff"):
        raise HTTPException(status_code=403, detail="Only staff can confirm bookings")

    previous = booking.status
    booking.status = payload.status

    await log_user_activity(
        db=db,
        user_id=_user.id,
        username=_user.username,
        message=f"Booking {booking.id} moved from {previous} to {payload.status}"
    )

    await db.commit()
    await db.refresh(booking)
    return booking

# app/services/pricing_services/availability.py
from datetime import date, datetime
from typing import Iterable

from app.schemas.rental_schemas.quote_schemas import AvailabilityResult, BookedRange
from app.utils.date_helpers import to_utc

# Canceled bookings free their dates
ACTIVE_BOOKING_STATUSES = ("confirmed", "pending")


def ranges_overlap(existing_start, existing_end, new_start, new_end) -> bool:
    # Inclusive: a booking ending on the day another starts still conflicts
    return to_utc(existing_start) <= to_utc(new_end) and to_utc(existing_end) >= to_utc(new_start)


def check_availability(
    car_id,
    start_date: date | datetime,
    end_date: date | datetime,
    bookings: Iterable,
) -> AvailabilityResult:
    """
    Compare a candidate rental against bookings that were already fetched.
    Bookings for other cars or with an inactive status are ignored.
    """
    conflicts = [
        BookedRange(start_date=to_utc(b.start_date), end_date=to_utc(b.end_date))
        for b in bookings
        if b.car_id == car_id
        and b.status in ACTIVE_BOOKING_STATUSES
        and ranges_overlap(b.start_date, b.end_date, start_date, end_date)
    ]
    return AvailabilityResult(unavailable=bool(conflicts), conflicting_dates=conflicts)

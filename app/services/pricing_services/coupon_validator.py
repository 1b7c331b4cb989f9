# app/services/pricing_services/coupon_validator.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.schemas.rental_schemas.coupon_schemas import CouponValidity
from app.services.pricing_services.errors import MinimumDaysNotMetError
from app.utils.date_helpers import to_utc, utc_now
from app.utils.money_helpers import ZERO, Number, to_decimal

HUNDRED = Decimal("100")


def is_coupon_valid(coupon, now: Optional[datetime] = None) -> CouponValidity:
    """
    Check whether a coupon can be used right now.
    Works with any object exposing active, expires_at, usage_limit and usage_count.
    """
    if not coupon.active:
        return CouponValidity(valid=False, reason="Coupon is no longer active")

    now = to_utc(now) if now is not None else utc_now()
    if now > to_utc(coupon.expires_at):
        return CouponValidity(valid=False, reason="Coupon has expired")

    usage_count = coupon.usage_count or 0
    if coupon.usage_limit is not None and usage_count >= coupon.usage_limit:
        return CouponValidity(valid=False, reason="Coupon usage limit reached")

    return CouponValidity(valid=True)


def apply_coupon_discount(subtotal: Number, coupon, nights: int = 1) -> Decimal:
    """
    Discount a coupon grants on a subtotal, never more than the subtotal itself.
    Callers are expected to have checked is_coupon_valid first.
    """
    if coupon is None:
        return ZERO

    if coupon.min_days and nights < coupon.min_days:
        raise MinimumDaysNotMetError(coupon.min_days, nights)

    subtotal = to_decimal(subtotal)
    value = to_decimal(coupon.discount_value)
    if coupon.discount_type == "percentage":
        discount = subtotal * (value / HUNDRED)
    else:
        discount = value

    return max(ZERO, min(discount, subtotal))

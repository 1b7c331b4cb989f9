# app/schemas/rental_schemas/quote_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date, datetime

from app.schemas.rental_schemas.money import Money


class AppliedRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_type: str
    name: str
    adjustment_type: str
    adjustment: Money


class AppliedLengthRule(AppliedRule):
    discount: Money


class DailyPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    price: Money
    applied_rules: List[AppliedRule] = []


class RentalPriceBreakdown(BaseModel):
    """Result of pricing every night of a rental before coupons and taxes."""
    model_config = ConfigDict(frozen=True)

    base_price: Money
    nights: int
    subtotal: Money
    length_discount: Money
    applied_length_rule: Optional[AppliedLengthRule] = None
    daily_breakdown: List[DailyPrice] = []
    seasonal_and_weekend_rules: List[AppliedRule] = []


class PriceCheckpoints(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_subtotal: Money
    after_length_discount: Money
    after_coupon_discount: Money
    taxable_amount: Money
    final_total: Money


class AppliedCoupon(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    discount: Money
    error: Optional[str] = None


class AppliedRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: Optional[AppliedLengthRule] = None
    seasonal: List[AppliedRule] = []
    coupon: Optional[AppliedCoupon] = None


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    nightly: Money
    nights: int
    subtotal: Money
    length_discount: Money
    coupon_discount: Money
    coupon_error: Optional[str] = None
    taxes: Money
    total: Money
    price_breakdown: PriceCheckpoints
    applied_rules: AppliedRules
    daily_breakdown: List[DailyPrice] = []


# --------------------------
# Availability
# --------------------------
class BookedRange(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    start_date: datetime
    end_date: datetime


class AvailabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    unavailable: bool
    conflicting_dates: List[BookedRange] = []


# --------------------------
# API Schemas
# --------------------------
class QuoteRequest(BaseModel):
    car_id: int
    start_date: datetime
    end_date: datetime
    coupon: Optional[str] = Field(None, max_length=50)


class QuoteResponse(Quote):
    unavailable: bool = False
    conflicting_dates: List[BookedRange] = []

# app/services/pricing_services/presets.py
from datetime import date, datetime, timezone
from decimal import Decimal

from app.schemas.rental_schemas.coupon_schemas import CouponCreate
from app.schemas.rental_schemas.price_rule_schemas import LengthRule, SeasonRule, WeekendRule

DEFAULT_PRICE_RULES = (
    SeasonRule(
        name="Summer Peak Season",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 8, 31),
        adjustment_type="percentage",
        adjustment_value=Decimal("30"),
    ),
    SeasonRule(
        name="Holiday Season",
        start_date=date(2025, 12, 20),
        end_date=date(2026, 1, 5),
        adjustment_type="percentage",
        adjustment_value=Decimal("40"),
    ),
    WeekendRule(
        name="Weekend Surcharge",
        adjustment_type="percentage",
        adjustment_value=Decimal("15"),
    ),
    LengthRule(
        name="Weekly Discount",
        min_days=7,
        adjustment_type="percentage",
        adjustment_value=Decimal("-10"),
    ),
    LengthRule(
        name="Monthly Discount",
        min_days=30,
        adjustment_type="percentage",
        adjustment_value=Decimal("-20"),
    ),
)

DEFAULT_COUPONS = (
    CouponCreate(
        code="WELCOME10",
        discount_type="percentage",
        discount_value=Decimal("10"),
        expires_at=datetime(2026, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
        description="Welcome discount - 10% off your first booking",
        usage_limit=1000,
    ),
    CouponCreate(
        code="SUMMER20",
        discount_type="percentage",
        discount_value=Decimal("20"),
        expires_at=datetime(2025, 8, 31, 23, 59, 59, tzinfo=timezone.utc),
        description="Summer special - 20% off",
        usage_limit=500,
    ),
    CouponCreate(
        code="SAVE50",
        discount_type="flat",
        discount_value=Decimal("50"),
        expires_at=datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
        description="Save $50 on your booking",
        usage_limit=100,
    ),
    CouponCreate(
        code="LONGTERM",
        discount_type="percentage",
        discount_value=Decimal("15"),
        expires_at=datetime(2026, 6, 30, 23, 59, 59, tzinfo=timezone.utc),
        description="Long-term rental discount",
        usage_limit=200,
        min_days=7,
    ),
)

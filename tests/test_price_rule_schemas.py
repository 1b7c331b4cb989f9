from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from app.schemas.rental_schemas.coupon_schemas import CouponCreate
from app.schemas.rental_schemas.price_rule_schemas import LengthRule, SeasonRule, WeekendRule, parse_price_rule


class TestParsePriceRule:

    def test_season_rule(self):
        rule = parse_price_rule({
            "rule_type": "season",
            "name": "Summer",
            "start_date": "2025-06-01",
            "end_date": "2025-08-31",
            "adjustment_type": "percentage",
            "adjustment_value": 30,
        })
        assert isinstance(rule, SeasonRule)
        assert rule.start_date == date(2025, 6, 1)
        assert rule.adjustment_value == Decimal("30")

    def test_fields_of_other_kinds_are_ignored(self):
        rule = parse_price_rule({
            "rule_type": "weekend",
            "name": "Weekend",
            "min_days": 7,
            "start_date": "2025-06-01",
            "adjustment_type": "flat",
            "adjustment_value": "12.50",
        })
        assert isinstance(rule, WeekendRule)
        assert not hasattr(rule, "min_days")

    def test_reads_orm_like_objects(self):
        row = SimpleNamespace(
            rule_type="length",
            name="Weekly",
            start_date=None,
            end_date=None,
            min_days=7,
            adjustment_type="percentage",
            adjustment_value=Decimal("-10"),
        )
        rule = parse_price_rule(row)
        assert isinstance(rule, LengthRule)
        assert rule.min_days == 7

    @pytest.mark.parametrize("data", [
        {"rule_type": "season", "name": "No end", "start_date": "2025-06-01",
         "adjustment_type": "percentage", "adjustment_value": 10},
        {"rule_type": "season", "name": "Backwards", "start_date": "2025-08-01", "end_date": "2025-06-01",
         "adjustment_type": "percentage", "adjustment_value": 10},
        {"rule_type": "length", "name": "No threshold", "adjustment_type": "percentage", "adjustment_value": -10},
        {"rule_type": "length", "name": "Zero threshold", "min_days": 0,
         "adjustment_type": "percentage", "adjustment_value": -10},
        {"rule_type": "length", "name": "Negative flat", "min_days": 3,
         "adjustment_type": "flat", "adjustment_value": -25},
        {"rule_type": "weekend", "name": "Zero", "adjustment_type": "percentage", "adjustment_value": 0},
        {"rule_type": "weekend", "name": "Bad kind", "adjustment_type": "multiplier", "adjustment_value": 2},
        {"rule_type": "holiday", "name": "Unknown", "adjustment_type": "flat", "adjustment_value": 5},
    ])
    def test_invalid_rules(self, data):
        with pytest.raises(ValidationError):
            parse_price_rule(data)


class TestCouponCreate:

    def _payload(self, **overrides):
        data = {
            "code": " welcome10 ",
            "discount_type": "percentage",
            "discount_value": "10",
            "expires_at": "2031-12-31T23:59:59Z",
        }
        data.update(overrides)
        return data

    def test_code_is_upper_cased(self):
        assert CouponCreate(**self._payload()).code == "WELCOME10"

    @pytest.mark.parametrize("overrides", [
        {"discount_value": "150"},
        {"discount_value": "0"},
        {"discount_type": "bogus"},
        {"code": "   "},
        {"usage_limit": 0},
        {"min_days": 0},
    ])
    def test_invalid_coupons(self, overrides):
        with pytest.raises(ValidationError):
            CouponCreate(**self._payload(**overrides))

    def test_flat_coupon_may_exceed_100(self):
        coupon = CouponCreate(**self._payload(discount_type="flat", discount_value="150"))
        assert coupon.discount_value == Decimal("150")

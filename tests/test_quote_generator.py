from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.schemas.rental_schemas.price_rule_schemas import LengthRule, WeekendRule
from app.services.pricing_services.errors import InvalidRangeError, MissingPriceError
from app.services.pricing_services.presets import DEFAULT_PRICE_RULES
from app.services.pricing_services.quote_generator import QuoteGenerator


def car(price="100"):
    return SimpleNamespace(daily_rental_price=Decimal(price) if price is not None else None)


@pytest.fixture
def generator():
    return QuoteGenerator(default_rules=(), tax_rate=Decimal("0.10"))


class TestGenerateQuote:

    def test_plain_quote(self, generator):
        quote = generator.generate_quote(car("100"), date(2025, 11, 3), date(2025, 11, 8))
        assert quote.nightly == Decimal("100")
        assert quote.nights == 5
        assert quote.subtotal == Decimal("500.00")
        assert quote.length_discount == Decimal("0.00")
        assert quote.coupon_discount == Decimal("0.00")
        assert quote.taxes == Decimal("50.00")
        assert quote.total == Decimal("550.00")
        assert quote.applied_rules.coupon is None
        assert len(quote.daily_breakdown) == 5

    def test_checkpoints(self, generator, make_coupon):
        weekly = LengthRule(name="Weekly Discount", min_days=7, adjustment_type="percentage", adjustment_value=Decimal("-10"))
        coupon = make_coupon(discount_type="flat", discount_value=Decimal("60"))
        quote = generator.generate_quote(car("50"), date(2025, 11, 3), date(2025, 11, 11), coupon, price_rules=[weekly])
        checkpoints = quote.price_breakdown
        assert checkpoints.base_subtotal == Decimal("400.00")
        assert checkpoints.after_length_discount == Decimal("360.00")
        assert checkpoints.after_coupon_discount == Decimal("300.00")
        assert checkpoints.taxable_amount == Decimal("300.00")
        assert checkpoints.final_total == Decimal("330.00")
        assert quote.total == checkpoints.final_total
        assert quote.applied_rules.length.name == "Weekly Discount"
        assert quote.applied_rules.coupon.discount == Decimal("60.00")

    def test_flat_coupon_larger_than_subtotal(self, generator, make_coupon):
        coupon = make_coupon(code="SAVE50", discount_type="flat", discount_value=Decimal("50"))
        quote = generator.generate_quote(car("10"), date(2025, 11, 3), date(2025, 11, 7), coupon)
        assert quote.subtotal == Decimal("40.00")
        assert quote.coupon_discount == Decimal("40.00")
        assert quote.taxes == Decimal("0.00")
        assert quote.total == Decimal("0.00")

    def test_flat_length_discount_larger_than_subtotal(self, generator, make_coupon):
        flat_length = LengthRule(name="Loyalty Night", min_days=1, adjustment_type="flat", adjustment_value=Decimal("100"))
        coupon = make_coupon(discount_type="flat", discount_value=Decimal("10"))
        quote = generator.generate_quote(car("50"), date(2025, 11, 3), date(2025, 11, 4), coupon, price_rules=[flat_length])
        assert quote.subtotal == Decimal("50.00")
        assert quote.length_discount == Decimal("50.00")
        assert quote.applied_rules.length.discount == Decimal("50.00")
        assert quote.price_breakdown.after_length_discount == Decimal("0.00")
        assert quote.coupon_discount == Decimal("0.00")
        assert quote.taxes == Decimal("0.00")
        assert quote.total == Decimal("0.00")

    @pytest.mark.parametrize("length_value, coupon_type, coupon_value", [
        (Decimal("30"), "flat", Decimal("50")),
        (Decimal("30"), "percentage", Decimal("100")),
        (Decimal("250"), "flat", Decimal("5")),
        (Decimal("10"), "percentage", Decimal("15")),
    ])
    def test_discounts_never_exceed_what_is_left(self, generator, make_coupon, length_value, coupon_type, coupon_value):
        flat_length = LengthRule(name="Short Stay", min_days=2, adjustment_type="flat", adjustment_value=length_value)
        coupon = make_coupon(discount_type=coupon_type, discount_value=coupon_value)
        quote = generator.generate_quote(car("40"), date(2025, 11, 3), date(2025, 11, 5), coupon, price_rules=[flat_length])
        after_length = quote.price_breakdown.after_length_discount
        assert Decimal("0") <= quote.length_discount <= quote.subtotal
        assert Decimal("0") <= quote.coupon_discount <= after_length
        assert quote.taxes >= 0
        assert quote.total >= 0

    def test_coupon_minimum_days_is_reported_not_raised(self, generator, make_coupon):
        coupon = make_coupon(code="LONGTERM", discount_value=Decimal("15"), min_days=7)
        quote = generator.generate_quote(car("100"), date(2025, 11, 3), date(2025, 11, 6), coupon)
        assert quote.coupon_discount == Decimal("0.00")
        assert quote.coupon_error == "Coupon requires minimum 7 days rental"
        assert quote.applied_rules.coupon.code == "LONGTERM"
        assert quote.applied_rules.coupon.error == "Coupon requires minimum 7 days rental"
        assert quote.total == Decimal("330.00")

    def test_totals_round_half_up(self, generator, make_coupon):
        coupon = make_coupon(discount_type="percentage", discount_value=Decimal("10"))
        quote = generator.generate_quote(car("123.45"), date(2025, 11, 3), date(2025, 11, 4), coupon)
        assert quote.subtotal == Decimal("123.45")
        assert quote.coupon_discount == Decimal("12.35")
        assert quote.price_breakdown.after_coupon_discount == Decimal("111.11")
        assert quote.taxes == Decimal("11.11")
        assert quote.total == Decimal("122.22")

    def test_same_inputs_same_quote(self, generator, make_coupon):
        start = datetime(2025, 11, 1, 10, tzinfo=timezone.utc)
        end = start + timedelta(days=9)
        first = generator.generate_quote(car("45"), start, end, make_coupon(), price_rules=DEFAULT_PRICE_RULES)
        second = generator.generate_quote(car("45"), start, end, make_coupon(), price_rules=DEFAULT_PRICE_RULES)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_default_rules_are_used_when_car_has_none(self):
        generator = QuoteGenerator(default_rules=[WeekendRule(adjustment_type="percentage", adjustment_value=Decimal("15"))])
        # 2025-11-01 is a Saturday
        quote = generator.generate_quote(car("100"), date(2025, 11, 1), date(2025, 11, 2))
        assert quote.subtotal == Decimal("115.00")
        assert [r.name for r in quote.applied_rules.seasonal] == ["Weekend Surcharge"]

        quote = generator.generate_quote(car("100"), date(2025, 11, 1), date(2025, 11, 2), price_rules=[])
        assert quote.subtotal == Decimal("100.00")

    def test_missing_price_is_free_by_default(self, generator):
        quote = generator.generate_quote(car(None), date(2025, 11, 3), date(2025, 11, 5))
        assert quote.nightly == Decimal("0")
        assert quote.total == Decimal("0.00")

    def test_missing_price_in_strict_mode(self):
        generator = QuoteGenerator(default_rules=(), require_base_price=True)
        with pytest.raises(MissingPriceError):
            generator.generate_quote(car(None), date(2025, 11, 3), date(2025, 11, 5))

    def test_invalid_range(self, generator):
        with pytest.raises(InvalidRangeError):
            generator.generate_quote(car("100"), date(2025, 11, 5), date(2025, 11, 3))

    def test_json_money_is_numeric(self, generator):
        quote = generator.generate_quote(car("100"), date(2025, 11, 3), date(2025, 11, 5))
        data = quote.model_dump(mode="json")
        assert data["total"] == 220.0
        assert data["daily_breakdown"][0]["date"] == "2025-11-03"

"""Tests for nightly pricing, stay length discounts and taxes."""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.schemas.rental_schemas.price_rule_schemas import LengthRule, SeasonRule, WeekendRule
from app.services.pricing_services.errors import InvalidRangeError
from app.services.pricing_services.price_rule_engine import (
    apply_price_rules,
    calculate_rental_price,
    calculate_taxes,
    is_in_season,
    is_weekend,
    select_length_rule,
)
from app.utils.date_helpers import count_nights
from app.utils.money_helpers import round_money

# November 2025: the 1st is a Saturday, the 5th a Wednesday, the 7th a Friday
SATURDAY = date(2025, 11, 1)
WEDNESDAY = date(2025, 11, 5)
FRIDAY = date(2025, 11, 7)

WEEKEND_15 = WeekendRule(name="Weekend Surcharge", adjustment_type="percentage", adjustment_value=Decimal("15"))
SUMMER_30 = SeasonRule(
    name="Summer Peak Season",
    start_date=date(2025, 6, 1),
    end_date=date(2025, 8, 31),
    adjustment_type="percentage",
    adjustment_value=Decimal("30"),
)
WEEKLY_10 = LengthRule(name="Weekly Discount", min_days=7, adjustment_type="percentage", adjustment_value=Decimal("-10"))
MONTHLY_20 = LengthRule(name="Monthly Discount", min_days=30, adjustment_type="percentage", adjustment_value=Decimal("-20"))


class TestCalendar:

    def test_friday_saturday_sunday_are_weekend(self):
        assert is_weekend(FRIDAY)
        assert is_weekend(SATURDAY)
        assert is_weekend(date(2025, 11, 2))

    def test_weekdays_are_not_weekend(self):
        for day in range(3, 7):  # Monday to Thursday
            assert not is_weekend(date(2025, 11, day))

    def test_weekend_uses_utc_calendar_day(self):
        # 01:00 on Monday in UTC+5 is still Sunday evening in UTC
        night = datetime(2025, 11, 10, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert is_weekend(night)
        assert not is_weekend(date(2025, 11, 10))

    def test_season_window_is_inclusive(self):
        assert is_in_season(date(2025, 6, 1), SUMMER_30)
        assert is_in_season(date(2025, 8, 31), SUMMER_30)
        assert not is_in_season(date(2025, 5, 31), SUMMER_30)
        assert not is_in_season(date(2025, 9, 1), SUMMER_30)


class TestCountNights:

    def test_whole_days(self):
        assert count_nights(date(2025, 11, 1), date(2025, 11, 6)) == 5

    def test_partial_day_rounds_up(self):
        start = datetime(2025, 11, 1, 23, 0, tzinfo=timezone.utc)
        end = datetime(2025, 11, 2, 2, 0, tzinfo=timezone.utc)
        assert count_nights(start, end) == 1

    def test_same_instant_is_zero(self):
        moment = datetime(2025, 11, 1, 10, 0, tzinfo=timezone.utc)
        assert count_nights(moment, moment) == 0

    def test_backwards_range_is_negative(self):
        assert count_nights(date(2025, 11, 6), date(2025, 11, 1)) == -5

    def test_naive_datetimes_are_treated_as_utc(self):
        assert count_nights(datetime(2025, 11, 1, 10), datetime(2025, 11, 6, 10, tzinfo=timezone.utc)) == 5


class TestApplyPriceRules:

    def test_weekday_without_rules_keeps_base_price(self):
        price, applied = apply_price_rules(Decimal("100"), WEDNESDAY, [WEEKEND_15])
        assert price == Decimal("100.00")
        assert applied == []

    def test_saturday_weekend_surcharge(self):
        price, applied = apply_price_rules(Decimal("100"), SATURDAY, [WEEKEND_15])
        assert price == Decimal("115.00")
        assert [r.name for r in applied] == ["Weekend Surcharge"]

    def test_only_first_weekend_rule_applies(self):
        flat_weekend = WeekendRule(name="Flat Weekend", adjustment_type="flat", adjustment_value=Decimal("10"))
        price, applied = apply_price_rules(Decimal("100"), SATURDAY, [WEEKEND_15, flat_weekend])
        assert price == Decimal("115.00")
        assert [r.rule_type for r in applied] == ["weekend"]

        price, applied = apply_price_rules(Decimal("100"), SATURDAY, [flat_weekend, WEEKEND_15])
        assert price == Decimal("110.00")
        assert [r.name for r in applied] == ["Flat Weekend"]

    def test_season_and_weekend_both_apply(self):
        # 2025-07-05 is a Saturday inside the summer season
        price, applied = apply_price_rules(Decimal("100"), date(2025, 7, 5), [WEEKEND_15, SUMMER_30])
        assert price == Decimal("149.50")
        assert [r.rule_type for r in applied] == ["season", "weekend"]

    def test_seasons_stack_in_list_order(self):
        festival = SeasonRule(
            name="Festival",
            start_date=date(2025, 7, 1),
            end_date=date(2025, 7, 10),
            adjustment_type="flat",
            adjustment_value=Decimal("10"),
        )
        wednesday_in_july = date(2025, 7, 2)
        price, _ = apply_price_rules(Decimal("100"), wednesday_in_july, [SUMMER_30, festival])
        assert price == Decimal("140.00")
        price, _ = apply_price_rules(Decimal("100"), wednesday_in_july, [festival, SUMMER_30])
        assert price == Decimal("143.00")

    def test_length_rules_do_not_affect_nightly_price(self):
        price, applied = apply_price_rules(Decimal("100"), WEDNESDAY, [WEEKLY_10])
        assert price == Decimal("100.00")
        assert applied == []

    def test_price_is_rounded_half_up(self):
        markdown = SeasonRule(
            name="Markdown",
            start_date=WEDNESDAY,
            end_date=WEDNESDAY,
            adjustment_type="percentage",
            adjustment_value=Decimal("-50"),
        )
        price, _ = apply_price_rules(Decimal("0.25"), WEDNESDAY, [markdown])
        assert price == Decimal("0.13")


class TestCalculateRentalPrice:

    def test_plain_five_nights(self):
        result = calculate_rental_price(Decimal("100"), date(2025, 11, 3), date(2025, 11, 8), [])
        assert result.nights == 5
        assert result.subtotal == Decimal("500.00")
        assert result.length_discount == Decimal("0.00")
        assert result.applied_length_rule is None
        assert [d.date for d in result.daily_breakdown] == [date(2025, 11, d) for d in range(3, 8)]

    def test_weekend_nights_in_breakdown(self):
        # Wednesday to Saturday: the Friday night carries the surcharge
        result = calculate_rental_price(Decimal("100"), WEDNESDAY, date(2025, 11, 8), [WEEKEND_15])
        prices = [d.price for d in result.daily_breakdown]
        assert prices == [Decimal("100.00"), Decimal("100.00"), Decimal("115.00")]
        assert result.subtotal == Decimal("315.00")

    def test_rules_are_listed_once(self):
        result = calculate_rental_price(Decimal("45"), datetime(2025, 11, 1, 10, tzinfo=timezone.utc),
                                        datetime(2025, 11, 6, 10, tzinfo=timezone.utc), [WEEKEND_15])
        assert result.nights == 5
        assert result.subtotal == Decimal("238.50")
        assert [r.name for r in result.seasonal_and_weekend_rules] == ["Weekend Surcharge"]

    def test_weekly_discount(self):
        result = calculate_rental_price(Decimal("50"), date(2025, 11, 3), date(2025, 11, 11), [WEEKLY_10])
        assert result.nights == 8
        assert result.subtotal == Decimal("400.00")
        assert result.length_discount == Decimal("40.00")
        assert result.applied_length_rule.name == "Weekly Discount"
        assert result.applied_length_rule.discount == Decimal("40.00")

    def test_longest_qualifying_length_rule_wins(self):
        for rules in ([WEEKLY_10, MONTHLY_20], [MONTHLY_20, WEEKLY_10]):
            result = calculate_rental_price(Decimal("100"), date(2025, 10, 1), date(2025, 10, 31), rules)
            assert result.nights == 30
            assert result.applied_length_rule.name == "Monthly Discount"
            assert result.length_discount == result.subtotal * Decimal("0.20")

    def test_below_every_threshold_gets_no_discount(self):
        result = calculate_rental_price(Decimal("100"), date(2025, 11, 3), date(2025, 11, 9), [WEEKLY_10, MONTHLY_20])
        assert result.nights == 6
        assert result.applied_length_rule is None
        assert result.length_discount == Decimal("0")

    def test_flat_length_discount(self):
        flat = LengthRule(name="Three Day Deal", min_days=3, adjustment_type="flat", adjustment_value=Decimal("25"))
        result = calculate_rental_price(Decimal("100"), date(2025, 11, 3), date(2025, 11, 6), [flat])
        assert result.length_discount == Decimal("25.00")

    def test_flat_length_discount_is_capped_at_subtotal(self):
        flat = LengthRule(name="Free Night", min_days=1, adjustment_type="flat", adjustment_value=Decimal("100"))
        result = calculate_rental_price(Decimal("50"), date(2025, 11, 3), date(2025, 11, 4), [flat])
        assert result.subtotal == Decimal("50.00")
        assert result.length_discount == Decimal("50.00")
        assert result.applied_length_rule.discount == Decimal("50.00")

    def test_sub_day_booking_is_one_night(self):
        result = calculate_rental_price(
            Decimal("80"),
            datetime(2025, 11, 4, 21, 0, tzinfo=timezone.utc),
            datetime(2025, 11, 5, 0, 30, tzinfo=timezone.utc),
            [],
        )
        assert result.nights == 1
        assert result.subtotal == Decimal("80.00")

    @pytest.mark.parametrize("start, end", [
        (date(2025, 11, 5), date(2025, 11, 5)),
        (date(2025, 11, 6), date(2025, 11, 1)),
    ])
    def test_empty_or_backwards_range_is_rejected(self, start, end):
        with pytest.raises(InvalidRangeError):
            calculate_rental_price(Decimal("100"), start, end, [])


class TestHelpers:

    def test_select_length_rule_ignores_other_kinds(self):
        assert select_length_rule([WEEKEND_15, SUMMER_30], 40) is None

    def test_taxes(self):
        assert calculate_taxes(Decimal("500"), Decimal("0.10")) == Decimal("50.00")
        assert calculate_taxes(Decimal("111.105"), Decimal("0.10")) == Decimal("11.11")

    def test_round_money_is_half_up(self):
        assert round_money(Decimal("0.125")) == Decimal("0.13")
        assert round_money(2.675) == Decimal("2.68")

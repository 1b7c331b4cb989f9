# app/services/pricing_services/price_rule_engine.py
"""
Nightly pricing.

Every night starts from the car's base rate. Season rules stack in list order,
then a single weekend rule (the first one listed) applies on Friday, Saturday
and Sunday nights. After all nights are summed, at most one length-of-stay
discount is taken: the one with the largest threshold the rental reaches.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from app.schemas.rental_schemas.price_rule_schemas import LengthRule, SeasonRule, WeekendRule
from app.schemas.rental_schemas.quote_schemas import (
    AppliedLengthRule,
    AppliedRule,
    DailyPrice,
    RentalPriceBreakdown,
)
from app.services.pricing_services.errors import InvalidRangeError
from app.utils.date_helpers import count_nights, night_dates, to_utc_date
from app.utils.money_helpers import ZERO, Number, round_money, to_decimal

HUNDRED = Decimal("100")
WEEKEND_DAYS = {4, 5, 6}  # Friday, Saturday, Sunday


def is_weekend(night: date | datetime) -> bool:
    return to_utc_date(night).weekday() in WEEKEND_DAYS


def is_in_season(night: date | datetime, rule: SeasonRule) -> bool:
    night = to_utc_date(night)
    return rule.start_date <= night <= rule.end_date


def _adjust(price: Decimal, rule) -> Decimal:
    if rule.adjustment_type == "percentage":
        return price * (1 + rule.adjustment_value / HUNDRED)
    return price + rule.adjustment_value


def _applied(rule) -> AppliedRule:
    return AppliedRule(
        rule_type=rule.rule_type,
        name=rule.name,
        adjustment_type=rule.adjustment_type,
        adjustment=rule.adjustment_value,
    )


def apply_price_rules(base_price: Number, night: date | datetime, rules: Sequence) -> Tuple[Decimal, List[AppliedRule]]:
    """Price a single night. Returns the rounded price and the rules that fired."""
    price = to_decimal(base_price)
    applied: List[AppliedRule] = []

    for rule in rules:
        if isinstance(rule, SeasonRule) and is_in_season(night, rule):
            price = _adjust(price, rule)
            applied.append(_applied(rule))

    if is_weekend(night):
        weekend_rule = next((r for r in rules if isinstance(r, WeekendRule)), None)
        if weekend_rule is not None:
            price = _adjust(price, weekend_rule)
            applied.append(_applied(weekend_rule))

    return round_money(price), applied


def select_length_rule(rules: Iterable, nights: int) -> Optional[LengthRule]:
    """The length rule with the largest min_days the rental qualifies for."""
    length_rules = sorted(
        (r for r in rules if isinstance(r, LengthRule)),
        key=lambda r: r.min_days,
        reverse=True,
    )
    for rule in length_rules:
        if nights >= rule.min_days:
            return rule
    return None


def length_discount_for(total: Decimal, rule: LengthRule) -> Decimal:
    """Discount a length rule grants on the nightly total, never more than the total itself."""
    if rule.adjustment_type == "percentage":
        discount = total * (abs(rule.adjustment_value) / HUNDRED)
    else:
        discount = rule.adjustment_value
    return min(discount, total)


def calculate_rental_price(
    base_price: Number,
    start_date: date | datetime,
    end_date: date | datetime,
    rules: Sequence,
) -> RentalPriceBreakdown:
    nights = count_nights(start_date, end_date)
    if nights <= 0:
        raise InvalidRangeError("End date must be after start date")

    total = ZERO
    daily_breakdown: List[DailyPrice] = []
    seen: dict[str, AppliedRule] = {}

    for night in night_dates(start_date, nights):
        price, applied = apply_price_rules(base_price, night, rules)
        total += price
        daily_breakdown.append(DailyPrice(date=night, price=price, applied_rules=applied))
        for rule in applied:
            seen.setdefault(rule.name, rule)

    length_discount = ZERO
    applied_length_rule = None
    length_rule = select_length_rule(rules, nights)
    if length_rule is not None:
        length_discount = length_discount_for(total, length_rule)
        applied_length_rule = AppliedLengthRule(
            rule_type=length_rule.rule_type,
            name=length_rule.name,
            adjustment_type=length_rule.adjustment_type,
            adjustment=length_rule.adjustment_value,
            discount=round_money(length_discount),
        )

    return RentalPriceBreakdown(
        base_price=to_decimal(base_price),
        nights=nights,
        subtotal=round_money(total),
        length_discount=round_money(length_discount),
        applied_length_rule=applied_length_rule,
        daily_breakdown=daily_breakdown,
        seasonal_and_weekend_rules=list(seen.values()),
    )


def calculate_taxes(amount: Number, tax_rate: Number) -> Decimal:
    return round_money(to_decimal(amount) * to_decimal(tax_rate))

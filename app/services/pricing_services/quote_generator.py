# app/services/pricing_services/quote_generator.py
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from app.core.config import REQUIRE_BASE_PRICE, TAX_RATE
from app.schemas.rental_schemas.quote_schemas import (
    AppliedCoupon,
    AppliedRules,
    PriceCheckpoints,
    Quote,
)
from app.services.pricing_services.coupon_validator import apply_coupon_discount
from app.services.pricing_services.errors import MinimumDaysNotMetError, MissingPriceError
from app.services.pricing_services.presets import DEFAULT_PRICE_RULES
from app.services.pricing_services.price_rule_engine import calculate_rental_price, calculate_taxes
from app.utils.money_helpers import ZERO, Number, round_money, to_decimal


class QuoteGenerator:
    """
    Builds itemized quotes for a candidate rental.

    The rule set and tax rate are fixed when the generator is built, so two
    calls with the same inputs always produce the same quote. Quotes are never
    stored; persisting a booking is the caller's job.
    """

    def __init__(
        self,
        default_rules: Sequence = DEFAULT_PRICE_RULES,
        tax_rate: Number = TAX_RATE,
        require_base_price: bool = False,
    ):
        self.default_rules = tuple(default_rules)
        self.tax_rate = to_decimal(tax_rate)
        self.require_base_price = require_base_price

    def resolve_base_price(self, car) -> Decimal:
        # Cars without a nightly rate are priced at 0 unless strict mode is on
        base_price = getattr(car, "daily_rental_price", None)
        if not base_price:
            if self.require_base_price:
                raise MissingPriceError("Car has no daily rental price")
            return ZERO
        return to_decimal(base_price)

    def generate_quote(
        self,
        car,
        start_date: date | datetime,
        end_date: date | datetime,
        coupon=None,
        price_rules: Optional[Sequence] = None,
    ) -> Quote:
        base_price = self.resolve_base_price(car)
        rules = self.default_rules if price_rules is None else price_rules

        rental = calculate_rental_price(base_price, start_date, end_date, rules)
        subtotal_after_length_discount = rental.subtotal - rental.length_discount

        coupon_discount = ZERO
        coupon_error = None
        if coupon is not None:
            try:
                coupon_discount = apply_coupon_discount(subtotal_after_length_discount, coupon, rental.nights)
            except MinimumDaysNotMetError as exc:
                coupon_error = str(exc)

        amount_after_discounts = subtotal_after_length_discount - coupon_discount
        taxes = calculate_taxes(amount_after_discounts, self.tax_rate)
        total = round_money(amount_after_discounts + taxes)

        return Quote(
            nightly=base_price,
            nights=rental.nights,
            subtotal=rental.subtotal,
            length_discount=rental.length_discount,
            coupon_discount=round_money(coupon_discount),
            coupon_error=coupon_error,
            taxes=taxes,
            total=total,
            price_breakdown=PriceCheckpoints(
                base_subtotal=rental.subtotal,
                after_length_discount=round_money(subtotal_after_length_discount),
                after_coupon_discount=round_money(amount_after_discounts),
                taxable_amount=round_money(amount_after_discounts),
                final_total=total,
            ),
            applied_rules=AppliedRules(
                length=rental.applied_length_rule,
                seasonal=rental.seasonal_and_weekend_rules,
                coupon=AppliedCoupon(
                    code=coupon.code,
                    discount=round_money(coupon_discount),
                    error=coupon_error,
                ) if coupon is not None else None,
            ),
            daily_breakdown=rental.daily_breakdown,
        )


default_quote_generator = QuoteGenerator(require_base_price=REQUIRE_BASE_PRICE)


def generate_quote(car, start_date, end_date, coupon=None, price_rules=None) -> Quote:
    return default_quote_generator.generate_quote(car, start_date, end_date, coupon, price_rules)

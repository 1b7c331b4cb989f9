# app/services/pricing_services/errors.py


class PricingError(ValueError):
    """Base class for failures raised by the pricing core."""


class InvalidRangeError(PricingError):
    """The rental period has no billable nights."""


class MinimumDaysNotMetError(PricingError):
    """A coupon requires a longer rental than the one being quoted."""

    def __init__(self, min_days: int, nights: int):
        self.min_days = min_days
        self.nights = nights
        super().__init__(f"Coupon requires minimum {min_days} days rental")


class MissingPriceError(PricingError):
    """The car has no nightly rate to price from."""

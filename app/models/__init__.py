# app/models/__init__.py
from app.models.user_models import User, RefreshToken
from app.models.activity_models import UserActivity
from app.models.rental_models.car_models import Car
from app.models.rental_models.price_rule_models import PriceRule
from app.models.rental_models.coupon_models import Coupon
from app.models.rental_models.booking_models import Booking

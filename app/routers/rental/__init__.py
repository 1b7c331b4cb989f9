# app/routers/rental/__init__.py
from fastapi import APIRouter
from .cars_router import router as cars_router
from .bookings_router import router as bookings_router
from .coupons_router import router as coupons_router
from .price_rules_router import router as price_rules_router

router = APIRouter(prefix="/api")

router.include_router(cars_router)
router.include_router(bookings_router)
router.include_router(coupons_router)
router.include_router(price_rules_router)

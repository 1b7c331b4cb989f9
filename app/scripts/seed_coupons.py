# app/scripts/seed_coupons.py
"""
Replace every coupon row with the default coupon set.
Run with: python -m app.scripts.seed_coupons
"""
import asyncio

from sqlalchemy import delete

from app.core.db import AsyncSessionLocal, init_models
from app.models.rental_models.coupon_models import Coupon
from app.services.pricing_services.presets import DEFAULT_COUPONS


async def seed_coupons():
    await init_models()
    async with AsyncSessionLocal() as session:
        await session.execute(delete(Coupon))
        print("Cleared existing coupons")

        for coupon in DEFAULT_COUPONS:
            session.add(Coupon(**coupon.model_dump(), usage_count=0))
        await session.commit()
        print(f"Inserted {len(DEFAULT_COUPONS)} coupons\n")

        print("Available coupons:")
        for coupon in DEFAULT_COUPONS:
            discount = f"{coupon.discount_value}%" if coupon.discount_type == "percentage" else f"${coupon.discount_value}"
            print(f"   {coupon.code}: {discount} - {coupon.description}")


if __name__ == "__main__":
    asyncio.run(seed_coupons())
